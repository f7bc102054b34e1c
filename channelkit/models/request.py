"""Generation request - one immutable value per submission."""

from dataclasses import dataclass
from enum import Enum
from io import BytesIO
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from ..config import (
    DEFAULT_LANGUAGE,
    DEFAULT_TONE,
    YOUTUBE_BANNER_SIZE,
)
from ..errors import InvalidRequestError


class AssetKind(Enum):
    LOGO = "Logo"
    BANNER = "Banner"
    THUMBNAIL = "Thumbnail"
    DESCRIPTION = "Description"
    INTRO = "Intro"
    ABOUT = "About"

    @property
    def is_async(self) -> bool:
        """Video generation is a long-running remote operation that must be polled."""
        return self is AssetKind.INTRO

    @property
    def is_text(self) -> bool:
        return self in (AssetKind.DESCRIPTION, AssetKind.ABOUT)


@dataclass(frozen=True)
class ReferenceImage:
    """An uploaded image passed to the generator alongside the prompt."""
    data: bytes
    mime_type: str

    @classmethod
    def from_bytes(cls, data: bytes) -> "ReferenceImage":
        """Detect the mime type by opening the image."""
        try:
            img = Image.open(BytesIO(data))
        except UnidentifiedImageError as e:
            raise InvalidRequestError("The uploaded file is not a supported image.") from e
        mime_type = Image.MIME.get(img.format or "", "image/png")
        return cls(data=data, mime_type=mime_type)

    @classmethod
    def from_path(cls, path: str | Path) -> "ReferenceImage":
        path = Path(path)
        if not path.is_file():
            raise InvalidRequestError(f"Image file not found: {path.name}")
        return cls.from_bytes(path.read_bytes())


def _blank(value: str | None) -> bool:
    return not value or not value.strip()


@dataclass(frozen=True)
class LogoPayload:
    prompt: str

    def validate(self) -> None:
        if _blank(self.prompt):
            raise InvalidRequestError("Please enter a description for your logo.")

    def describe(self) -> str:
        return self.prompt


@dataclass(frozen=True)
class BannerPayload:
    prompt: str
    logo: ReferenceImage | None = None
    width: int = YOUTUBE_BANNER_SIZE.width
    height: int = YOUTUBE_BANNER_SIZE.height

    def validate(self) -> None:
        if _blank(self.prompt):
            raise InvalidRequestError("Please enter a description for your banner.")
        if self.width <= 0 or self.height <= 0:
            raise InvalidRequestError("Banner width and height must be positive.")

    def describe(self) -> str:
        return self.prompt

    @property
    def dimensions(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(frozen=True)
class ThumbnailPayload:
    song_title: str
    artist: str
    image: ReferenceImage | None

    def validate(self) -> None:
        if _blank(self.song_title) or _blank(self.artist) or self.image is None:
            raise InvalidRequestError("Please fill in all fields and upload an image.")

    def describe(self) -> str:
        return f"Title: {self.song_title}, Artist: {self.artist}"


@dataclass(frozen=True)
class DescriptionPayload:
    song_title: str
    artist: str
    language: str = DEFAULT_LANGUAGE

    def validate(self) -> None:
        if _blank(self.song_title) or _blank(self.artist):
            raise InvalidRequestError("Please provide both song title and artist name.")

    def describe(self) -> str:
        return f"Description: {self.song_title} by {self.artist} ({self.language})"


@dataclass(frozen=True)
class AboutPayload:
    channel_name: str
    category: str
    tone: str = DEFAULT_TONE
    language: str = DEFAULT_LANGUAGE

    def validate(self) -> None:
        if _blank(self.channel_name) or _blank(self.category):
            raise InvalidRequestError("Please provide both a channel name and a category.")

    def describe(self) -> str:
        return f"About: {self.channel_name} ({self.category}, {self.tone}, {self.language})"


@dataclass(frozen=True)
class IntroPayload:
    channel_name: str
    logo: ReferenceImage | None

    def validate(self) -> None:
        if _blank(self.channel_name) or self.logo is None:
            raise InvalidRequestError("Please provide a channel name and upload a logo.")

    def describe(self) -> str:
        return f"Intro for: {self.channel_name}"


Payload = LogoPayload | BannerPayload | ThumbnailPayload | DescriptionPayload | AboutPayload | IntroPayload

PAYLOAD_TYPES: dict[AssetKind, type] = {
    AssetKind.LOGO: LogoPayload,
    AssetKind.BANNER: BannerPayload,
    AssetKind.THUMBNAIL: ThumbnailPayload,
    AssetKind.DESCRIPTION: DescriptionPayload,
    AssetKind.INTRO: IntroPayload,
    AssetKind.ABOUT: AboutPayload,
}


@dataclass(frozen=True)
class GenerationRequest:
    """What to generate. Created per submission, never mutated."""
    kind: AssetKind
    payload: Payload

    @classmethod
    def of(cls, payload: Payload) -> "GenerationRequest":
        """Build a request, inferring the kind from the payload type."""
        for kind, payload_type in PAYLOAD_TYPES.items():
            if isinstance(payload, payload_type):
                return cls(kind=kind, payload=payload)
        raise InvalidRequestError(f"Unsupported payload: {type(payload).__name__}")

    def validate(self) -> None:
        """Raise InvalidRequestError if the request cannot be sent upstream."""
        expected = PAYLOAD_TYPES.get(self.kind)
        if expected is None or not isinstance(self.payload, expected):
            raise InvalidRequestError(
                f"{type(self.payload).__name__} is not a valid payload for a {getattr(self.kind, 'value', self.kind)} request."
            )
        self.payload.validate()

    @property
    def prompt(self) -> str:
        """Human-readable summary recorded in history."""
        return self.payload.describe()
