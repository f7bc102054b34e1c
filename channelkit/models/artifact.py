"""Artifact model - a generated image, text or video."""

from dataclasses import dataclass

from .request import AssetKind

EXTENSIONS: dict[str, str] = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/webp": "webp",
    "video/mp4": "mp4",
    "text/plain": "txt",
}


@dataclass(frozen=True)
class Artifact:
    """Generated output returned by the remote service."""
    kind: AssetKind
    data: bytes
    mime_type: str

    @classmethod
    def from_text(cls, kind: AssetKind, text: str) -> "Artifact":
        return cls(kind=kind, data=text.encode("utf-8"), mime_type="text/plain")

    @property
    def text(self) -> str | None:
        """Decoded text for Description/About, None for binary artifacts."""
        if self.mime_type != "text/plain":
            return None
        return self.data.decode("utf-8")

    @property
    def extension(self) -> str:
        if self.mime_type in EXTENSIONS:
            return EXTENSIONS[self.mime_type]
        # Intro is always a video, images default to png
        return "mp4" if self.kind is AssetKind.INTRO else "png"
