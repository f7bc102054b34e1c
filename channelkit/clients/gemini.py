"""Gemini client - Imagen, Gemini image/text and Veo video generation."""

import asyncio
import logging
from io import BytesIO
from typing import Any

import requests
from google import genai
from google.genai import types
from PIL import Image

from .base import PollResult, RemoteJobClient
from .llm import LLMClient
from .. import config
from .. import prompts
from ..errors import MissingApiKeyError, RemoteOperationError
from ..models.artifact import Artifact
from ..models.request import AssetKind, GenerationRequest, ReferenceImage

logger = logging.getLogger(__name__)


class GeminiClient(RemoteJobClient):
    """Client for generating channel assets via Google's generative models.

    - Logo, and Banner without a logo: Imagen (prompt only, fixed aspect ratio)
    - Banner with a logo, Thumbnail: Gemini image model (prompt + reference image)
    - Description, About, Thumbnail theme: Gemini text model, or an LLMClient if given
    - Intro: Veo long-running operation, downloaded once done
    """

    def __init__(
        self,
        api_key: str | None,
        llm: LLMClient | None = None,
        text_model: str = config.GEMINI_TEXT_MODEL,
        imagen_model: str = config.IMAGEN_MODEL,
        image_model: str = config.GEMINI_IMAGE_MODEL,
        video_model: str = config.VEO_MODEL,
        download_timeout: float = config.DOWNLOAD_TIMEOUT,
    ):
        self.api_key = api_key
        # No key: each call raises MissingApiKeyError
        self.client = genai.Client(api_key=api_key) if api_key else None
        self.llm = llm
        self.text_model = text_model
        self.imagen_model = imagen_model
        self.image_model = image_model
        self.video_model = video_model
        self.download_timeout = download_timeout

    def _require_client(self) -> genai.Client:
        if self.client is None:
            raise MissingApiKeyError("Gemini")
        return self.client

    # --- Single-call kinds ---

    async def generate(self, request: GenerationRequest) -> Artifact:
        kind = request.kind
        payload = request.payload

        if kind is AssetKind.LOGO:
            data, mime_type = await self._generate_image(
                prompts.logo_prompt(payload), config.YOUTUBE_LOGO_SIZE.aspect_ratio
            )
        elif kind is AssetKind.BANNER:
            prompt = prompts.banner_prompt(payload)
            if payload.logo is not None:
                data, mime_type = await self._edit_image(prompt, payload.logo)
            else:
                data, mime_type = await self._generate_image(prompt, config.YOUTUBE_BANNER_SIZE.aspect_ratio)
        elif kind is AssetKind.THUMBNAIL:
            theme = await self._generate_text(prompts.thumbnail_theme_prompt(payload), "thumbnail theme")
            data, mime_type = await self._edit_image(prompts.thumbnail_prompt(payload, theme), payload.image)
        elif kind is AssetKind.DESCRIPTION:
            text = await self._generate_text(prompts.description_prompt(payload), "description")
            return Artifact.from_text(kind, text)
        elif kind is AssetKind.ABOUT:
            text = await self._generate_text(prompts.about_prompt(payload), "about")
            return Artifact.from_text(kind, text)
        elif kind is AssetKind.INTRO:
            raise ValueError("Intro videos are long-running; use submit() and poll()")
        else:
            raise ValueError(f"Unknown asset kind: {kind}")

        return Artifact(kind=kind, data=data, mime_type=mime_type)

    async def _generate_image(self, prompt: str, aspect_ratio: str) -> tuple[bytes, str]:
        """Prompt-only image via Imagen."""
        client = self._require_client()
        response = await client.aio.models.generate_images(
            model=self.imagen_model,
            prompt=prompt,
            config=types.GenerateImagesConfig(
                number_of_images=1,
                output_mime_type="image/png",
                aspect_ratio=aspect_ratio,
            ),
        )

        if response.generated_images:
            image = response.generated_images[0].image
            if image is not None and image.image_bytes:
                return image.image_bytes, image.mime_type or "image/png"

        raise RemoteOperationError("No image generated by Imagen")

    async def _edit_image(self, prompt: str, reference: ReferenceImage) -> tuple[bytes, str]:
        """Image from prompt + reference image via the Gemini image model."""
        client = self._require_client()

        # Build multimodal content: text prompt + image
        img = Image.open(BytesIO(reference.data))
        contents = [prompt, img]

        response = await client.aio.models.generate_content(
            model=self.image_model,
            contents=contents,
            config=types.GenerateContentConfig(
                response_modalities=["IMAGE", "TEXT"],
            ),
        )

        # Extract generated image from response
        if response.candidates:
            content = response.candidates[0].content
            for part in (content.parts if content else None) or []:
                if part.inline_data and (part.inline_data.mime_type or "").startswith("image/"):
                    return part.inline_data.data, part.inline_data.mime_type

        raise RemoteOperationError("No image generated by Gemini")

    async def _generate_text(self, prompt: str, label: str = "") -> str:
        if self.llm is not None:
            text = await self.llm.call(prompt, label=label)
        else:
            client = self._require_client()
            response = await client.aio.models.generate_content(
                model=self.text_model,
                contents=prompt,
            )
            text = (response.text or "").strip()

        if not text:
            raise RemoteOperationError("No text generated")
        return text

    # --- Long-running kinds ---

    async def submit(self, request: GenerationRequest) -> str:
        if request.kind is not AssetKind.INTRO:
            raise ValueError(f"{request.kind.value} is not a long-running kind; use generate()")

        client = self._require_client()
        payload = request.payload
        operation = await client.aio.models.generate_videos(
            model=self.video_model,
            prompt=prompts.intro_prompt(payload),
            image=types.Image(
                image_bytes=payload.logo.data,
                mime_type=payload.logo.mime_type,
            ),
            config=types.GenerateVideosConfig(
                number_of_videos=1,
                resolution="720p",
                aspect_ratio=config.YOUTUBE_INTRO_SIZE.aspect_ratio,
            ),
        )

        if not operation.name:
            raise RemoteOperationError("Video generation was not accepted")
        logger.info(f"Video operation started: {operation.name}")
        return operation.name

    async def poll(self, operation_ref: str) -> PollResult:
        client = self._require_client()
        operation = await client.aio.operations.get(types.GenerateVideosOperation(name=operation_ref))

        if not operation.done:
            return PollResult(done=False)

        if operation.error:
            return PollResult(done=True, error=_operation_error_message(operation.error))

        videos = operation.response.generated_videos if operation.response else None
        uri = None
        if videos and videos[0].video is not None:
            uri = videos[0].video.uri
        return PollResult(done=True, artifact_ref=uri)

    async def fetch(self, artifact_ref: str) -> bytes:
        self._require_client()

        def _download() -> bytes:
            response = requests.get(
                artifact_ref,
                headers={"x-goog-api-key": self.api_key},
                timeout=self.download_timeout,
            )
            response.raise_for_status()
            return response.content

        return await asyncio.to_thread(_download)


def _operation_error_message(error: Any) -> str:
    """Operation errors come back as a google.rpc.Status-shaped dict."""
    if isinstance(error, dict):
        return str(error.get("message") or error)
    return str(error)
