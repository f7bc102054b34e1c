"""Shared pytest fixtures for channelkit tests."""

from __future__ import annotations

import asyncio
from io import BytesIO
from pathlib import Path
from typing import Callable

import pytest
from PIL import Image

from channelkit.clients.base import PollResult, RemoteJobClient
from channelkit.engine.orchestrator import JobOrchestrator
from channelkit.models import Artifact, GenerationRequest, ReferenceImage
from channelkit.services.history import HistoryStore

# ============================================================================
# Fake remote client
# ============================================================================


class FakeRemoteClient(RemoteJobClient):
    """Scriptable RemoteJobClient that records every call."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.image_data = b"fake-image"
        self.text = "Generated text #music"
        self.video_data = b"fake-video"
        self.operation_ref = "operations/fake-1"
        self.poll_results: list[PollResult] = []
        self.default_poll = PollResult(done=False)
        self.generate_error: Exception | None = None
        self.submit_error: Exception | None = None
        self.poll_error: Exception | None = None
        self.fetch_error: Exception | None = None
        self.on_poll: Callable[[], None] | None = None
        self.delays: dict[str, float] = {}  # call name -> seconds to stall before answering

    async def _stall(self, name: str) -> None:
        if name in self.delays:
            await asyncio.sleep(self.delays[name])

    def count(self, name: str) -> int:
        return self.calls.count(name)

    async def generate(self, request: GenerationRequest) -> Artifact:
        self.calls.append("generate")
        await self._stall("generate")
        if self.generate_error is not None:
            raise self.generate_error
        if request.kind.is_text:
            return Artifact.from_text(request.kind, self.text)
        return Artifact(kind=request.kind, data=self.image_data, mime_type="image/png")

    async def submit(self, request: GenerationRequest) -> str:
        self.calls.append("submit")
        await self._stall("submit")
        if self.submit_error is not None:
            raise self.submit_error
        return self.operation_ref

    async def poll(self, operation_ref: str) -> PollResult:
        self.calls.append("poll")
        await self._stall("poll")
        if self.on_poll is not None:
            self.on_poll()
        if self.poll_error is not None:
            raise self.poll_error
        if self.poll_results:
            return self.poll_results.pop(0)
        return self.default_poll

    async def fetch(self, artifact_ref: str) -> bytes:
        self.calls.append("fetch")
        await self._stall("fetch")
        if self.fetch_error is not None:
            raise self.fetch_error
        return self.video_data


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def fake_client() -> FakeRemoteClient:
    return FakeRemoteClient()


@pytest.fixture
def history_path(tmp_path: Path) -> Path:
    return tmp_path / "state" / "history.json"


@pytest.fixture
def history(history_path: Path) -> HistoryStore:
    return HistoryStore(history_path, limit=10)


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    return tmp_path / "output"


@pytest.fixture
def make_orchestrator(
    fake_client: FakeRemoteClient, history: HistoryStore, output_dir: Path
) -> Callable[..., JobOrchestrator]:
    """Orchestrator factory with fast polling defaults."""

    def _make(**kwargs) -> JobOrchestrator:
        kwargs.setdefault("poll_interval", 0)
        kwargs.setdefault("max_wait", 5.0)
        kwargs.setdefault("max_attempts", None)
        return JobOrchestrator(fake_client, history, output_dir=output_dir, **kwargs)

    return _make


@pytest.fixture
def png_bytes() -> bytes:
    img = Image.new("RGBA", (4, 4), (255, 0, 0, 255))
    output = BytesIO()
    img.save(output, format="PNG")
    return output.getvalue()


@pytest.fixture
def reference_image(png_bytes: bytes) -> ReferenceImage:
    return ReferenceImage.from_bytes(png_bytes)
