"""Remote job client interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..models.artifact import Artifact
from ..models.request import GenerationRequest


@dataclass(frozen=True)
class PollResult:
    """Status of a long-running remote operation."""
    done: bool
    artifact_ref: str | None = None  # download location once done
    error: str | None = None  # failure reported by the remote operation


class RemoteJobClient(ABC):
    """Boundary to the generative-AI service.

    Image and text kinds go through `generate` (one call, one result). Video
    goes through `submit` -> `poll`... -> `fetch`. Any method may raise; the
    orchestrator classifies whatever comes out.
    """

    @abstractmethod
    async def generate(self, request: GenerationRequest) -> Artifact:
        """Generate an artifact in a single call."""

    @abstractmethod
    async def submit(self, request: GenerationRequest) -> str:
        """Start a long-running operation and return its reference."""

    @abstractmethod
    async def poll(self, operation_ref: str) -> PollResult:
        """Check a long-running operation."""

    @abstractmethod
    async def fetch(self, artifact_ref: str) -> bytes:
        """Download a finished artifact."""
