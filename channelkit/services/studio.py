"""Studio - caller-facing API over orchestrators and history."""

import logging
from pathlib import Path

from .history import HistoryStore
from .. import config
from ..clients.base import RemoteJobClient
from ..clients.gemini import GeminiClient
from ..clients.llm import LLMClient
from ..engine.orchestrator import JobOrchestrator, UpdateCallback
from ..models.history import HistoryItem
from ..models.job import JobHandle
from ..models.request import GenerationRequest

logger = logging.getLogger(__name__)


class Studio:
    """Submit generation requests and browse what was generated.

    Each request gets its own JobOrchestrator; the only shared state between
    in-flight jobs is the HistoryStore.
    """

    def __init__(
        self,
        client: RemoteJobClient,
        history: HistoryStore,
        output_dir: str | Path = config.OUTPUT_DIR,
        poll_interval: float = config.POLL_INTERVAL,
        max_wait: float = config.MAX_WAIT,
        max_attempts: int | None = config.MAX_POLL_ATTEMPTS,
    ):
        self.client = client
        self.history = history
        self.output_dir = Path(output_dir)
        self.poll_interval = poll_interval
        self.max_wait = max_wait
        self.max_attempts = max_attempts
        self._active: dict[str, JobOrchestrator] = {}

    @classmethod
    def from_config(cls) -> "Studio":
        """Build a Studio from environment configuration."""
        llm = None
        if config.TEXT_PROVIDER == "openai":
            llm = LLMClient(api_key=config.OPENAI_API_KEY, model=config.OPENAI_MODEL)
        elif config.TEXT_PROVIDER != "gemini":
            raise ValueError(f"Invalid CHANNELKIT_TEXT_PROVIDER: {config.TEXT_PROVIDER}. Valid: gemini, openai")

        client = GeminiClient(api_key=config.GEMINI_API_KEY, llm=llm)
        history = HistoryStore(config.HISTORY_PATH, limit=config.HISTORY_LIMIT)
        return cls(client, history, output_dir=config.OUTPUT_DIR)

    def submit_request(self, request: GenerationRequest, on_update: UpdateCallback | None = None) -> JobHandle:
        """Start a job. Observe it via `on_update` or by inspecting the handle."""
        orchestrator = JobOrchestrator(
            self.client,
            self.history,
            output_dir=self.output_dir,
            poll_interval=self.poll_interval,
            max_wait=self.max_wait,
            max_attempts=self.max_attempts,
            on_update=on_update,
        )
        handle = orchestrator.submit(request)
        if handle.task is not None:
            self._active[handle.id] = orchestrator
            handle.task.add_done_callback(lambda _: self._active.pop(handle.id, None))
        return handle

    def cancel_request(self, handle: JobHandle) -> bool:
        orchestrator = self._active.get(handle.id)
        if orchestrator is None:
            return False
        return orchestrator.cancel(handle)

    async def run_request(self, request: GenerationRequest, on_update: UpdateCallback | None = None) -> JobHandle:
        """Submit and wait for a terminal state."""
        handle = self.submit_request(request, on_update)
        if handle.task is not None:
            await handle.task
        return handle

    def active_jobs(self) -> list[str]:
        return list(self._active)

    def get_history(self) -> list[HistoryItem]:
        return self.history.list()

    def clear_history(self) -> None:
        logger.info(f"Clearing {len(self.history)} history items")
        self.history.clear()
