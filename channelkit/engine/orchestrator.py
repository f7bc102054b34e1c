"""Job orchestrator - drives one generation request from submission to a terminal state."""

import asyncio
import logging
import time
from pathlib import Path
from typing import TYPE_CHECKING, Awaitable, Callable, TypeVar

from .. import config
from ..clients.base import RemoteJobClient
from ..errors import InvalidRequestError, JobTimeoutError, RemoteOperationError, classify
from ..models.artifact import Artifact
from ..models.history import HistoryItem, now_utc
from ..models.job import CANCELLABLE_STATUSES, JobHandle, JobStatus, Phase
from ..models.request import GenerationRequest
from ..utils import download_filename, new_id

if TYPE_CHECKING:
    from ..services.history import HistoryStore

logger = logging.getLogger(__name__)

UpdateCallback = Callable[[JobHandle], None]
T = TypeVar("T")


class JobOrchestrator:
    """Submit a request, poll it if it is long-running, save and record the result.

    Image and text kinds:  Idle -> Submitting -> Succeeded | Failed
    Video (Intro):         Idle -> Submitting -> Polling -> Succeeded | Failed | TimedOut
    Any non-terminal job can be cancelled while Submitting or Polling.

    Remote failures are never raised to the caller: they end the job and are
    attached to the handle as a ClassifiedError.
    """

    def __init__(
        self,
        client: RemoteJobClient,
        history: "HistoryStore | None" = None,
        output_dir: str | Path = config.OUTPUT_DIR,
        poll_interval: float = config.POLL_INTERVAL,
        max_wait: float = config.MAX_WAIT,
        max_attempts: int | None = config.MAX_POLL_ATTEMPTS,
        on_update: UpdateCallback | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.client = client
        self.history = history
        self.output_dir = Path(output_dir)
        self.poll_interval = poll_interval
        self.max_wait = max_wait
        self.max_attempts = max_attempts
        self.on_update = on_update
        self.clock = clock

    def submit(self, request: GenerationRequest) -> JobHandle:
        """Validate and start the job. Must be called from a running event loop.

        An invalid request comes back already Failed (InvalidInput) and the
        remote service is never called.
        """
        loop = asyncio.get_running_loop()
        handle = JobHandle(id=new_id(), request=request, started_at=self.clock())

        try:
            request.validate()
        except InvalidRequestError as e:
            self._finish_with_error(handle, JobStatus.FAILED, e)
            return handle

        self._move(handle, JobStatus.SUBMITTING, Phase.SUBMITTING)
        handle.task = loop.create_task(self._drive(handle), name=f"job-{handle.id}")
        return handle

    def cancel(self, handle: JobHandle) -> bool:
        """Cancel a Submitting/Polling job. Returns False if it already finished."""
        if handle.status not in CANCELLABLE_STATUSES:
            return False

        handle.cancel_event.set()
        self._move(handle, JobStatus.CANCELLED, Phase.CANCELLED)
        self._release(handle)
        logger.info(f"Job {handle.id} ({handle.request.kind.value}) cancelled")
        return True

    async def wait(self, handle: JobHandle) -> JobHandle:
        """Wait until the job's task has finished."""
        if handle.task is not None:
            await handle.task
        return handle

    async def run(self, request: GenerationRequest) -> JobHandle:
        """Submit and wait."""
        return await self.wait(self.submit(request))

    # --- Job task ---

    async def _drive(self, handle: JobHandle) -> None:
        request = handle.request
        try:
            if request.kind.is_async:
                artifact = await self._run_polled(handle)
            else:
                self._set_phase(handle, Phase.GENERATING)
                artifact = await self.client.generate(request)

            if artifact is None or handle.cancel_requested:
                return
            await self._complete(handle, artifact)

        except asyncio.CancelledError:
            # Task cancelled from outside (e.g. loop shutdown)
            if not handle.is_terminal:
                handle.cancel_event.set()
                self._move(handle, JobStatus.CANCELLED, Phase.CANCELLED)
                self._release(handle)
            raise
        except JobTimeoutError as e:
            if handle.cancel_requested:
                return
            # TimedOut is only reachable from Polling; a hung submit fails instead
            status = JobStatus.TIMED_OUT if handle.status is JobStatus.POLLING else JobStatus.FAILED
            self._finish_with_error(handle, status, e)
        except Exception as e:
            if handle.cancel_requested:
                logger.info(f"Job {handle.id}: discarding error after cancel: {e!r}")
                return
            self._finish_with_error(handle, JobStatus.FAILED, e)

    async def _run_polled(self, handle: JobHandle) -> Artifact | None:
        """Submit a long-running operation and poll it. None means cancelled.

        Every remote call is bounded by the job's deadline, so a call that
        never returns still ends the job.
        """
        deadline = handle.started_at + self.max_wait

        operation_ref = await self._bounded(handle, deadline, self.client.submit(handle.request))
        if handle.cancel_requested:
            return None
        handle.result_ref = operation_ref

        self._move(handle, JobStatus.POLLING, Phase.WAITING)

        while True:
            if self.max_attempts is not None and handle.attempts >= self.max_attempts:
                raise JobTimeoutError(f"Job {handle.id} gave up after {handle.attempts} status checks")
            remaining = deadline - self.clock()
            if remaining <= 0:
                raise self._deadline_error(handle)

            if await self._wait_or_cancel(handle, min(self.poll_interval, remaining)):
                return None

            result = await self._bounded(handle, deadline, self.client.poll(handle.result_ref))
            handle.attempts += 1
            if handle.cancel_requested:
                return None
            logger.debug(f"Job {handle.id} poll {handle.attempts}: done={result.done}")
            self._notify(handle)

            if self.clock() >= deadline:
                raise self._deadline_error(handle)
            if not result.done:
                continue
            if result.error:
                raise RemoteOperationError(result.error)
            if not result.artifact_ref:
                raise RemoteOperationError("Video generation failed to produce a download link")

            self._set_phase(handle, Phase.DOWNLOADING)
            data = await self._bounded(handle, deadline, self.client.fetch(result.artifact_ref))
            if handle.cancel_requested:
                return None
            return Artifact(kind=handle.request.kind, data=data, mime_type="video/mp4")

    async def _bounded(self, handle: JobHandle, deadline: float, call: Awaitable[T]) -> T:
        """Await a remote call, giving up with JobTimeoutError at the deadline."""
        remaining = deadline - self.clock()
        if remaining <= 0:
            if asyncio.iscoroutine(call):
                call.close()
            raise self._deadline_error(handle)
        try:
            return await asyncio.wait_for(call, timeout=remaining)
        except asyncio.TimeoutError:
            raise self._deadline_error(handle) from None

    def _deadline_error(self, handle: JobHandle) -> JobTimeoutError:
        return JobTimeoutError(f"Job {handle.id} exceeded its maximum wait of {self.max_wait:g}s")

    async def _wait_or_cancel(self, handle: JobHandle, delay: float) -> bool:
        """Sleep for `delay`, waking early on cancel. Returns True if cancelled."""
        try:
            await asyncio.wait_for(handle.cancel_event.wait(), timeout=delay)
            return True
        except asyncio.TimeoutError:
            return False

    # --- Terminal handling ---

    async def _complete(self, handle: JobHandle, artifact: Artifact) -> None:
        """Save the artifact, record it in history, mark the job Succeeded."""
        self._set_phase(handle, Phase.SAVING)
        path = await asyncio.to_thread(self._save, handle, artifact)
        handle.artifact_path = path
        if handle.cancel_requested:
            # Cancelled while the file was being written
            self._release(handle)
            return

        item = HistoryItem(
            id=handle.id,
            type=handle.request.kind,
            artifact_ref=str(path),
            prompt=handle.request.prompt,
            created_at=now_utc(),
        )
        # No await past this point, so a cancel cannot land between append and Succeeded
        if self.history is not None:
            try:
                self.history.append(item)
            except Exception:
                self._release(handle)
                raise

        handle.artifact = artifact
        handle.history_item = item
        self._move(handle, JobStatus.SUCCEEDED, Phase.DONE)
        logger.info(f"Job {handle.id} ({handle.request.kind.value}) done: {path}")

    def _save(self, handle: JobHandle, artifact: Artifact) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_dir / download_filename(artifact.kind.value, handle.id, artifact.extension)
        try:
            path.write_bytes(artifact.data)
        except OSError:
            path.unlink(missing_ok=True)
            raise
        return path

    def _release(self, handle: JobHandle) -> None:
        """Drop any result of an unsuccessful job, including a file already written."""
        if handle.artifact_path is not None:
            handle.artifact_path.unlink(missing_ok=True)
            handle.artifact_path = None
        handle.artifact = None

    def _finish_with_error(self, handle: JobHandle, status: JobStatus, exc: BaseException) -> None:
        error = classify(exc)
        handle.error = error
        phase = Phase.TIMED_OUT if status is JobStatus.TIMED_OUT else Phase.FAILED
        logger.warning(
            f"Job {handle.id} ({handle.request.kind.value}) {status.value}: {error.kind.value} ({exc!r})"
        )
        self._move(handle, status, phase)

    # --- Progress ---

    def _move(self, handle: JobHandle, status: JobStatus, phase: str) -> None:
        handle.move_to(status)
        handle.phase = phase
        self._notify(handle)

    def _set_phase(self, handle: JobHandle, phase: str) -> None:
        handle.phase = phase
        self._notify(handle)

    def _notify(self, handle: JobHandle) -> None:
        if self.on_update is None:
            return
        try:
            self.on_update(handle)
        except Exception:
            logger.exception(f"Progress callback failed for job {handle.id}")
