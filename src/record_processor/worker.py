"""Runs record processing in the background, detached from upload requests."""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from uuid import UUID

from record_processor.db_models import RecordStatus
from record_processor.handlers import RecordProcessingHandler

logger = logging.getLogger(__name__)


class BackgroundRunner:
    """
    Starts one processing run per uploaded recording.

    Without `max_concurrent_runs` every launch gets its own daemon thread and
    the number of concurrent runs is unbounded. With it, launches queue on a
    thread pool of that size. Runs cannot be cancelled once started.
    """

    def __init__(
        self,
        handler: RecordProcessingHandler,
        max_concurrent_runs: int | None = None,
    ):
        self._handler = handler
        self._executor = (
            ThreadPoolExecutor(
                max_workers=max_concurrent_runs, thread_name_prefix="record-run"
            )
            if max_concurrent_runs
            else None
        )

    def launch(self, record_id: UUID, source_url: str) -> Future[RecordStatus | None]:
        """
        Starts processing a record without waiting for it.

        Args:
            record_id: The record the uploaded recording belongs to.
            source_url: URL the remote service downloads the audio from.

        Returns:
            A future resolving to the terminal status written, or None when
            no terminal write applied. Request handlers drop it; tests use it
            to wait for the run.
        """
        logger.info(
            "Launching record processing",
            extra={
                "record_id": str(record_id),
                "bounded": self._executor is not None,
            },
        )

        if self._executor is not None:
            return self._executor.submit(self._handler.process, record_id, source_url)

        future: Future[RecordStatus | None] = Future()
        thread = threading.Thread(
            target=self._run,
            args=(future, record_id, source_url),
            name=f"record-run-{record_id}",
            daemon=True,
        )
        thread.start()
        return future

    def shutdown(self) -> None:
        """Waits for queued runs when a pool is configured."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)

    def _run(
        self, future: Future[RecordStatus | None], record_id: UUID, source_url: str
    ) -> None:
        if not future.set_running_or_notify_cancel():
            return
        try:
            future.set_result(self._handler.process(record_id, source_url))
        except Exception as e:
            future.set_exception(e)
