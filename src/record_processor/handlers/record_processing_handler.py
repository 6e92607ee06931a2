"""Handler running one recording through Tingwu and writing back the outcome."""

import logging
from uuid import UUID

from record_processor.db_models import RecordStatus
from record_processor.domain import JobSubmitter, ResultParser, TaskPoller
from record_processor.exceptions import RecordProcessingError
from record_processor.infrastructure.interfaces import RecordStore

logger = logging.getLogger(__name__)


class RecordProcessingHandler:
    """Orchestrates submit, poll, parse and the single terminal write for a record."""

    def __init__(
        self,
        submitter: JobSubmitter,
        poller: TaskPoller,
        parser: ResultParser,
        record_store: RecordStore,
    ):
        self._submitter = submitter
        self._poller = poller
        self._parser = parser
        self._record_store = record_store

    def process(self, record_id: UUID, source_url: str) -> RecordStatus | None:
        """
        Processes an uploaded recording end to end.

        Runs detached from the upload request, so it never raises: every
        failure ends in `mark_failed` and is only visible in the logs and the
        record's status.

        Args:
            record_id: The record the recording belongs to.
            source_url: URL the remote service downloads the audio from.

        Returns:
            The terminal status that was written, DONE or PROCESS_FAIL, or
            None when the store applied no terminal write (the record had
            already left PROCESSING, or marking it failed also failed).
        """
        logger.info("Processing record", extra={"record_id": str(record_id)})

        try:
            data_id = self._submitter.submit(source_url)
            reply = self._poller.wait_for_completion(data_id)
            result = self._parser.parse(reply, data_id)
        except RecordProcessingError as e:
            logger.error(
                "Record processing failed",
                extra={
                    "record_id": str(record_id),
                    "error_type": type(e).__name__,
                    "error": str(e),
                },
            )
            return self._fail(record_id)
        except Exception:
            logger.exception(
                "Unexpected error while processing record",
                extra={"record_id": str(record_id)},
            )
            return self._fail(record_id)

        try:
            written = self._record_store.mark_done(
                record_id, result.content, result.speakers, result.keypoints
            )
        except Exception:
            logger.exception(
                "Failed to store processing result",
                extra={"record_id": str(record_id)},
            )
            return self._fail(record_id)

        if not written:
            logger.warning(
                "Processing result discarded, record is no longer processing",
                extra={"record_id": str(record_id), "data_id": data_id},
            )
            return None

        logger.info(
            "Record processed",
            extra={
                "record_id": str(record_id),
                "data_id": data_id,
                "summary_length": len(result.summary),
            },
        )
        return RecordStatus.DONE

    def _fail(self, record_id: UUID) -> RecordStatus | None:
        try:
            written = self._record_store.mark_failed(record_id)
        except Exception:
            logger.exception(
                "Failed to mark record failed", extra={"record_id": str(record_id)}
            )
            return None
        return RecordStatus.PROCESS_FAIL if written else None
