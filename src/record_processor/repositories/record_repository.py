"""Repository for record status transitions."""

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlmodel import select

from record_processor.db_models import Keypoint as KeypointEntity
from record_processor.db_models import Record, RecordStatus
from record_processor.domain.models import Keypoint
from record_processor.exceptions import RecordNotFoundError, RecordPersistenceError
from record_processor.infrastructure.interfaces import RecordStore

logger = logging.getLogger(__name__)


class RecordRepository(RecordStore):
    """
    Handles database operations for uploaded records.

    Every status transition runs in its own session and commits once, so
    readers see the status, content, speakers and keypoints change together.
    """

    def __init__(self, session_factory):
        """
        Initializes the repository.

        Args:
            session_factory: Callable that returns a SQLModel Session context manager.
        """
        self._session_factory = session_factory

    def get_by_device_index(self, device_id: str, index: int) -> Record:
        """
        Looks up a record by its device and sequence index.

        Raises:
            RecordNotFoundError: If the device has no record with that index.
        """
        with self._session_factory() as db_session:
            statement = select(Record).where(
                Record.device_id == device_id,
                Record.index == index,
            )
            record = db_session.exec(statement).first()

        if record is None:
            raise RecordNotFoundError(f"{device_id}/{index}")
        return record

    def mark_processing(self, record_id: UUID, url: str, path: str) -> Record:
        """
        Attaches the uploaded audio to a record and moves it to PROCESSING.

        Called once per upload event, before the background run starts. A
        record that already reached a terminal state is reset.

        Raises:
            RecordNotFoundError: If the record does not exist.
            RecordPersistenceError: If the write fails.
        """
        try:
            with self._session_factory() as db_session:
                record = self._load(db_session, record_id)
                record.url = url
                record.path = path
                record.status = RecordStatus.PROCESSING
                record.updated_at = datetime.now(timezone.utc)
                db_session.add(record)
                db_session.commit()
                db_session.refresh(record)

                logger.info(
                    "Record marked processing",
                    extra={"record_id": str(record_id), "path": path},
                )
                return record

        except RecordNotFoundError:
            raise
        except Exception as e:
            logger.exception(
                "Failed to mark record processing",
                extra={"record_id": str(record_id)},
            )
            raise RecordPersistenceError(str(record_id), cause=e) from e

    def mark_done(
        self,
        record_id: UUID,
        content: str,
        speakers: list[str],
        keypoints: list[Keypoint],
    ) -> bool:
        try:
            with self._session_factory() as db_session:
                record = self._load(db_session, record_id, for_update=True)
                if not self._is_processing(record):
                    return False

                record.content = content
                record.speakers = list(speakers)
                record.keypoints = [
                    KeypointEntity(
                        time=keypoint.time,
                        content=keypoint.content,
                        speaker=keypoint.speaker,
                    )
                    for keypoint in keypoints
                ]
                record.status = RecordStatus.DONE
                record.updated_at = datetime.now(timezone.utc)
                db_session.add(record)
                db_session.commit()

                logger.info(
                    "Record marked done",
                    extra={
                        "record_id": str(record_id),
                        "speaker_count": len(speakers),
                        "keypoint_count": len(keypoints),
                    },
                )
                return True

        except RecordNotFoundError:
            raise
        except Exception as e:
            logger.exception(
                "Failed to mark record done", extra={"record_id": str(record_id)}
            )
            raise RecordPersistenceError(str(record_id), cause=e) from e

    def mark_failed(self, record_id: UUID) -> bool:
        try:
            with self._session_factory() as db_session:
                record = self._load(db_session, record_id, for_update=True)
                if not self._is_processing(record):
                    return False

                record.status = RecordStatus.PROCESS_FAIL
                record.updated_at = datetime.now(timezone.utc)
                db_session.add(record)
                db_session.commit()

                logger.info(
                    "Record marked failed", extra={"record_id": str(record_id)}
                )
                return True

        except RecordNotFoundError:
            raise
        except Exception as e:
            logger.exception(
                "Failed to mark record failed", extra={"record_id": str(record_id)}
            )
            raise RecordPersistenceError(str(record_id), cause=e) from e

    def _load(self, db_session, record_id: UUID, for_update: bool = False) -> Record:
        """Loads a record inside an open session."""
        record = db_session.get(Record, record_id, with_for_update=for_update)
        if record is None:
            raise RecordNotFoundError(str(record_id))
        return record

    def _is_processing(self, record: Record) -> bool:
        """Terminal writes only apply to records still waiting on a run."""
        if record.status == RecordStatus.PROCESSING:
            return True
        logger.warning(
            "Skipping terminal write on record that is not processing",
            extra={"record_id": str(record.id), "status": record.status},
        )
        return False
