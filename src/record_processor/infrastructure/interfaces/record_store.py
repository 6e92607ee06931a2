"""Abstract interface for record status transitions."""

from abc import ABC, abstractmethod
from uuid import UUID

from record_processor.domain.models import Keypoint


class RecordStore(ABC):
    """Abstract base class for the persistence side of an orchestration run."""

    @abstractmethod
    def mark_done(
        self,
        record_id: UUID,
        content: str,
        speakers: list[str],
        keypoints: list[Keypoint],
    ) -> bool:
        """
        Stores the processing result and moves the record to DONE.

        Content, speakers and keypoints are written in the same transaction
        as the status.

        Returns:
            False if the record was not PROCESSING and nothing was written.

        Raises:
            RecordPersistenceError: If the write fails.
        """
        pass

    @abstractmethod
    def mark_failed(self, record_id: UUID) -> bool:
        """
        Moves the record to PROCESS_FAIL.

        Returns:
            False if the record was not PROCESSING and nothing was written.

        Raises:
            RecordPersistenceError: If the write fails.
        """
        pass
