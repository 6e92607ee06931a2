"""Abstract interface for the remote task service."""

from abc import ABC, abstractmethod
from typing import Any

from record_processor.domain.models import CreateTaskReply, TaskStatusReply


class TaskClient(ABC):
    """Abstract base class for speech-analysis task backends."""

    @abstractmethod
    def create_task(self, file_url: str, parameters: dict[str, Any]) -> CreateTaskReply:
        """
        Submits an offline processing task for a remote audio file.

        Args:
            file_url: URL the service downloads the audio from.
            parameters: Transcription and analysis parameters.

        Returns:
            The decoded reply, which may carry a rejection code.

        Raises:
            TransportError: If the service cannot be reached.
            ParseError: If the reply cannot be decoded.
        """
        pass

    @abstractmethod
    def get_task(self, data_id: str) -> TaskStatusReply:
        """
        Fetches the current status of a task.

        Args:
            data_id: Task identifier returned on creation.

        Returns:
            The decoded status reply.

        Raises:
            TransportError: If the service cannot be reached.
            ParseError: If the reply cannot be decoded.
        """
        pass

    @abstractmethod
    def fetch_document(self, url: str) -> bytes:
        """
        Downloads a result document.

        Args:
            url: Signed document URL taken from a status reply.

        Returns:
            Raw document bytes.

        Raises:
            TransportError: If the download fails.
        """
        pass
