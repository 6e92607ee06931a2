"""Submits recordings to Tingwu with the fixed analysis configuration."""

import logging
from typing import TYPE_CHECKING, Any

from record_processor.exceptions import JobSubmissionError

if TYPE_CHECKING:
    from record_processor.infrastructure.interfaces import TaskClient

logger = logging.getLogger(__name__)

TASK_PARAMETERS: dict[str, Any] = {
    "transcription": {
        "model": "cn",
        "diarizationEnabled": True,
        "diarizationSpeakerCount": 0,
        "translationEnabled": True,
        "translationTargetLang": ["en"],
    },
    "analysis": {
        "model": "default",
        "keyInformationEnabled": True,
        "actionsEnabled": True,
        "fullSummaryEnabled": True,
        "fullSummaryFormat": "markdown",
        "conversationalEnabled": True,
        "questionsAnsweringEnabled": True,
        "mindMapEnabled": True,
        "mindMapFormat": "timestamp",
        "pptExtractionEnabled": True,
        "autoChaptersEnabled": True,
        "autoChapterGranularity": "Coarse",
        "autoChapterTitleLengthLevel": "Short",
        "textPolishEnabled": True,
        "customPromptEnabled": False,
    },
}


class JobSubmitter:
    """Creates remote processing tasks."""

    def __init__(self, client: "TaskClient"):
        self._client = client

    def submit(self, file_url: str) -> str:
        """
        Creates a task for the audio at `file_url`.

        Args:
            file_url: URL the remote service downloads the recording from.

        Returns:
            The task's data id, used for every later status query.

        Raises:
            JobSubmissionError: If the service rejects the task.
            TransportError: If the service cannot be reached.
        """
        reply = self._client.create_task(file_url, TASK_PARAMETERS)

        if reply.code is not None:
            logger.error(
                "Tingwu rejected task",
                extra={"code": reply.code, "remote_message": reply.message},
            )
            raise JobSubmissionError(reply.code, reply.message)

        if reply.output is None or not reply.output.data_id:
            raise JobSubmissionError(None, "reply carries no dataId")

        logger.info("Tingwu task created", extra={"data_id": reply.output.data_id})
        return reply.output.data_id
