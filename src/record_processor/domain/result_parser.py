"""Decodes the summarization document of a finished task."""

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from record_processor.exceptions import MissingResultDocumentError, ParseError

from .models import (
    Keypoint,
    ProcessingResult,
    SummarizationDocument,
    TaskStatusReply,
)

if TYPE_CHECKING:
    from record_processor.infrastructure.interfaces import TaskClient

logger = logging.getLogger(__name__)

SUMMARY_DELIMITER = "@#"


class ResultParser:
    """Turns a succeeded status reply into a ProcessingResult."""

    def __init__(self, client: "TaskClient"):
        self._client = client

    def parse(self, reply: TaskStatusReply, data_id: str | None = None) -> ProcessingResult:
        """
        Fetches the summarization document and normalizes it.

        Speakers are deduplicated by exact name in first-seen order; every
        conversational summary becomes one keypoint. The document has no
        per-entry timestamps, so keypoint times are 0.

        Args:
            reply: Status reply of a succeeded task.
            data_id: Task identifier, used for error context only.

        Raises:
            MissingResultDocumentError: If the reply has no summarization path.
            TransportError: If the document cannot be downloaded.
            ParseError: If the document is not a valid summarization document.
        """
        url = reply.output.summarization_path
        if not url:
            raise MissingResultDocumentError(data_id)

        raw = self._client.fetch_document(url)
        document = self._decode(raw, data_id)

        summary, content = split_paragraph_summary(document.paragraph_summary or "")

        speakers: list[str] = []
        keypoints: list[Keypoint] = []
        for entry in document.conversational_summary:
            speaker = entry.speaker_name or ""
            if speaker not in speakers:
                speakers.append(speaker)
            keypoints.append(
                Keypoint(time=0, content=entry.summary or "", speaker=speaker)
            )

        logger.info(
            "Summarization document parsed",
            extra={
                "data_id": data_id,
                "speaker_count": len(speakers),
                "keypoint_count": len(keypoints),
            },
        )
        return ProcessingResult(
            summary=summary, content=content, speakers=speakers, keypoints=keypoints
        )

    def _decode(self, raw: bytes, data_id: str | None) -> SummarizationDocument:
        try:
            return SummarizationDocument.model_validate_json(raw)
        except ValidationError as e:
            logger.exception(
                "Summarization document is malformed", extra={"data_id": data_id}
            )
            raise ParseError(f"summarization document of task '{data_id}'", e) from e


def split_paragraph_summary(paragraph_summary: str) -> tuple[str, str]:
    """Splits "<short>@#<full>" into (summary, content); content is "" without a delimiter."""
    segments = paragraph_summary.split(SUMMARY_DELIMITER)
    summary = segments[0].strip()
    content = segments[1].strip() if len(segments) > 1 else ""
    return summary, content
