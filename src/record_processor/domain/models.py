"""Domain models for Tingwu task orchestration."""

from enum import IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class TaskState(IntEnum):
    """Lifecycle state of a remote task, decoded from the numeric status."""

    SUCCEEDED = 0
    RUNNING = 1
    FAILED = 2


class _RemotePayload(BaseModel):
    """Base for payloads exchanged with Tingwu (camelCase on the wire)."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


class CreateTaskOutput(_RemotePayload):
    data_id: str | None = None


class CreateTaskReply(_RemotePayload):
    """Reply to a createTask call. A present `code` means the task was rejected."""

    code: int | str | None = None
    message: str | None = None
    request_id: str | None = None
    output: CreateTaskOutput | None = None


class TaskStatusOutput(_RemotePayload):
    """Status of a task plus the result document URLs once it has succeeded."""

    status: TaskState = TaskState.RUNNING
    error_code: int | str | None = None
    error_message: str | None = None
    summarization_path: str | None = None
    text_polish_path: str | None = None
    transcription_path: str | None = None
    translations_path: str | None = None
    auto_chapters_path: str | None = None
    meeting_assistance_path: str | None = None
    ppt_extraction_path: str | None = None
    custom_prompt_path: str | None = None
    playback_url: str | None = None

    @field_validator("status", mode="before")
    @classmethod
    def decode_status(cls, v: Any) -> TaskState:
        """Maps 0 and 2 to terminal states; anything else keeps the task running."""
        try:
            return TaskState(int(v))
        except (TypeError, ValueError):
            return TaskState.RUNNING


class TaskStatusReply(_RemotePayload):
    """Reply to a getTask call."""

    code: int | str | None = None
    message: str | None = None
    request_id: str | None = None
    output: TaskStatusOutput = Field(default_factory=TaskStatusOutput)


class ConversationalSummary(_RemotePayload):
    """Per-speaker summary entry of the summarization document."""

    speaker_id: int | str | None = None
    speaker_name: str | None = None
    summary: str | None = None


class SummarizationDocument(_RemotePayload):
    """
    Summarization result document referenced by `summarizationPath`.

    `paragraph_summary` packs the short synopsis and the full normalized
    transcript, separated by `SUMMARY_DELIMITER`.
    """

    paragraph_summary: str | None = None
    conversational_summary: list[ConversationalSummary] = Field(default_factory=list)
    questions_answering_summary: list[Any] = Field(default_factory=list)
    mind_map_summary: list[Any] = Field(default_factory=list)


class Keypoint(BaseModel, frozen=True):
    """A timestamped statement attributed to a speaker."""

    time: float = 0.0
    content: str
    speaker: str


class ProcessingResult(BaseModel, frozen=True):
    """Normalized output of one orchestration run."""

    summary: str
    content: str
    speakers: list[str]
    keypoints: list[Keypoint]
