"""Unit tests for Tingwu payload decoding."""
import pytest

from record_processor.domain.models import (
    CreateTaskReply,
    SummarizationDocument,
    TaskState,
    TaskStatusReply,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        (0, TaskState.SUCCEEDED),
        (1, TaskState.RUNNING),
        (2, TaskState.FAILED),
        ("2", TaskState.FAILED),
        (7, TaskState.RUNNING),
        (None, TaskState.RUNNING),
        ("pending", TaskState.RUNNING),
    ],
)
def test_status_decodes_to_closed_state(raw, expected):
    reply = TaskStatusReply.model_validate({"output": {"status": raw}})
    assert reply.output.status is expected


def test_status_defaults_to_running_when_absent():
    reply = TaskStatusReply.model_validate({})
    assert reply.output.status is TaskState.RUNNING
    assert reply.code is None


def test_status_reply_reads_camel_case_paths():
    reply = TaskStatusReply.model_validate(
        {
            "request_id": "req-9",
            "output": {
                "status": 0,
                "summarizationPath": "https://oss/summary.json",
                "textPolishPath": "https://oss/polish.json",
                "autoChaptersPath": "https://oss/chapters.json",
                "playbackUrl": "https://oss/audio.mp3",
            },
        }
    )
    assert reply.request_id == "req-9"
    assert reply.output.summarization_path == "https://oss/summary.json"
    assert reply.output.text_polish_path == "https://oss/polish.json"
    assert reply.output.auto_chapters_path == "https://oss/chapters.json"
    assert reply.output.playback_url == "https://oss/audio.mp3"


def test_create_reply_with_code():
    reply = CreateTaskReply.model_validate({"code": 1001, "message": "bad appId"})
    assert reply.code == 1001
    assert reply.message == "bad appId"
    assert reply.output is None


def test_summarization_document_ignores_unused_sections():
    document = SummarizationDocument.model_validate(
        {
            "paragraphSummary": "short@#long",
            "conversationalSummary": [
                {"speakerId": "1", "speakerName": "Alice", "summary": "greeted"}
            ],
            "questionsAnsweringSummary": [{"question": "q", "answer": "a"}],
            "mindMapSummary": [{"title": "root", "topic": []}],
        }
    )
    assert document.paragraph_summary == "short@#long"
    assert document.conversational_summary[0].speaker_name == "Alice"
    assert len(document.questions_answering_summary) == 1
