"""Unit tests for summarization document parsing."""
import pytest
from conftest import FakeTaskClient

from record_processor.domain import ResultParser, TaskStatusReply, split_paragraph_summary
from record_processor.exceptions import (
    MissingResultDocumentError,
    ParseError,
    TransportError,
)

DOC_URL = "https://x/doc"


def _succeeded(path=DOC_URL):
    return TaskStatusReply.model_validate(
        {"output": {"status": 0, "summarizationPath": path}}
    )


def _parse(document, reply=None):
    client = FakeTaskClient(documents={DOC_URL: document})
    return ResultParser(client).parse(reply or _succeeded(), "job-1"), client


def test_split_on_delimiter():
    assert split_paragraph_summary("A@#B") == ("A", "B")


def test_split_without_delimiter_leaves_content_empty():
    assert split_paragraph_summary("A") == ("A", "")


def test_split_trims_both_segments():
    assert split_paragraph_summary("  Short talk \n@#\n Full text  ") == (
        "Short talk",
        "Full text",
    )


def test_split_keeps_only_second_segment():
    assert split_paragraph_summary("A@#B@#C") == ("A", "B")


def test_split_empty():
    assert split_paragraph_summary("") == ("", "")


def test_parse_builds_summary_content_speakers_and_keypoints():
    result, client = _parse(
        {
            "paragraphSummary": "Short talk@#Full transcript text",
            "conversationalSummary": [
                {"speakerId": "1", "speakerName": "Alice", "summary": "greeted"},
                {"speakerId": "2", "speakerName": "Bob", "summary": "responded"},
            ],
        }
    )
    assert client.fetched == [DOC_URL]
    assert result.summary == "Short talk"
    assert result.content == "Full transcript text"
    assert result.speakers == ["Alice", "Bob"]
    assert [(k.time, k.content, k.speaker) for k in result.keypoints] == [
        (0, "greeted", "Alice"),
        (0, "responded", "Bob"),
    ]


def test_repeated_speaker_listed_once_with_one_keypoint_per_entry():
    result, _ = _parse(
        {
            "paragraphSummary": "s@#c",
            "conversationalSummary": [
                {"speakerName": "Alice", "summary": "opened"},
                {"speakerName": "Bob", "summary": "asked"},
                {"speakerName": "Alice", "summary": "closed"},
            ],
        }
    )
    assert result.speakers == ["Alice", "Bob"]
    assert len(result.keypoints) == 3
    assert [k.speaker for k in result.keypoints] == ["Alice", "Bob", "Alice"]


def test_speaker_dedup_is_case_sensitive():
    result, _ = _parse(
        {
            "paragraphSummary": "s",
            "conversationalSummary": [
                {"speakerName": "alice", "summary": "a"},
                {"speakerName": "Alice", "summary": "b"},
            ],
        }
    )
    assert result.speakers == ["alice", "Alice"]


def test_document_without_conversations():
    result, _ = _parse({"paragraphSummary": "only a synopsis"})
    assert result.summary == "only a synopsis"
    assert result.content == ""
    assert result.speakers == []
    assert result.keypoints == []


def test_missing_summarization_path_raises_without_fetching():
    client = FakeTaskClient()
    reply = TaskStatusReply.model_validate({"output": {"status": 0}})
    with pytest.raises(MissingResultDocumentError):
        ResultParser(client).parse(reply, "job-1")
    assert client.fetched == []


def test_malformed_document_raises_parse_error():
    with pytest.raises(ParseError):
        _parse(b"<html>expired</html>")


def test_wrong_document_shape_raises_parse_error():
    with pytest.raises(ParseError):
        _parse({"paragraphSummary": "s", "conversationalSummary": "not a list"})


def test_fetch_failure_propagates():
    with pytest.raises(TransportError):
        _parse(TransportError(DOC_URL, OSError("403")))
