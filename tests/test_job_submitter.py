"""Unit tests for task submission."""
import pytest
from conftest import FakeTaskClient

from record_processor.domain import TASK_PARAMETERS, JobSubmitter
from record_processor.exceptions import JobSubmissionError, TransportError


def test_submit_returns_data_id():
    client = FakeTaskClient(create_reply={"output": {"dataId": "job-1"}})
    assert JobSubmitter(client).submit("https://files/a.wav") == "job-1"
    assert client.created == [("https://files/a.wav", TASK_PARAMETERS)]


def test_parameters_enable_diarization_translation_and_summaries():
    transcription = TASK_PARAMETERS["transcription"]
    analysis = TASK_PARAMETERS["analysis"]
    assert transcription["diarizationEnabled"] is True
    assert transcription["translationEnabled"] is True
    assert analysis["fullSummaryEnabled"] is True
    assert analysis["fullSummaryFormat"] == "markdown"
    assert analysis["conversationalEnabled"] is True
    assert analysis["keyInformationEnabled"] is True
    assert analysis["actionsEnabled"] is True
    assert analysis["textPolishEnabled"] is True


def test_reply_with_code_raises_with_remote_message():
    client = FakeTaskClient(create_reply={"code": 1001, "message": "quota exceeded"})
    with pytest.raises(JobSubmissionError) as exc_info:
        JobSubmitter(client).submit("https://files/a.wav")
    assert exc_info.value.code == 1001
    assert exc_info.value.remote_message == "quota exceeded"


def test_reply_without_data_id_raises():
    client = FakeTaskClient(create_reply={"output": {}})
    with pytest.raises(JobSubmissionError):
        JobSubmitter(client).submit("https://files/a.wav")


def test_transport_error_propagates():
    client = FakeTaskClient(create_reply=TransportError("https://tingwu", OSError("reset")))
    with pytest.raises(TransportError):
        JobSubmitter(client).submit("https://files/a.wav")
