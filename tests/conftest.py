import json
from contextlib import contextmanager
from uuid import UUID

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from record_processor.db_models import Device, Record, RecordStatus
from record_processor.domain.models import CreateTaskReply, Keypoint, TaskStatusReply
from record_processor.infrastructure.interfaces import RecordStore, TaskClient

RUNNING = {"output": {"status": 1}}


class FakeTaskClient(TaskClient):
    """
    Scripted task client.

    `status_replies` are served in order; once exhausted every query returns a
    running status. Exceptions in either script are raised instead of returned.
    """

    def __init__(self, create_reply=None, status_replies=(), documents=None):
        self.create_reply = (
            create_reply if create_reply is not None else {"output": {"dataId": "job-1"}}
        )
        self.status_replies = list(status_replies)
        self.documents = documents or {}
        self.created: list[tuple[str, dict]] = []
        self.status_queries: list[str] = []
        self.fetched: list[str] = []

    def create_task(self, file_url, parameters):
        self.created.append((file_url, parameters))
        if isinstance(self.create_reply, Exception):
            raise self.create_reply
        return CreateTaskReply.model_validate(self.create_reply)

    def get_task(self, data_id):
        self.status_queries.append(data_id)
        reply = self.status_replies.pop(0) if self.status_replies else RUNNING
        if isinstance(reply, Exception):
            raise reply
        return TaskStatusReply.model_validate(reply)

    def fetch_document(self, url):
        self.fetched.append(url)
        document = self.documents[url]
        if isinstance(document, Exception):
            raise document
        if isinstance(document, bytes):
            return document
        return json.dumps(document).encode("utf-8")


class FakeRecordStore(RecordStore):
    def __init__(self, fail_on_done: Exception | None = None, applies: bool = True):
        self.fail_on_done = fail_on_done
        self.applies = applies
        self.done_calls: list[tuple[UUID, str, list[str], list[Keypoint]]] = []
        self.failed_calls: list[UUID] = []

    def mark_done(self, record_id, content, speakers, keypoints):
        self.done_calls.append((record_id, content, speakers, keypoints))
        if self.fail_on_done is not None:
            raise self.fail_on_done
        return self.applies

    def mark_failed(self, record_id):
        self.failed_calls.append(record_id)
        return self.applies


class RecordingSleep:
    """Stands in for time.sleep and remembers every requested delay."""

    def __init__(self):
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def sleep():
    return RecordingSleep()


@pytest.fixture
def record_store():
    return FakeRecordStore()


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    @contextmanager
    def factory():
        with Session(engine) as session:
            yield session

    return factory


@pytest.fixture
def stored_record(session_factory):
    """A device with one record that has not been uploaded yet."""
    with session_factory() as db_session:
        db_session.add(Device(id="dev-1", name="Recorder"))
        record = Record(device_id="dev-1", index=3, size_bytes=2048, crc16=4660)
        db_session.add(record)
        db_session.commit()
        db_session.refresh(record)
        return record


@pytest.fixture
def processing_record(session_factory, stored_record):
    with session_factory() as db_session:
        record = db_session.get(Record, stored_record.id)
        record.status = RecordStatus.PROCESSING
        db_session.add(record)
        db_session.commit()
        db_session.refresh(record)
        return record
