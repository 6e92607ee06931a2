from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional
from uuid import UUID, uuid4

from sqlalchemy import Column, UniqueConstraint
from sqlalchemy.types import JSON, Text
from sqlmodel import Field, Relationship, SQLModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RecordStatus(str, Enum):
    PROCESSING = "PROCESSING"
    DONE = "DONE"
    PROCESS_FAIL = "PROCESS_FAIL"


class Device(SQLModel, table=True):
    __tablename__ = "devices"

    id: str = Field(primary_key=True, max_length=64)
    name: str = Field(default="", max_length=255)
    description: Optional[str] = None

    records: List["Record"] = Relationship(back_populates="device")


class Record(SQLModel, table=True):
    __tablename__ = "records"
    __table_args__ = (
        UniqueConstraint("device_id", "index", name="uq_records_device_index"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    device_id: str = Field(foreign_key="devices.id")
    index: int
    begin_time: Optional[datetime] = None
    duration_seconds: Optional[float] = None
    size_bytes: Optional[int] = None
    crc16: Optional[int] = None
    url: Optional[str] = None
    path: Optional[str] = None
    content: str = Field(default="", sa_column=Column(Text, nullable=False))
    speakers: List[str] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )
    status: Optional[RecordStatus] = None
    updated_at: datetime = Field(default_factory=_utcnow)

    device: Device = Relationship(back_populates="records")
    keypoints: List["Keypoint"] = Relationship(
        back_populates="record",
        sa_relationship_kwargs={
            "cascade": "all, delete-orphan",
            "order_by": "Keypoint.id",
        },
    )


class Keypoint(SQLModel, table=True):
    __tablename__ = "keypoints"

    id: Optional[int] = Field(default=None, primary_key=True)
    record_id: UUID = Field(foreign_key="records.id", index=True)
    time: float = 0.0
    content: str = Field(sa_column=Column(Text, nullable=False))
    speaker: str = Field(default="", max_length=255)

    record: Record = Relationship(back_populates="keypoints")
