"""Response models for the record processor API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from record_processor.db_models import RecordStatus


class RecordResponse(BaseModel):
    """Record state returned once an upload has been accepted."""

    id: UUID
    device_id: str
    index: int
    size_bytes: int | None = None
    duration_seconds: float | None = None
    crc16: int | None = None
    url: str | None = None
    status: RecordStatus | None = None
    updated_at: datetime
