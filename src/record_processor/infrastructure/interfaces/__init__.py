"""Infrastructure interface exports."""

from record_processor.infrastructure.interfaces.record_store import RecordStore
from record_processor.infrastructure.interfaces.storage_client import StorageClient
from record_processor.infrastructure.interfaces.task_client import TaskClient

__all__ = ["RecordStore", "StorageClient", "TaskClient"]
