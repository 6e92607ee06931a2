from .record_repository import RecordRepository

__all__ = ["RecordRepository"]
