from .record_processing_handler import RecordProcessingHandler

__all__ = ["RecordProcessingHandler"]
