"""Infrastructure layer exports."""

from .minio_storage import MinioStorageClient
from .tingwu_client import TingwuTaskClient

__all__ = ["MinioStorageClient", "TingwuTaskClient"]
