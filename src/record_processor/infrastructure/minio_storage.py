"""MinIO implementation of the StorageClient interface."""

import logging
from datetime import timedelta
from typing import BinaryIO

from minio import Minio

from record_processor.exceptions import StorageUploadError

from .interfaces import StorageClient

logger = logging.getLogger(__name__)


class MinioStorageClient(StorageClient):
    """Stores uploaded recordings in MinIO and signs download URLs for them."""

    def __init__(self, client: Minio, bucket_name: str, url_expiry: timedelta):
        self._client = client
        self._bucket_name = bucket_name
        self._url_expiry = url_expiry

    def upload(
        self,
        object_name: str,
        data: BinaryIO,
        size: int,
        content_type: str,
    ) -> None:
        try:
            self._client.put_object(
                bucket_name=self._bucket_name,
                object_name=object_name,
                data=data,
                length=size,
                content_type=content_type,
            )
            logger.info(
                "File uploaded to MinIO",
                extra={
                    "bucket_name": self._bucket_name,
                    "object_name": object_name,
                    "size": size,
                },
            )
        except Exception as e:
            logger.exception(
                "MinIO upload failed",
                extra={"bucket_name": self._bucket_name, "object_name": object_name},
            )
            raise StorageUploadError(object_name, e) from e

    def get_download_url(self, object_name: str) -> str:
        return self._client.presigned_get_object(
            self._bucket_name, object_name, expires=self._url_expiry
        )

    def ensure_bucket_exists(self) -> None:
        if not self._client.bucket_exists(self._bucket_name):
            self._client.make_bucket(self._bucket_name)
            logger.info("Bucket created", extra={"bucket_name": self._bucket_name})
        else:
            logger.info(
                "Bucket already exists", extra={"bucket_name": self._bucket_name}
            )
