"""Record audio upload endpoint."""

import logging
import os
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, UploadFile

from record_processor.dependencies import (
    get_record_repository,
    get_runner,
    get_storage,
)
from record_processor.exceptions import (
    RecordNotFoundError,
    RecordPersistenceError,
    StorageUploadError,
)
from record_processor.infrastructure.interfaces import StorageClient
from record_processor.repositories import RecordRepository
from record_processor.response_models import RecordResponse
from record_processor.worker import BackgroundRunner

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/devices", tags=["records"])

StorageDep = Annotated[StorageClient, Depends(get_storage)]
RepositoryDep = Annotated[RecordRepository, Depends(get_record_repository)]
RunnerDep = Annotated[BackgroundRunner, Depends(get_runner)]


@router.post(
    "/{device_id}/records/{record_index}/audio", response_model=RecordResponse
)
def upload_record_audio(
    device_id: str,
    record_index: int,
    audio: UploadFile,
    storage: StorageDep,
    repository: RepositoryDep,
    runner: RunnerDep,
) -> RecordResponse:
    """
    Uploads the audio of a record and starts processing it.

    Responds as soon as the record is PROCESSING; the Tingwu run continues
    in the background and writes DONE or PROCESS_FAIL when it ends.
    """
    try:
        record = repository.get_by_device_index(device_id, record_index)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Record not found")

    extension = os.path.splitext(audio.filename or "")[1]
    object_name = f"{device_id}/{record_index}/{uuid.uuid4()}{extension}"

    logger.info(
        "Received record audio",
        extra={
            "device_id": device_id,
            "record_index": record_index,
            "object_name": object_name,
            "size": audio.size,
        },
    )

    try:
        storage.upload(
            object_name=object_name,
            data=audio.file,
            size=audio.size,
            content_type=audio.content_type or "application/octet-stream",
        )
    except StorageUploadError:
        raise HTTPException(status_code=500, detail="File upload failed")

    source_url = storage.get_download_url(object_name)

    try:
        record = repository.mark_processing(record.id, url=source_url, path=object_name)
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Record not found")
    except RecordPersistenceError:
        raise HTTPException(status_code=500, detail="Record update failed")

    runner.launch(record.id, source_url)

    return RecordResponse.model_validate(record, from_attributes=True)
