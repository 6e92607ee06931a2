"""Dependency injection configuration for the record processor."""

from contextlib import contextmanager
from datetime import timedelta
from functools import lru_cache

from minio import Minio
from sqlmodel import Session, SQLModel, create_engine

from record_processor.config import AppConfig, load_config
from record_processor.domain import JobSubmitter, ResultParser, TaskPoller
from record_processor.handlers import RecordProcessingHandler
from record_processor.infrastructure import MinioStorageClient, TingwuTaskClient
from record_processor.infrastructure.interfaces import StorageClient, TaskClient
from record_processor.logging import setup_logging
from record_processor.repositories import RecordRepository
from record_processor.worker import BackgroundRunner

logger = setup_logging()


@lru_cache
def get_config() -> AppConfig:
    """Returns the configuration loaded from the environment."""
    return load_config()


@lru_cache
def get_engine():
    """Returns the database engine, creating missing tables on first use."""
    config = get_config()
    engine = create_engine(config.postgres.url)
    SQLModel.metadata.create_all(engine)
    logger.info("Database initialized", extra={"host": config.postgres.host})
    return engine


@contextmanager
def _session_factory():
    """Creates a database session context manager."""
    with Session(get_engine()) as session:
        yield session


@lru_cache
def get_record_repository() -> RecordRepository:
    """Returns the record repository."""
    return RecordRepository(_session_factory)


@lru_cache
def get_storage() -> StorageClient:
    """Returns the configured storage client."""
    config = get_config().minio
    minio_client = Minio(
        endpoint=config.endpoint,
        access_key=config.user,
        secret_key=config.password,
        secure=config.secure,
    )
    storage = MinioStorageClient(
        minio_client, config.bucket_name, timedelta(hours=config.url_expiry_hours)
    )
    storage.ensure_bucket_exists()
    return storage


@lru_cache
def get_task_client() -> TaskClient:
    """Returns the Tingwu task client."""
    config = get_config().tingwu
    return TingwuTaskClient(
        endpoint=config.endpoint,
        api_key=config.api_key,
        app_id=config.app_id,
        model=config.model,
        timeout_seconds=config.request_timeout_seconds,
    )


@lru_cache
def get_handler() -> RecordProcessingHandler:
    """Returns the handler wiring the Tingwu pipeline to the record store."""
    config = get_config().tingwu
    client = get_task_client()
    return RecordProcessingHandler(
        submitter=JobSubmitter(client),
        poller=TaskPoller(
            client,
            interval_seconds=config.poll_interval_seconds,
            max_attempts=config.max_poll_attempts,
        ),
        parser=ResultParser(client),
        record_store=get_record_repository(),
    )


@lru_cache
def get_runner() -> BackgroundRunner:
    """Returns the background runner shared by all upload requests."""
    return BackgroundRunner(
        get_handler(), max_concurrent_runs=get_config().worker.max_concurrent_runs
    )
