"""Application configuration loaded from environment variables."""

import os

from pydantic import BaseModel, computed_field, field_validator

DEFAULT_TINGWU_ENDPOINT = (
    "https://dashscope.aliyuncs.com/api/v1/services/aigc/"
    "multimodal-generation/generation"
)


class TingwuConfig(BaseModel, frozen=True):
    """Tingwu task API configuration."""

    api_key: str
    app_id: str
    endpoint: str = DEFAULT_TINGWU_ENDPOINT
    model: str = "tingwu-meeting"
    poll_interval_seconds: float = 3.0
    max_poll_attempts: int = 100
    request_timeout_seconds: float = 30.0

    @field_validator(
        "poll_interval_seconds", "max_poll_attempts", "request_timeout_seconds"
    )
    @classmethod
    def must_be_positive(cls, v):
        """Rejects zero or negative polling and timeout settings."""
        if v <= 0:
            raise ValueError("must be > 0")
        return v


class MinioConfig(BaseModel, frozen=True):
    """MinIO connection configuration."""

    endpoint: str
    user: str
    password: str
    bucket_name: str = "records"
    secure: bool = False
    url_expiry_hours: int = 24


class PostgresConfig(BaseModel, frozen=True):
    """PostgreSQL connection configuration."""

    host: str
    port: int
    user: str
    password: str
    database: str

    @computed_field
    @property
    def url(self) -> str:
        """Returns the full PostgreSQL connection URL."""
        return (
            f"postgresql+psycopg://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.database}"
        )


class WorkerConfig(BaseModel, frozen=True):
    """Background runner configuration. No cap means one thread per upload."""

    max_concurrent_runs: int | None = None


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    tingwu: TingwuConfig
    minio: MinioConfig
    postgres: PostgresConfig
    worker: WorkerConfig = WorkerConfig()


def _optional_int(name: str) -> int | None:
    value = os.getenv(name, "")
    return int(value) if value else None


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    return AppConfig(
        tingwu=TingwuConfig(
            api_key=os.getenv("TINGWU_API_KEY", ""),
            app_id=os.getenv("TINGWU_APP_ID", ""),
            endpoint=os.getenv("TINGWU_ENDPOINT", DEFAULT_TINGWU_ENDPOINT),
            model=os.getenv("TINGWU_MODEL", "tingwu-meeting"),
            poll_interval_seconds=float(
                os.getenv("TINGWU_POLL_INTERVAL_SECONDS", "3")
            ),
            max_poll_attempts=int(os.getenv("TINGWU_MAX_POLL_ATTEMPTS", "100")),
            request_timeout_seconds=float(
                os.getenv("TINGWU_REQUEST_TIMEOUT_SECONDS", "30")
            ),
        ),
        minio=MinioConfig(
            endpoint=os.getenv("MINIO_ENDPOINT", "minio:9000"),
            user=os.getenv("MINIO_USER", ""),
            password=os.getenv("MINIO_PASSWORD", ""),
            bucket_name=os.getenv("MINIO_BUCKET", "records"),
            secure=os.getenv("MINIO_SECURE", "false").lower() == "true",
            url_expiry_hours=int(os.getenv("MINIO_URL_EXPIRY_HOURS", "24")),
        ),
        postgres=PostgresConfig(
            host=os.getenv("POSTGRES_HOST", "postgres"),
            port=int(os.getenv("POSTGRES_PORT", "5432")),
            user=os.getenv("POSTGRES_USER", ""),
            password=os.getenv("POSTGRES_PASSWORD", ""),
            database=os.getenv("POSTGRES_DB", "records"),
        ),
        worker=WorkerConfig(
            max_concurrent_runs=_optional_int("WORKER_MAX_CONCURRENT_RUNS"),
        ),
    )
