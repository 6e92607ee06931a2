import logging
import os
import sys

from pythonjsonlogger import jsonlogger

_SERVER_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error")
_NOISY_LOGGERS = ("urllib3", "minio")


def setup_logging(level: str | None = None) -> logging.Logger:
    """
    Configures structured JSON logging for the record processor.

    Request logs from uvicorn and the logs of background Tingwu runs share one
    stdout handler, so a record's whole lifecycle can be followed by its
    `record_id` and `data_id` fields. trace_id and span_id are filled in when
    ddtrace log injection is active.

    Args:
        level: Log level name; defaults to the LOG_LEVEL environment variable or INFO.

    Returns:
        logging.Logger: The configured root logger instance.
    """
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()

    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s %(trace_id)s %(span_id)s"
    )
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = []
    root_logger.addHandler(stream_handler)

    for logger_name in _SERVER_LOGGERS:
        server_logger = logging.getLogger(logger_name)
        server_logger.setLevel(level)
        server_logger.handlers = [stream_handler]
        server_logger.propagate = False

    # Connection pool chatter would drown out the polling logs.
    for logger_name in _NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    return root_logger
