"""Custom exceptions for the record processor."""


class RecordProcessingError(Exception):
    """Base class for failures of a single orchestration run."""


class TransportError(RecordProcessingError):
    """Raised when the remote service or a result document cannot be reached."""

    def __init__(self, url: str, cause: Exception | None = None):
        self.url = url
        self.cause = cause
        super().__init__(f"Request to '{url}' failed: {cause}")


class ParseError(RecordProcessingError):
    """Raised when a remote reply or result document cannot be decoded."""

    def __init__(self, source: str, cause: Exception | None = None):
        self.source = source
        self.cause = cause
        super().__init__(f"Failed to decode payload from '{source}'")


class JobSubmissionError(RecordProcessingError):
    """Raised when the remote service rejects a job creation request."""

    def __init__(self, code: int | str | None, message: str | None):
        self.code = code
        self.remote_message = message
        super().__init__(f"Task creation rejected (code={code}): {message}")


class RemoteJobFailedError(RecordProcessingError):
    """Raised when the remote service reports a task as failed."""

    def __init__(
        self,
        data_id: str,
        error_code: int | str | None = None,
        error_message: str | None = None,
    ):
        self.data_id = data_id
        self.error_code = error_code
        self.error_message = error_message
        super().__init__(
            f"Task '{data_id}' failed remotely (code={error_code}): {error_message}"
        )


class JobTimeoutError(RecordProcessingError):
    """Raised when a task does not reach a terminal state within the poll budget."""

    def __init__(self, data_id: str, attempts: int):
        self.data_id = data_id
        self.attempts = attempts
        super().__init__(
            f"Task '{data_id}' did not finish after {attempts} status checks"
        )


class MissingResultDocumentError(RecordProcessingError):
    """Raised when a succeeded task carries no summarization document."""

    def __init__(self, data_id: str | None):
        self.data_id = data_id
        super().__init__(f"Task '{data_id}' has no summarization document")


class RecordNotFoundError(Exception):
    """Raised when a requested record does not exist."""

    def __init__(self, lookup: str):
        self.lookup = lookup
        super().__init__(f"Record {lookup} not found")


class RecordPersistenceError(Exception):
    """Raised when writing a record to the database fails."""

    def __init__(self, record_id: str, cause: Exception | None = None):
        self.record_id = record_id
        self.cause = cause
        super().__init__(f"Failed to persist record '{record_id}' to database")


class StorageUploadError(Exception):
    """Raised when uploading a file to storage fails."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        self.object_name = object_name
        self.cause = cause
        super().__init__(f"Failed to upload '{object_name}' to storage")
