"""Tingwu implementation of the TaskClient interface."""

import logging
from typing import Any, Callable, TypeVar
from urllib.parse import urlsplit

import requests
from pydantic import BaseModel, ValidationError

from record_processor.domain.models import CreateTaskReply, TaskStatusReply
from record_processor.exceptions import ParseError, TransportError

from .interfaces import TaskClient

logger = logging.getLogger(__name__)

ReplyT = TypeVar("ReplyT", bound=BaseModel)


def _redact(url: str) -> str:
    """Drops the query string, which carries the signature of OSS URLs."""
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}{parts.path}"


class TingwuTaskClient(TaskClient):
    """
    Talks to Tingwu offline tasks through the DashScope generation endpoint.

    One client is shared by every background run, so each call opens its own
    session from `session_factory` and no connection state crosses threads.
    """

    def __init__(
        self,
        endpoint: str,
        api_key: str,
        app_id: str,
        model: str,
        timeout_seconds: float,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ):
        self._session_factory = session_factory
        self._endpoint = endpoint
        self._api_key = api_key
        self._app_id = app_id
        self._model = model
        self._timeout_seconds = timeout_seconds

    def create_task(self, file_url: str, parameters: dict[str, Any]) -> CreateTaskReply:
        body = {
            "model": self._model,
            "input": {
                "task": "createTask",
                "type": "offline",
                "appId": self._app_id,
                "fileUrl": file_url,
            },
            "parameters": parameters,
        }
        reply = self._decode(CreateTaskReply, self._post(body))
        logger.info(
            "Tingwu createTask answered",
            extra={"code": reply.code, "request_id": reply.request_id},
        )
        return reply

    def get_task(self, data_id: str) -> TaskStatusReply:
        body = {
            "model": self._model,
            "input": {"task": "getTask", "dataId": data_id},
        }
        return self._decode(TaskStatusReply, self._post(body))

    def fetch_document(self, url: str) -> bytes:
        try:
            with self._session_factory() as session:
                response = session.get(url, timeout=self._timeout_seconds)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.exception(
                "Result document download failed", extra={"url": _redact(url)}
            )
            raise TransportError(_redact(url), e) from e

        logger.info(
            "Result document downloaded",
            extra={"url": _redact(url), "size": len(response.content)},
        )
        return response.content

    def _post(self, body: dict[str, Any]) -> Any:
        """
        Sends an authenticated call and returns the decoded JSON body.

        Error statuses are passed through when the body carries a service
        error `code`, so callers can tell a rejection from a network failure.
        """
        try:
            with self._session_factory() as session:
                response = session.post(
                    self._endpoint,
                    json=body,
                    headers={"Authorization": f"Bearer {self._api_key}"},
                    timeout=self._timeout_seconds,
                )
        except requests.RequestException as e:
            logger.exception(
                "Tingwu request failed",
                extra={"task": body["input"]["task"]},
            )
            raise TransportError(self._endpoint, e) from e

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(
                "Tingwu returned a non-JSON body",
                extra={"status_code": response.status_code},
            )
            raise TransportError(self._endpoint, e) from e

        if not response.ok and not (isinstance(payload, dict) and "code" in payload):
            logger.error(
                "Tingwu returned an error status",
                extra={"status_code": response.status_code},
            )
            raise TransportError(
                self._endpoint,
                requests.HTTPError(f"HTTP {response.status_code}", response=response),
            )
        return payload

    def _decode(self, model: type[ReplyT], payload: Any) -> ReplyT:
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            logger.exception(
                "Tingwu reply did not match the expected shape",
                extra={"reply_type": model.__name__},
            )
            raise ParseError(self._endpoint, e) from e
