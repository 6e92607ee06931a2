"""Fixed-interval polling of remote task status."""

import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from record_processor.exceptions import (
    JobTimeoutError,
    ParseError,
    RemoteJobFailedError,
    TransportError,
)

from .models import TaskState, TaskStatusReply

if TYPE_CHECKING:
    from record_processor.infrastructure.interfaces import TaskClient

logger = logging.getLogger(__name__)


class TaskPoller:
    """
    Waits for a remote task to reach a terminal state.

    Sleeps `interval_seconds` before every status query and gives up after
    `max_attempts` queries, so a run never waits longer than
    `interval_seconds * max_attempts` plus request time. The sleep only
    suspends the calling thread.
    """

    def __init__(
        self,
        client: "TaskClient",
        interval_seconds: float,
        max_attempts: int,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._client = client
        self._interval_seconds = interval_seconds
        self._max_attempts = max_attempts
        self._sleep = sleep

    def wait_for_completion(self, data_id: str) -> TaskStatusReply:
        """
        Polls until the task succeeds, fails, or the attempt budget runs out.

        A query that fails in transport, cannot be decoded, or comes back with
        a service error code uses up its attempt and polling continues.

        Args:
            data_id: Task identifier returned on creation.

        Returns:
            The status reply of the succeeded task, carrying result document URLs.

        Raises:
            RemoteJobFailedError: If the service reports the task as failed.
            JobTimeoutError: If no terminal state is seen within the budget.
        """
        for attempt in range(1, self._max_attempts + 1):
            self._sleep(self._interval_seconds)

            try:
                reply = self._client.get_task(data_id)
            except (TransportError, ParseError) as e:
                logger.warning(
                    "Tingwu status query failed",
                    extra={"data_id": data_id, "attempt": attempt, "error": str(e)},
                )
                continue

            if reply.code is not None:
                logger.warning(
                    "Tingwu status query rejected",
                    extra={
                        "data_id": data_id,
                        "attempt": attempt,
                        "code": reply.code,
                        "remote_message": reply.message,
                    },
                )
                continue

            state = reply.output.status
            if state is TaskState.SUCCEEDED:
                logger.info(
                    "Tingwu task succeeded",
                    extra={"data_id": data_id, "attempt": attempt},
                )
                return reply
            if state is TaskState.FAILED:
                logger.error(
                    "Tingwu task failed",
                    extra={
                        "data_id": data_id,
                        "error_code": reply.output.error_code,
                        "error_message": reply.output.error_message,
                    },
                )
                raise RemoteJobFailedError(
                    data_id, reply.output.error_code, reply.output.error_message
                )

            logger.info(
                "Tingwu task processing",
                extra={
                    "data_id": data_id,
                    "attempt": attempt,
                    "max_attempts": self._max_attempts,
                },
            )

        logger.error(
            "Tingwu task timed out",
            extra={"data_id": data_id, "attempts": self._max_attempts},
        )
        raise JobTimeoutError(data_id, self._max_attempts)
