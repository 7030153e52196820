"""Reusable middleware."""

import asyncio
from typing import Any

from loguru import logger

from orca.pipelines.cancellation import CancellationToken
from orca.pipelines.errors import PipelineCancelledError
from orca.pipelines.options import Next
from orca.pipelines.tasks import Task


class RetryMiddleware:
    """Re-invokes the rest of the chain when it raises a matching error.

    The orchestrator never retries on its own; register this middleware to retry steps. The token
    is checked before each new attempt, and the last error is re-raised once retries are
    exhausted.

    Args:
        max_retries: Maximum number of additional attempts. Defaults to 3.
        retry_on: Exception types that trigger a retry. Defaults to any `Exception`.
        delay: Seconds to sleep between attempts.
    """

    def __init__(
        self,
        max_retries: int = 3,
        retry_on: tuple[type[Exception], ...] = (Exception,),
        delay: float = 0.0,
    ) -> None:
        if max_retries < 0:
            raise ValueError("max_retries must be non-negative")
        self.max_retries = max_retries
        self.retry_on = retry_on
        self.delay = delay

    def __repr__(self) -> str:
        return f"RetryMiddleware(max_retries={self.max_retries}, delay={self.delay})"

    async def __call__(
        self, task: Task[Any], context: Any, next: Next, token: CancellationToken
    ) -> None:
        attempt = 0
        while True:
            try:
                await next()
                return
            except PipelineCancelledError:
                raise
            except self.retry_on as e:
                if attempt >= self.max_retries:
                    raise
                attempt += 1
                logger.warning(
                    f"{task.name}: attempt {attempt} failed with {e!r}, "
                    f"retrying ({attempt}/{self.max_retries})"
                )
            if self.delay:
                await asyncio.sleep(self.delay)
            token.raise_if_cancelled()
