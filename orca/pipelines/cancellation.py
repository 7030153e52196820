"""Cooperative cancellation for pipeline runs."""

import asyncio

from orca.pipelines.errors import PipelineCancelledError


class CancellationToken:
    """A one-way flag shared by every step, middleware and parallel member of a run.

    The orchestrator checks the token once before each step. Long-running tasks should check it
    themselves (or await `wait()`) to stay responsive mid-step.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def cancel(self) -> None:
        """Signal cancellation. Calling it more than once has no further effect."""
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """Raise `PipelineCancelledError` if the token has been cancelled."""
        if self._event.is_set():
            raise PipelineCancelledError()

    async def wait(self) -> None:
        """Block until the token is cancelled."""
        await self._event.wait()

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.is_cancelled})"
