"""Composite task running several tasks concurrently."""

import asyncio
from collections.abc import Iterable

from loguru import logger

from orca.pipelines.cancellation import CancellationToken
from orca.pipelines.errors import PipelineCancelledError
from orca.pipelines.tasks import Task


class ParallelGroupTask[Context]:
    """Runs its member tasks concurrently and joins on all of them.

    Every member receives the same context and the same cancellation token. The group waits for
    all members to finish, even after one of them has failed; running members are never cancelled
    by the group itself.

    When members fail, each failing exception is annotated with the name of the member that raised
    it and the error of the first failing member (in member order) is re-raised. A cancellation
    raised by any member takes precedence over ordinary failures.

    Args:
        name: The name of the group, used as the step name.
        tasks: The member tasks.
    """

    def __init__(self, name: str, tasks: Iterable[Task[Context]]) -> None:
        self.name = name
        self._tasks = tuple(tasks)

    def __repr__(self) -> str:
        member_names = ", ".join(task.name for task in self._tasks)
        return f"ParallelGroupTask(name={self.name}, tasks=[{member_names}])"

    @property
    def tasks(self) -> tuple[Task[Context], ...]:
        """Get the member tasks of the group."""
        return self._tasks

    async def execute(self, context: Context, token: CancellationToken) -> None:
        outcomes = await asyncio.gather(
            *(task.execute(context, token) for task in self._tasks),
            return_exceptions=True,
        )

        failures: list[tuple[Task[Context], Exception]] = []
        for task, outcome in zip(self._tasks, outcomes):
            if not isinstance(outcome, BaseException):
                continue
            if not isinstance(outcome, Exception):
                raise outcome
            note = f"Raised by member '{task.name}' of parallel group '{self.name}'"
            if note not in getattr(outcome, "__notes__", ()):
                outcome.add_note(note)
            failures.append((task, outcome))

        if not failures:
            return

        for task, error in failures:
            if isinstance(error, PipelineCancelledError):
                raise error

        _, first_error = failures[0]
        for task, error in failures[1:]:
            logger.warning(f"{self.name}: member '{task.name}' also failed: {error!r}")
        raise first_error
