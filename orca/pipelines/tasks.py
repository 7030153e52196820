"""Defines the Task protocol and the built-in task implementations.

A Task represents a named unit of work in a pipeline. It operates on a shared, mutable context and
signals failure by raising. Tasks return nothing: every effect goes through the context.
"""

from collections.abc import Awaitable, Callable
import inspect
from typing import Protocol, runtime_checkable

from orca.pipelines.cancellation import CancellationToken

type TaskFunction[Context] = Callable[[Context, CancellationToken], Awaitable[None] | None]
"""Plain or coroutine function that can be wrapped into a task by `FunctionTask`."""


@runtime_checkable
class Task[Context](Protocol):
    """Task is a protocol that defines the contract for anything that can be executed in a pipeline.

    Attributes:
        name: Human readable name of the task. It is not required to be unique.
    """

    name: str

    async def execute(self, context: Context, token: CancellationToken) -> None:
        """Execute the task against the given context.

        Args:
            context: The shared context of the current run.
            token: The cancellation token of the current run.

        Raises:
            Exception: Any error raised is treated as a failure of the step.
        """
        ...


class FunctionTask[Context]:
    """Adapts a plain callable into a `Task`.

    Args:
        name: The name of the task.
        function: Callable taking the context and the cancellation token. Coroutine functions are
            awaited, plain functions are called in the event loop thread.
    """

    def __init__(self, name: str, function: TaskFunction[Context]) -> None:
        self.name = name
        self.function = function

    def __repr__(self) -> str:
        return f"FunctionTask(name={self.name})"

    async def execute(self, context: Context, token: CancellationToken) -> None:
        result = self.function(context, token)
        if inspect.isawaitable(result):
            await result


class NoOpTask[Context]:
    """A task that does nothing and always succeeds.

    The builder substitutes it for steps whose condition evaluates to false, so that skipped steps
    still show up in hooks, middleware and traces.
    """

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"NoOpTask(name={self.name})"

    async def execute(self, context: Context, token: CancellationToken) -> None:
        return None
