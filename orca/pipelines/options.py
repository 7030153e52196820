"""Defines the error handling policy, lifecycle hooks and middleware of an orchestrator."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Self

from orca.pipelines.cancellation import CancellationToken
from orca.pipelines.tasks import Task


class ErrorHandlingStrategy(str, Enum):
    """What the orchestrator does after a step fails.

    - `STOP_ON_ERROR`: Re-raise the step's error and stop the run.
    - `SKIP_FAILED`: Swallow the error and continue with the next step.

    In both cases the step-failed hook is notified first.
    """

    STOP_ON_ERROR = "stop_on_error"
    SKIP_FAILED = "skip_failed"


type StepHook[Context] = Callable[[Task[Context], Context], Awaitable[None] | None]
"""Hook called with the task and the context. Awaitable results are awaited."""

type StepFailedHook[Context] = Callable[
    [Task[Context], Exception, Context], Awaitable[None] | None
]
"""Hook called with the task, the error it raised and the context."""

type Next = Callable[[], Awaitable[None]]
"""Continuation that runs the remaining middleware and, innermost, the task itself."""

type Middleware[Context] = Callable[
    [Task[Context], Context, Next, CancellationToken], Awaitable[None]
]
"""Wrapper around a task execution.

It receives the task, the context, the `next` continuation and the cancellation token, and may run
logic before, after or instead of awaiting `next()`.
"""


@dataclass
class OrchestratorOptions[Context]:
    """Configuration of an orchestrator.

    Options are mutable while a builder owns them. Building an orchestrator takes a copy, so an
    orchestrator never observes later changes.

    Attributes:
        error_strategy: The error handling strategy. Defaults to `STOP_ON_ERROR`.
        on_step_started: Optional hook awaited before each step executes.
        on_step_completed: Optional hook awaited after each step succeeds.
        on_step_failed: Optional hook awaited after each step fails.
    """

    error_strategy: ErrorHandlingStrategy = ErrorHandlingStrategy.STOP_ON_ERROR
    on_step_started: StepHook[Context] | None = None
    on_step_completed: StepHook[Context] | None = None
    on_step_failed: StepFailedHook[Context] | None = None
    _middlewares: list[Middleware[Context]] = field(default_factory=list, init=False, repr=False)

    @property
    def middlewares(self) -> tuple[Middleware[Context], ...]:
        """Get the registered middleware, first registered first."""
        return tuple(self._middlewares)

    def use(self, middleware: Middleware[Context]) -> Self:
        """Register a middleware.

        Middleware registered first is the outermost one: it runs first and wraps all the others.

        Args:
            middleware: The middleware to register.

        Returns:
            The options, to allow chaining.
        """
        self._middlewares.append(middleware)
        return self

    def copy(self) -> "OrchestratorOptions[Context]":
        """Return an independent copy of the options."""
        clone = replace(self)
        clone._middlewares = list(self._middlewares)
        return clone
