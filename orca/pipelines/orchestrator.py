"""Defines the orchestrator, which drives a pipeline run end to end."""

from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from functools import partial
import inspect
import time
from typing import Annotated, Any, final

from loguru import logger

from orca.pipelines.cancellation import CancellationToken
from orca.pipelines.errors import PipelineCancelledError
from orca.pipelines.options import ErrorHandlingStrategy, Next, OrchestratorOptions
from orca.pipelines.resolver import Resolver
from orca.pipelines.steps import StepFactory
from orca.pipelines.tasks import NoOpTask, Task


class StepStatus(Enum):
    """Outcome of a single step of a run.

    - `SUCCESS`: The task completed successfully.
    - `SKIPPED`: The step's condition was false and a no-op ran in its place.
    - `ERROR`: The task (or one of its middleware) raised.
    """

    SUCCESS = "success"
    SKIPPED = "skipped"
    ERROR = "error"


@dataclass
class StepTrace:
    """Trace information for a single step execution."""

    name: Annotated[str, "The name of the task that ran for the step."]
    duration: Annotated[float, "Duration of the step execution in seconds."]
    status: Annotated[StepStatus, "The status of the step execution."]
    error: Annotated[Exception | None, "The exception raised during step execution, if any."]


@dataclass
class PipelineRunResult[Context]:
    """Result of a run that was not aborted."""

    context: Annotated[Context, "The context the pipeline ran against."]
    step_traces: Annotated[list[StepTrace], "List of step execution traces, in step order."]

    @property
    def last_executed_step(self) -> str | None:
        """Get the name of the last executed step, if any."""
        if not self.step_traces:
            return None
        return self.step_traces[-1].name

    @property
    def errors(self) -> dict[str, Exception]:
        """Get a mapping of step names to errors swallowed during execution.

        Step names are not unique. When several failed steps share a name, the last one wins; use
        `step_traces` to see every step.
        """
        return {trace.name: trace.error for trace in self.step_traces if trace.error is not None}

    @property
    def durations(self) -> dict[str, float]:
        """Get a mapping of step names to their execution durations.

        As with `errors`, the last step wins when several steps share a name.
        """
        return {trace.name: trace.duration for trace in self.step_traces}

    def total_duration(self) -> float:
        """Calculate the total duration of the pipeline execution."""
        return sum(trace.duration for trace in self.step_traces)

    def succeeded(self) -> bool:
        """Check if every step succeeded or was skipped by its condition."""
        return all(trace.status != StepStatus.ERROR for trace in self.step_traces)

    def last_error(self) -> Exception | None:
        """Get the error of the last failed step, if any."""
        for trace in reversed(self.step_traces):
            if trace.error is not None:
                return trace.error
        return None


@final
class Orchestrator[Context]:
    """Runs a fixed sequence of steps against a caller-supplied context.

    An orchestrator is immutable once built and holds no per-run state, so it can be run many
    times, including concurrently over different contexts. Runs sharing one context are not
    synchronized.

    Args:
        task_factories: The step factories, in execution order.
        options: The error strategy, hooks and middleware. A private copy is kept.
        resolver: Optional resolver handed to every step factory.
    """

    def __init__(
        self,
        task_factories: Iterable[StepFactory[Context]],
        options: OrchestratorOptions[Context],
        resolver: Resolver | None = None,
    ) -> None:
        self._task_factories = tuple(task_factories)
        self._options = options.copy()
        self._resolver = resolver

    def __len__(self) -> int:
        return len(self._task_factories)

    def __repr__(self) -> str:
        return (
            f"Orchestrator(steps={len(self._task_factories)}, "
            f"error_strategy={self._options.error_strategy.value})"
        )

    @property
    def error_strategy(self) -> ErrorHandlingStrategy:
        return self._options.error_strategy

    async def run(
        self, context: Context, token: CancellationToken | None = None
    ) -> PipelineRunResult[Context]:
        """Run every step in order against `context`.

        Args:
            context: The shared context of this run.
            token: Optional cancellation token, checked before each step and passed to every
                middleware and task.

        Returns:
            The traces of the executed steps.

        Raises:
            PipelineCancelledError: If the token is cancelled at a step boundary.
            TaskResolutionError: If a step registered by type cannot be materialized.
            Exception: Under `STOP_ON_ERROR`, the original error of the first failing step, and in
                any case errors raised by hooks.
        """
        token = token or CancellationToken()
        step_traces: list[StepTrace] = []

        logger.info(f"Starting pipeline run with {len(self._task_factories)} step(s)")
        start_time = time.perf_counter()

        for factory in self._task_factories:
            token.raise_if_cancelled()
            task = factory(self._resolver, context)

            with logger.contextualize(step=task.name):
                await _notify(self._options.on_step_started, task, context)

                logger.debug(f"Starting step '{task.name}'")
                step_start_time = time.perf_counter()
                try:
                    await self._compose(task, context, token)()
                except PipelineCancelledError:
                    raise
                except Exception as e:
                    duration = time.perf_counter() - step_start_time
                    step_traces.append(StepTrace(task.name, duration, StepStatus.ERROR, e))
                    logger.debug(f"Step '{task.name}' failed after {duration:.2f}s: {e!r}")

                    await _notify(self._options.on_step_failed, task, e, context)

                    if self._options.error_strategy == ErrorHandlingStrategy.STOP_ON_ERROR:
                        logger.info(f"Pipeline run aborted at step '{task.name}'")
                        raise
                    logger.debug(f"Skipping failed step '{task.name}'")
                    continue

                duration = time.perf_counter() - step_start_time
                status = StepStatus.SKIPPED if isinstance(task, NoOpTask) else StepStatus.SUCCESS
                step_traces.append(StepTrace(task.name, duration, status, None))
                logger.debug(f"Step '{task.name}' finished in {duration:.2f}s ({status.value})")

                await _notify(self._options.on_step_completed, task, context)

        logger.info(f"Pipeline run finished in {time.perf_counter() - start_time:.2f}s")
        return PipelineRunResult(context=context, step_traces=step_traces)

    def _compose(self, task: Task[Context], context: Context, token: CancellationToken) -> Next:
        """Wrap the task execution in the middleware chain, first registered outermost."""
        pipeline: Next = partial(task.execute, context, token)
        for middleware in reversed(self._options.middlewares):
            pipeline = partial(middleware, task, context, pipeline, token)
        return pipeline


async def _notify(hook: Callable[..., Awaitable[None] | None] | None, *args: Any) -> None:
    """Invoke an optional hook, awaiting its result when needed."""
    if hook is None:
        return
    result = hook(*args)
    if inspect.isawaitable(result):
        await result
