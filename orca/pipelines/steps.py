"""Step factories.

A step is one position in a pipeline. It is backed by a factory that produces the task to run,
once per run, from the resolver and the run's context.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from orca.pipelines.errors import TaskResolutionError
from orca.pipelines.resolver import Resolver
from orca.pipelines.tasks import NoOpTask, Task

type StepCondition[Context] = Callable[[Context], bool]
"""Condition to determine if a step should execute. It receives the context of the run."""


class StepFactory[Context](Protocol):
    """Produces the task for a step, given the optional resolver and the run's context."""

    def __call__(self, resolver: Resolver | None, context: Context) -> Task[Context]: ...


def skipped_name(name: str) -> str:
    """Name of the no-op task substituted for a skipped step."""
    return f"Skipped {name}"


@dataclass(frozen=True)
class TypeStepFactory[Context]:
    """Step registered by task type.

    The resolver is consulted first. If it has nothing registered for the type, the task is
    constructed without arguments.

    Args:
        task_type: The task class to resolve.
        condition: Optional condition; when it evaluates to false the step yields a no-op.
    """

    task_type: type[Task[Context]]
    condition: StepCondition[Context] | None = None

    def __call__(self, resolver: Resolver | None, context: Context) -> Task[Context]:
        if self.condition is not None and not self.condition(context):
            return NoOpTask(skipped_name(self.task_type.__name__))

        if resolver is not None:
            instance = resolver.resolve(self.task_type)
            if instance is not None:
                if not isinstance(instance, Task):
                    raise TaskResolutionError(
                        self.task_type, f"resolver returned a non-task object {instance!r}"
                    )
                return instance

        try:
            instance = self.task_type()
        except Exception as e:
            raise TaskResolutionError(
                self.task_type,
                f"no resolver registration and construction without arguments failed: {e}",
            ) from e

        if not isinstance(instance, Task):
            raise TaskResolutionError(self.task_type, "constructed object is not a task")
        return instance


@dataclass(frozen=True)
class InstanceStepFactory[Context]:
    """Step registered with a task instance, returned as is on every run.

    Args:
        task: The task to run.
        condition: Optional condition; when it evaluates to false the step yields a no-op.
    """

    task: Task[Context]
    condition: StepCondition[Context] | None = None

    def __call__(self, resolver: Resolver | None, context: Context) -> Task[Context]:
        if self.condition is not None and not self.condition(context):
            return NoOpTask(skipped_name(self.task.name))
        return self.task
