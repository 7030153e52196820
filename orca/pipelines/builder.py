from collections.abc import Callable
from typing import TYPE_CHECKING, Self

from orca.pipelines.options import OrchestratorOptions
from orca.pipelines.orchestrator import Orchestrator
from orca.pipelines.resolver import Resolver
from orca.pipelines.steps import (
    InstanceStepFactory,
    StepCondition,
    StepFactory,
    TypeStepFactory,
)
from orca.pipelines.tasks import Task

if TYPE_CHECKING:
    from orca.settings import OrcaSettings


class OrchestratorBuilder[Context]:
    """Accumulates steps and options, and builds immutable orchestrators.

    The builder stays usable after `build()`; later changes only affect orchestrators built
    afterwards.

    Args:
        settings: Optional settings used to seed the default error handling strategy.

    Example:
        ```python
        orchestrator = (
            OrchestratorBuilder[MyContext]()
            .add_step(LoadTask)
            .add_step(ReportTask(), condition=lambda ctx: ctx.should_report)
            .configure(lambda o: o.use(RetryMiddleware(max_retries=2)))
            .build()
        )
        await orchestrator.run(MyContext())
        ```
    """

    _task_factories: list[StepFactory[Context]]

    def __init__(self, settings: "OrcaSettings | None" = None) -> None:
        self._task_factories = []
        self._options = OrchestratorOptions[Context]()
        self._resolver: Resolver | None = None
        if settings is not None:
            self._options.error_strategy = settings.error_strategy

    def __repr__(self) -> str:
        return f"OrchestratorBuilder(steps={len(self._task_factories)})"

    def add_step(
        self,
        step: type[Task[Context]] | Task[Context],
        condition: StepCondition[Context] | None = None,
    ) -> Self:
        """Append a step to the pipeline.

        Args:
            step: A task class, resolved on every run through the resolver or constructed without
                arguments, or a task instance reused on every run.
            condition: Optional condition evaluated against the run's context. When it returns
                false, a no-op task named "Skipped <name>" runs in place of the step.

        Returns:
            The builder, to allow chaining.

        Raises:
            TypeError: If `step` is neither a class nor a task.
        """
        if isinstance(step, type):
            self._task_factories.append(TypeStepFactory(step, condition))
        elif isinstance(step, Task):
            self._task_factories.append(InstanceStepFactory(step, condition))
        else:
            raise TypeError(f"Expected a task or a task class, got {step!r}")
        return self

    def use_resolver(self, resolver: Resolver | None) -> Self:
        """Attach the resolver used to materialize steps registered by type."""
        self._resolver = resolver
        return self

    def configure(self, configure: Callable[[OrchestratorOptions[Context]], object]) -> Self:
        """Apply `configure` to the options. Calls apply in order.

        Returns:
            The builder, to allow chaining.
        """
        configure(self._options)
        return self

    def build(self) -> Orchestrator[Context]:
        """Build an orchestrator from a snapshot of the current steps and options."""
        return Orchestrator(list(self._task_factories), self._options.copy(), self._resolver)
