"""Arithmetic sample: two steps sharing a calculation context."""

from dataclasses import dataclass

from orca.pipelines import CancellationToken, Orchestrator, OrchestratorBuilder, StepHook


@dataclass
class CalculationContext:
    num1: int = 0
    num2: int = 0
    result: int = 0


class AddTask:
    name = "AddTask"

    async def execute(self, context: CalculationContext, token: CancellationToken) -> None:
        context.result = context.num1 + context.num2


class MultiplyTask:
    name = "MultiplyTask"

    async def execute(self, context: CalculationContext, token: CancellationToken) -> None:
        context.result = context.result * 10


def build_basic_orchestrator(
    on_started: StepHook[CalculationContext] | None = None,
) -> Orchestrator[CalculationContext]:
    """Build the `(num1 + num2) * 10` pipeline, optionally reporting each started step."""

    def configure(options) -> None:
        options.on_step_started = on_started

    return (
        OrchestratorBuilder[CalculationContext]()
        .add_step(AddTask)
        .add_step(MultiplyTask)
        .configure(configure)
        .build()
    )
