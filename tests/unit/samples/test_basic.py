import pytest

from orca.pipelines import StepStatus
from orca.samples.basic import (
    AddTask,
    CalculationContext,
    MultiplyTask,
    build_basic_orchestrator,
)


class DescribeBasicSample:
    @pytest.mark.asyncio
    async def it_adds_then_multiplies_by_ten(self) -> None:
        context = CalculationContext(num1=1, num2=2)

        result = await build_basic_orchestrator().run(context)

        assert context.result == 30
        assert [trace.name for trace in result.step_traces] == ["AddTask", "MultiplyTask"]
        assert all(trace.status == StepStatus.SUCCESS for trace in result.step_traces)

    @pytest.mark.asyncio
    async def it_reports_each_started_step(self) -> None:
        started: list[tuple[str, int]] = []

        def on_started(task, context: CalculationContext) -> None:
            started.append((task.name, context.result))

        await build_basic_orchestrator(on_started=on_started).run(CalculationContext(2, 3))

        assert started == [("AddTask", 0), ("MultiplyTask", 5)]

    @pytest.mark.asyncio
    async def it_materializes_fresh_tasks_per_run(self) -> None:
        orchestrator = build_basic_orchestrator()
        first, second = CalculationContext(1, 1), CalculationContext(5, 5)

        await orchestrator.run(first)
        await orchestrator.run(second)

        assert (first.result, second.result) == (20, 100)


class DescribeSampleTasks:
    @pytest.mark.asyncio
    async def it_multiplies_the_current_result(self) -> None:
        context = CalculationContext(result=7)

        await MultiplyTask().execute(context, None)

        assert context.result == 70

    def it_names_tasks_after_their_type(self) -> None:
        assert AddTask.name == "AddTask"
        assert MultiplyTask.name == "MultiplyTask"
