"""Tests for orca.containers module."""

import contextvars

from dependency_injector import containers, providers
import pytest

from orca.containers import (
    Container,
    ContainerResolver,
    ServiceLifetime,
    build_orchestrator,
    orchestrator_provider,
)
from orca.pipelines import (
    CancellationToken,
    ErrorHandlingStrategy,
    Orchestrator,
    TaskResolutionError,
)
from orca.settings import OrcaSettings


class DummyTask:
    name = "DummyTask"

    async def execute(self, context: list[str], token: CancellationToken) -> None:
        context.append(self.name)


class GreetingTask:
    name = "GreetingTask"

    def __init__(self, greeting: str) -> None:
        self.greeting = greeting

    async def execute(self, context: list[str], token: CancellationToken) -> None:
        context.append(self.greeting)


def add_dummy_step(builder) -> None:
    builder.add_step(DummyTask)


class TaskContainer(containers.DeclarativeContainer):
    __self__ = providers.Self()

    settings = providers.Singleton(OrcaSettings, error_strategy=ErrorHandlingStrategy.SKIP_FAILED)

    greeting_task = providers.Factory(GreetingTask, greeting="hello")

    orchestrator = orchestrator_provider(
        lambda builder: builder.add_step(GreetingTask),
        container=__self__,
        settings=settings,
    )


class DescribeContainerResolver:
    def it_resolves_registered_types(self) -> None:
        resolver = ContainerResolver(TaskContainer())

        task = resolver.resolve(GreetingTask)

        assert isinstance(task, GreetingTask)
        assert task.greeting == "hello"

    def it_returns_none_for_unregistered_types(self) -> None:
        resolver = ContainerResolver(TaskContainer())

        assert resolver.resolve(DummyTask) is None

    def it_respects_the_provider_lifetime(self) -> None:
        class SingletonContainer(containers.DeclarativeContainer):
            greeting_task = providers.Singleton(GreetingTask, greeting="once")

        resolver = ContainerResolver(SingletonContainer())

        assert resolver.resolve(GreetingTask) is resolver.resolve(GreetingTask)

    def it_wraps_provider_failures_in_a_resolution_error(self) -> None:
        class IncompleteContainer(containers.DeclarativeContainer):
            greeting_task = providers.Factory(GreetingTask)

        resolver = ContainerResolver(IncompleteContainer())

        with pytest.raises(TaskResolutionError, match="greeting_task") as exc_info:
            resolver.resolve(GreetingTask)

        assert exc_info.value.task_type is GreetingTask
        assert isinstance(exc_info.value.__cause__, TypeError)


class DescribeBuildOrchestrator:
    @pytest.mark.asyncio
    async def it_builds_without_a_container(self) -> None:
        orchestrator = build_orchestrator(add_dummy_step)
        context: list[str] = []

        await orchestrator.run(context)

        assert context == ["DummyTask"]

    def it_seeds_defaults_from_settings(self) -> None:
        settings = OrcaSettings(error_strategy=ErrorHandlingStrategy.SKIP_FAILED)

        orchestrator = build_orchestrator(add_dummy_step, settings=settings)

        assert orchestrator.error_strategy == ErrorHandlingStrategy.SKIP_FAILED


class DescribeOrchestratorProvider:
    class DescribeLifetimes:
        def it_creates_different_instances_when_transient(self) -> None:
            provider = orchestrator_provider(add_dummy_step, lifetime=ServiceLifetime.TRANSIENT)

            assert provider() is not provider()

        def it_returns_the_same_instance_when_singleton(self) -> None:
            provider = orchestrator_provider(add_dummy_step, lifetime=ServiceLifetime.SINGLETON)

            assert provider() is provider()

        def it_defaults_to_singleton(self) -> None:
            provider = orchestrator_provider(add_dummy_step)

            assert provider() is provider()

        def it_shares_within_a_scope_but_not_across_scopes_when_scoped(self) -> None:
            provider = orchestrator_provider(add_dummy_step, lifetime=ServiceLifetime.SCOPED)

            first_a, first_b = contextvars.Context().run(lambda: (provider(), provider()))
            second = contextvars.Context().run(provider)

            assert first_a is first_b
            assert first_a is not second

    class DescribeContainerWiring:
        @pytest.mark.asyncio
        async def it_resolves_steps_from_the_owning_container(self) -> None:
            container = TaskContainer()
            orchestrator = container.orchestrator()
            context: list[str] = []

            await orchestrator.run(context)

            assert isinstance(orchestrator, Orchestrator)
            assert context == ["hello"]

        def it_uses_the_container_settings(self) -> None:
            orchestrator = TaskContainer().orchestrator()

            assert orchestrator.error_strategy == ErrorHandlingStrategy.SKIP_FAILED

        def it_provides_independent_orchestrators_per_container(self) -> None:
            assert TaskContainer().orchestrator() is not TaskContainer().orchestrator()


class DescribeContainer:
    def it_provides_singleton_settings(self) -> None:
        container = Container()

        assert isinstance(container.settings(), OrcaSettings)
        assert container.settings() is container.settings()

    def it_provides_the_loguru_logger(self) -> None:
        from loguru import logger

        assert Container().log() is logger
