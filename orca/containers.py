"""Dependency injection glue for orchestrators.

This module binds orchestrators into dependency-injector containers: it resolves steps registered
by type from container providers, and exposes built orchestrators as providers with a chosen
lifetime.
"""

from collections.abc import Callable
from enum import Enum
from typing import Any

from dependency_injector import containers, providers
from loguru import logger

from orca.pipelines import Orchestrator, OrchestratorBuilder, TaskResolutionError
from orca.settings import OrcaSettings


class ServiceLifetime(str, Enum):
    """Lifetime of an orchestrator provided by a container.

    - `TRANSIENT`: A new orchestrator on every call.
    - `SINGLETON`: One orchestrator for the container.
    - `SCOPED`: One orchestrator per `contextvars` context (for example, per asyncio task tree).
    """

    TRANSIENT = "transient"
    SINGLETON = "singleton"
    SCOPED = "scoped"


_LIFETIME_PROVIDERS: dict[ServiceLifetime, type[providers.Provider]] = {
    ServiceLifetime.TRANSIENT: providers.Factory,
    ServiceLifetime.SINGLETON: providers.Singleton,
    ServiceLifetime.SCOPED: providers.ContextLocalSingleton,
}


class ContainerResolver:
    """Resolves task types from the providers of a dependency-injector container.

    A provider matches when it provides exactly the requested type. The container keeps full
    control over instance lifetime (factory, singleton, ...).

    Args:
        container: The container to look providers up in.
    """

    def __init__(self, container: containers.Container) -> None:
        self._container = container

    def __repr__(self) -> str:
        return f"ContainerResolver(container={type(self._container).__name__})"

    def resolve(self, task_type: type) -> object | None:
        for name, provider in self._container.providers.items():
            if getattr(provider, "provides", None) is task_type:
                logger.debug(f"Resolving {task_type.__name__} from provider '{name}'")
                try:
                    return provider()
                except Exception as e:
                    raise TaskResolutionError(
                        task_type, f"provider '{name}' failed: {e}"
                    ) from e
        return None


type BuilderConfiguration = Callable[[OrchestratorBuilder[Any]], object]
"""Callable that registers steps and options on a fresh builder."""


def build_orchestrator(
    configure: BuilderConfiguration,
    container: containers.Container | None = None,
    settings: OrcaSettings | None = None,
) -> Orchestrator[Any]:
    """Create a builder, wire it to the container and build an orchestrator.

    Args:
        configure: Callable registering steps and options on the builder.
        container: Optional container used to resolve steps registered by type.
        settings: Optional settings seeding the builder defaults.

    Returns:
        The built orchestrator.
    """
    builder = OrchestratorBuilder[Any](settings)
    if container is not None:
        builder.use_resolver(ContainerResolver(container))
    configure(builder)
    return builder.build()


def orchestrator_provider(
    configure: BuilderConfiguration,
    container: Any = None,
    settings: Any = None,
    lifetime: ServiceLifetime = ServiceLifetime.SINGLETON,
) -> providers.Provider:
    """Create a provider of orchestrators with the given lifetime.

    Inside a declarative container, pass `providers.Self()` as `container` so that steps
    registered by type are resolved from the same container:

        class AppContainer(containers.DeclarativeContainer):
            __self__ = providers.Self()
            settings = providers.Singleton(OrcaSettings)
            load_task = providers.Factory(LoadTask)
            orchestrator = orchestrator_provider(
                lambda b: b.add_step(LoadTask), container=__self__, settings=settings
            )

    Args:
        configure: Callable registering steps and options on the builder.
        container: Container, or provider of one, used to resolve steps by type.
        settings: Settings, or provider of them, seeding the builder defaults.
        lifetime: Lifetime of the provided orchestrator. Defaults to `SINGLETON`.

    Returns:
        A dependency-injector provider.
    """
    provider_cls = _LIFETIME_PROVIDERS[lifetime]
    return provider_cls(
        build_orchestrator,
        configure=configure,
        container=container,
        settings=settings,
    )


class Container(containers.DeclarativeContainer):
    """Base container with the shared services of orchestrated applications."""

    # Root settings - loaded from environment/.env
    settings = providers.Singleton(OrcaSettings)

    # Logger - use loguru global logger
    log = providers.Object(logger)


def create_container() -> Container:
    """Create and initialize the DI container.

    Returns:
        Initialized Container instance.
    """
    container = Container()
    return container


# Global container instance
container = create_container()
