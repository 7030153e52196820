from typing import Protocol


class Resolver(Protocol):
    """Capability used to resolve steps registered by type.

    Typically backed by a dependency injection container, which enables tasks with constructor
    dependencies. The resolver owns the lifetime of the instances it returns.
    """

    def resolve(self, task_type: type) -> object | None:
        """Return an instance of `task_type`, or None if nothing is registered for it."""
        ...
