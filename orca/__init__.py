"""Orca: in-process asynchronous task pipelines."""

from orca.pipelines import (
    CancellationToken,
    ErrorHandlingStrategy,
    FunctionTask,
    NoOpTask,
    Orchestrator,
    OrchestratorBuilder,
    OrchestratorOptions,
    ParallelGroupTask,
    PipelineCancelledError,
    Task,
    TaskResolutionError,
)
from orca.settings import OrcaSettings

__all__ = [
    "CancellationToken",
    "ErrorHandlingStrategy",
    "FunctionTask",
    "NoOpTask",
    "Orchestrator",
    "OrchestratorBuilder",
    "OrchestratorOptions",
    "ParallelGroupTask",
    "PipelineCancelledError",
    "Task",
    "TaskResolutionError",
    "OrcaSettings",
]
