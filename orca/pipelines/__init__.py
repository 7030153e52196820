from orca.pipelines.builder import OrchestratorBuilder
from orca.pipelines.cancellation import CancellationToken
from orca.pipelines.context import Context
from orca.pipelines.errors import OrchestratorError, PipelineCancelledError, TaskResolutionError
from orca.pipelines.middleware import RetryMiddleware
from orca.pipelines.options import (
    ErrorHandlingStrategy,
    Middleware,
    Next,
    OrchestratorOptions,
    StepFailedHook,
    StepHook,
)
from orca.pipelines.orchestrator import Orchestrator, PipelineRunResult, StepStatus, StepTrace
from orca.pipelines.parallel import ParallelGroupTask
from orca.pipelines.resolver import Resolver
from orca.pipelines.steps import InstanceStepFactory, StepCondition, StepFactory, TypeStepFactory
from orca.pipelines.tasks import FunctionTask, NoOpTask, Task

__all__ = [
    # Core types
    "Task",
    "FunctionTask",
    "NoOpTask",
    "ParallelGroupTask",
    "Context",
    "CancellationToken",
    "Resolver",
    # Steps
    "StepCondition",
    "StepFactory",
    "TypeStepFactory",
    "InstanceStepFactory",
    # Configuration
    "ErrorHandlingStrategy",
    "OrchestratorOptions",
    "StepHook",
    "StepFailedHook",
    "Middleware",
    "Next",
    "RetryMiddleware",
    # Execution
    "OrchestratorBuilder",
    "Orchestrator",
    "PipelineRunResult",
    "StepStatus",
    "StepTrace",
    # Errors
    "OrchestratorError",
    "TaskResolutionError",
    "PipelineCancelledError",
]
