class OrchestratorError(Exception):
    """Base exception for errors raised by the orchestrator itself."""


class TaskResolutionError(OrchestratorError):
    """Raised when a step registered by type can be neither resolved nor constructed.

    It always propagates out of the run, regardless of the error handling strategy.
    """

    def __init__(self, task_type: type, reason: str) -> None:
        self.task_type = task_type
        self.reason = reason
        super().__init__(f"Cannot resolve task '{task_type.__name__}': {reason}")


class PipelineCancelledError(OrchestratorError):
    """Raised when a pipeline run observes a cancelled token.

    Cancellation is not a step failure: it bypasses the step-failed hook and the error handling
    strategy.
    """

    def __init__(self, message: str = "Pipeline run was cancelled") -> None:
        super().__init__(message)
