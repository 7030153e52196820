"""Configuration and setup for logging in orchestrated pipelines."""

import sys
from typing import Any

from loguru import logger

from orca.pipelines import OrchestratorOptions, Task
from orca.settings import OrcaSettings


class LoggingHooks:
    """Lifecycle hooks that log step events.

    Use `attach` to install all three hooks on an options object, replacing any hooks already set:

        builder.configure(LoggingHooks().attach)
    """

    def on_step_started(self, task: Task[Any], context: Any) -> None:
        with logger.contextualize(step_name=task.name):
            logger.info(f"{task.name}: Starting step")

    def on_step_completed(self, task: Task[Any], context: Any) -> None:
        with logger.contextualize(step_name=task.name):
            logger.success(f"{task.name}: Step completed successfully")

    def on_step_failed(self, task: Task[Any], error: Exception, context: Any) -> None:
        with logger.contextualize(step_name=task.name, error=str(error)):
            logger.error(f"{task.name}: {error}")

    def attach(self, options: OrchestratorOptions[Any]) -> OrchestratorOptions[Any]:
        options.on_step_started = self.on_step_started
        options.on_step_completed = self.on_step_completed
        options.on_step_failed = self.on_step_failed
        return options


def configure_logging(settings: OrcaSettings) -> None:
    logger.remove()  # Remove default handler

    if settings.serialize_logs:
        logger.add(
            sys.stderr,
            serialize=True,
            level=settings.log_level,
            format="{message}",
            backtrace=True,
            diagnose=settings.debug,
        )
        return

    logger.add(
        sys.stderr,
        level=settings.log_level,
        backtrace=True,
        diagnose=settings.debug,
    )
