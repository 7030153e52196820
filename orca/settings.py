"""Application settings using Pydantic Settings.

This module defines the OrcaSettings class which loads configuration from environment variables
and .env files using pydantic-settings.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from orca.pipelines.options import ErrorHandlingStrategy


class OrcaSettings(BaseSettings):
    """Settings shared by orchestrators built from a container and by the CLI.

    Attributes:
        error_strategy (ErrorHandlingStrategy): Default error handling strategy of new builders.
        log_level (str): Minimum level of the stderr log sink.
        serialize_logs (bool): Whether log records are written as JSON.
        debug (bool): Whether tracebacks include variable values.
    """

    model_config = SettingsConfigDict(
        env_prefix="ORCA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    error_strategy: ErrorHandlingStrategy = Field(
        default=ErrorHandlingStrategy.STOP_ON_ERROR,
        description="Error handling strategy: 'stop_on_error' or 'skip_failed'",
    )
    log_level: str = Field(default="INFO", description="Minimum log level")
    serialize_logs: bool = Field(default=False, description="Serialize log records to JSON")
    debug: bool = Field(default=False, description="Enable diagnostic tracebacks")
