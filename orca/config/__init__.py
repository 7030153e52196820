"""Configuration helpers for orca applications."""

from orca.config.logging import LoggingHooks, configure_logging

__all__ = ["LoggingHooks", "configure_logging"]
