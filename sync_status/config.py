"""Configuration objects for sync-status."""

from dataclasses import dataclass
import logging


@dataclass(frozen=True)
class StatusLogConfig:
    """Configuration for logging object status reports."""

    level: int = logging.DEBUG
    """Log level at which status reports are emitted."""


DEFAULT_LOG_CONFIG = StatusLogConfig()
