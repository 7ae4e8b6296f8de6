"""Exception types raised inside vibelogger."""

from vibelogger.core.exceptions.custom_exceptions import (
    ConfigurationError,
    PersistenceError,
    VibeLoggerError,
)

__all__ = ["VibeLoggerError", "ConfigurationError", "PersistenceError"]
