"""
Exception hierarchy for vibelogger.

The logging path never lets one of these escape to the caller. They exist as
structured descriptions of failures that happen inside the logger (a file
that could not be written, a configuration value that had to be replaced)
so that they can be reported through diagnostics or an error hook and then
discarded.

Exception Hierarchy:
    VibeLoggerError (base)
    ├── ConfigurationError: Invalid or contradictory logger configuration
    └── PersistenceError: Log file could not be written or read

Example:
    >>> error = PersistenceError(
    ...     "Log directory does not exist",
    ...     error_code="LOG_DIR_MISSING",
    ...     details={"path": "/invalid/path/file.log"},
    ... )
    >>> error.error_code
    'LOG_DIR_MISSING'
"""

from typing import Any, Dict, Optional


class VibeLoggerError(Exception):
    """
    Base exception class for all vibelogger errors.

    Attributes:
        message (str): Human-readable error description
        error_code (str): Machine-readable error identifier, defaults to the
            class name
        details (Dict[str, Any]): Additional contextual information
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Serializable view used by diagnostics and error hooks."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(VibeLoggerError):
    """
    Raised when a configuration value is invalid.

    The engine itself never raises this; configuration resolution records it
    while falling back to safe defaults.

    Example:
        >>> raise ConfigurationError(
        ...     "max_memory_logs must be positive",
        ...     error_code="CONFIG_INVALID_VALUE",
        ...     details={"field": "max_memory_logs", "value": -5},
        ... )
    """

    pass


class PersistenceError(VibeLoggerError):
    """
    Raised when a log file cannot be written or read.

    Common scenarios:
        - Parent directory missing and directory creation disabled
        - Permission denied on the log file or its directory
        - Disk full or invalid path
        - Reading a log file that does not exist
    """

    pass
