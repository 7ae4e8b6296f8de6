"""
vibelogger diagnostics logging.

Internal structured logging used by vibelogger to report its own problems
(failed log file writes, configuration fallbacks, advisory size warnings).
It is separate from the entries a VibeLogger produces for applications.

Example:
    >>> from vibelogger.core.logging import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.warning("config_field_invalid", field="max_memory_logs")
"""

from vibelogger.core.logging.logger import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
