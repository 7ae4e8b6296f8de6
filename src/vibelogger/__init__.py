"""
vibelogger - AI-Native Structured Logging

vibelogger records what a program does as structured entries that an AI
reviewer (or a human) can analyze: every entry carries the operation, a
JSON-safe context, a correlation id, the runtime environment, the caller's
location, and optional notes addressed to the reviewer.

Key Features:
    - Structured entries with UTC timestamps and environment snapshots
    - Exception logging that accepts any value as the error
    - Bounded in-memory buffer with oldest-first eviction
    - JSON Lines file output that never breaks the calling program
    - Thread-safe logging with an asynchronous single-writer file queue
    - AI export of buffered or persisted entries, filtered by operation
    - Bridge from the standard logging module

Modules:
    core: Configuration, diagnostics logging, exceptions, environment probe
    logger: Entry building, buffer, file sink and the VibeLogger engine
    cli: Command-line tools for persisted log files

Example:
    >>> from vibelogger import create_file_logger
    >>> logger = create_file_logger("my_project")
    >>> logger.info("fetch_user", "Fetching user", context={"user_id": 7})
    >>> logger.log_exception("fetch_user", ValueError("user not found"))
    >>> print(logger.get_logs_for_ai("fetch_user"))
"""

__version__ = "0.1.0"
__author__ = "VibeCoding Team"
__description__ = "AI-native structured logging for LLM agent development."

from vibelogger.core.config.models import LoggerConfig
from vibelogger.core.config.settings import Settings
from vibelogger.logger import (
    MISSING,
    LogEntry,
    LogLevel,
    VibeLogger,
    VibeLoggingHandler,
    create_env_logger,
    create_file_logger,
    create_logger,
    setup_vibe_logging,
)

__all__ = [
    "MISSING",
    "LogEntry",
    "LogLevel",
    "LoggerConfig",
    "Settings",
    "VibeLogger",
    "VibeLoggingHandler",
    "create_env_logger",
    "create_file_logger",
    "create_logger",
    "setup_vibe_logging",
]
