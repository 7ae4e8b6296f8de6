"""
The vibelogger engine: entries, buffer, file sink and the VibeLogger itself.
"""

from vibelogger.logger.buffer import MemoryBuffer
from vibelogger.logger.builder import MISSING, ErrorKind, LogEntryBuilder
from vibelogger.logger.engine import VibeLogger
from vibelogger.logger.entry import LogEntry
from vibelogger.logger.factory import (
    create_env_logger,
    create_file_logger,
    create_logger,
)
from vibelogger.logger.handlers import VibeLoggingHandler, setup_vibe_logging
from vibelogger.logger.levels import LogLevel
from vibelogger.logger.sink import FileSink, WriteResult

__all__ = [
    "MISSING",
    "ErrorKind",
    "FileSink",
    "LogEntry",
    "LogEntryBuilder",
    "LogLevel",
    "MemoryBuffer",
    "VibeLogger",
    "VibeLoggingHandler",
    "WriteResult",
    "create_env_logger",
    "create_file_logger",
    "create_logger",
    "setup_vibe_logging",
]
