"""
Bridge from the standard logging module to VibeLogger.

Existing code that logs through ``logging.getLogger(...)`` can feed a
VibeLogger by attaching a VibeLoggingHandler. Structured fields travel in
the ``extra`` mapping:

    >>> std_logger, vibe = setup_vibe_logging("my_app")
    >>> std_logger.info(
    ...     "User logged in",
    ...     extra={
    ...         "operation": "login",
    ...         "context": {"user_id": 42},
    ...         "ai_todo": "Flag unusual login times",
    ...     },
    ... )
    >>> vibe.get_logs()[0].operation
    'login'
"""

import logging
from typing import Any, Dict, Mapping, Optional, Tuple

from vibelogger.core.logging.logger import is_diagnostics_logger
from vibelogger.logger.engine import ConfigInput, VibeLogger
from vibelogger.logger.levels import LogLevel


class VibeLoggingHandler(logging.Handler):
    """
    logging.Handler that forwards records to a VibeLogger.

    Records from vibelogger's own diagnostics loggers are ignored, so a
    failing log file cannot feed back into itself.
    """

    def __init__(self, vibe_logger: VibeLogger, level: int = logging.NOTSET):
        super().__init__(level)
        self.vibe_logger = vibe_logger

    def emit(self, record: logging.LogRecord) -> None:
        if is_diagnostics_logger(record.name):
            return
        try:
            operation = getattr(record, "operation", None) or (
                record.funcName
                if record.funcName and record.funcName != "<module>"
                else record.name
            )
            raw_context = getattr(record, "context", None)
            context: Dict[str, Any]
            if isinstance(raw_context, Mapping):
                context = dict(raw_context)
            else:
                context = {} if raw_context is None else {"value": raw_context}
            context.setdefault("logger_name", record.name)
            human_note = getattr(record, "human_note", None)
            ai_todo = getattr(record, "ai_todo", None)
            message = record.getMessage()

            if record.exc_info and record.exc_info[1] is not None:
                context.setdefault("log_message", message)
                self.vibe_logger.log_exception(
                    operation,
                    record.exc_info[1],
                    context=context,
                    human_note=human_note,
                    ai_todo=ai_todo,
                    level=LogLevel.coerce(record.levelno),
                )
            else:
                self.vibe_logger.log(
                    LogLevel.coerce(record.levelno),
                    operation,
                    message,
                    context=context,
                    human_note=human_note,
                    ai_todo=ai_todo,
                )
        except Exception:
            self.handleError(record)


def setup_vibe_logging(
    logger_name: Optional[str] = None,
    config: ConfigInput = None,
    level: int = logging.DEBUG,
) -> Tuple[logging.Logger, VibeLogger]:
    """
    Attach a new VibeLogger to a stdlib logger.

    Args:
        logger_name: stdlib logger to attach to, None for the root logger
        config: Configuration for the new VibeLogger
        level: Level set on the stdlib logger and the handler

    Returns:
        Tuple of the stdlib logger and the VibeLogger receiving its records
    """
    vibe = VibeLogger(config)
    std_logger = logging.getLogger(logger_name)
    std_logger.setLevel(level)
    std_logger.addHandler(VibeLoggingHandler(vibe, level))
    return std_logger, vibe
