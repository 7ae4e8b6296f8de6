"""
The VibeLogger engine.

VibeLogger ties the pieces together: it builds an entry, keeps it in the
memory buffer, hands it to the file sink, and returns it to the caller. It
is safe to share one instance between threads (and between asyncio tasks
that log through ``asyncio.to_thread``).

Concurrency Model:
    - The memory buffer serializes its own appends, evictions and snapshots.
    - File writes are submitted to a single-worker executor owned by the
      logger, so they run in submission order, one at a time, and a slow
      or stalled disk never blocks the logging call.
    - The file sink additionally serializes writes with its own lock.
    - Entries are built without any shared lock.

Failure Model:
    Nothing on the logging path raises. Persistence failures come back from
    the sink as WriteResult values, are reported through the optional
    ``on_write_error`` hook and diagnostics logging, and are dropped.

Example:
    >>> from vibelogger import create_logger
    >>> logger = create_logger({"log_file": "./logs/app.log"})
    >>> entry = logger.info(
    ...     "fetch_user",
    ...     "Fetching user profile",
    ...     context={"user_id": 123},
    ...     ai_todo="Check why this is slow",
    ... )
    >>> entry.level
    'INFO'
    >>> print(logger.get_logs_for_ai("fetch_user"))
"""

import json
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Any, List, Mapping, Optional, Union

from vibelogger.core.config.models import LoggerConfig
from vibelogger.core.logging.logger import get_logger
from vibelogger.logger.buffer import MemoryBuffer
from vibelogger.logger.builder import MISSING, LogEntryBuilder
from vibelogger.logger.correlation import resolve_correlation_id
from vibelogger.logger.entry import LogEntry
from vibelogger.logger.levels import LogLevel
from vibelogger.logger.sink import ErrorHook, FileSink

logger = get_logger(__name__)

ConfigInput = Union[LoggerConfig, Mapping[str, Any], None]


class VibeLogger:
    """
    Structured logger producing entries for AI and human review.

    Args:
        config: A LoggerConfig, a mapping of its fields, or None for
            defaults. Invalid values fall back to defaults.
        on_write_error: Called with the PersistenceError of every failed
            file write. Exceptions it raises are absorbed.
    """

    def __init__(
        self,
        config: ConfigInput = None,
        *,
        on_write_error: Optional[ErrorHook] = None,
    ):
        self._config = LoggerConfig.resolve(config)
        self._correlation_id = resolve_correlation_id(self._config.correlation_id)
        self._builder = LogEntryBuilder(self._correlation_id)
        self._buffer = MemoryBuffer(
            capacity=self._config.max_memory_logs,
            enabled=self._config.keep_logs_in_memory,
        )

        self._sink: Optional[FileSink] = None
        if self._config.persists_to_file:
            self._sink = FileSink(
                self._config.log_file,
                create_dirs=self._config.create_dirs,
                max_file_size_mb=self._config.max_file_size_mb,
                on_error=on_write_error,
            )

        self._executor: Optional[ThreadPoolExecutor] = None
        self._pending: Optional[Future] = None
        self._dispatch_lock = threading.Lock()
        self._closed = False

        logger.debug(
            "vibelogger_created",
            correlation_id=self._correlation_id,
            log_file=self.log_file,
            keep_logs_in_memory=self._config.keep_logs_in_memory,
            max_memory_logs=self._config.max_memory_logs,
        )

    @property
    def config(self) -> LoggerConfig:
        return self._config

    @property
    def log_file(self) -> Optional[str]:
        """File entries are persisted to, or None."""
        return str(self._sink.path) if self._sink is not None else None

    @property
    def sink(self) -> Optional[FileSink]:
        return self._sink

    def get_correlation_id(self) -> str:
        return self._correlation_id

    def log(
        self,
        level: Any,
        operation: str,
        message: str,
        *,
        context: Optional[Mapping[str, Any]] = None,
        human_note: Optional[str] = None,
        ai_todo: Optional[str] = None,
        correlation_id: Optional[str] = None,
    ) -> LogEntry:
        """
        Log an entry at ``level`` and return it.

        Args:
            level: LogLevel, level name, or stdlib numeric level
            operation: Short identifier of the action being logged
            message: Human-readable description
            context: Structured data; non-serializable values are replaced
            human_note: Note from a human for the AI reviewer
            ai_todo: Specific request to the AI reviewer
            correlation_id: Per-call override of the logger's id

        Returns:
            LogEntry: The built entry, even if persisting it failed.
        """
        entry = self._builder.build(
            level,
            operation,
            message,
            context=context,
            human_note=human_note,
            ai_todo=ai_todo,
            correlation_id=correlation_id,
        )
        return self._record(entry)

    def debug(self, operation: str, message: str, **kwargs: Any) -> LogEntry:
        return self.log(LogLevel.DEBUG, operation, message, **kwargs)

    def info(self, operation: str, message: str, **kwargs: Any) -> LogEntry:
        return self.log(LogLevel.INFO, operation, message, **kwargs)

    def warning(self, operation: str, message: str, **kwargs: Any) -> LogEntry:
        return self.log(LogLevel.WARNING, operation, message, **kwargs)

    def error(self, operation: str, message: str, **kwargs: Any) -> LogEntry:
        return self.log(LogLevel.ERROR, operation, message, **kwargs)

    def critical(self, operation: str, message: str, **kwargs: Any) -> LogEntry:
        return self.log(LogLevel.CRITICAL, operation, message, **kwargs)

    def log_exception(
        self,
        operation: str,
        error: Any = MISSING,
        *,
        context: Optional[Mapping[str, Any]] = None,
        human_note: Optional[str] = None,
        ai_todo: Optional[str] = None,
        correlation_id: Optional[str] = None,
        level: Any = LogLevel.ERROR,
    ) -> LogEntry:
        """
        Log ``error``, whatever kind of value it is, at ``level``
        (ERROR unless given).

        Exceptions contribute their traceback as ``stack_trace``; every
        entry gets ``error_type`` and ``original_error`` in its context.
        """
        entry = self._builder.build_from_exception(
            operation,
            error,
            context=context,
            human_note=human_note,
            ai_todo=ai_todo,
            correlation_id=correlation_id,
            level=level,
        )
        return self._record(entry)

    def get_logs(self) -> List[LogEntry]:
        """Entries currently held in memory, oldest first."""
        return self._buffer.snapshot()

    def get_logs_for_ai(self, operation_filter: Optional[str] = None) -> str:
        """
        Buffered entries as a JSON array for AI analysis.

        Args:
            operation_filter: Keep only entries whose operation contains
                this substring

        Returns:
            str: JSON array of entry dicts in buffer order
        """
        entries = self._buffer.snapshot()
        if operation_filter:
            entries = [e for e in entries if operation_filter in e.operation]
        return json.dumps(
            [e.to_dict() for e in entries], indent=2, ensure_ascii=False, default=str
        )

    def clear_logs(self) -> None:
        self._buffer.clear()

    def flush(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for file writes submitted so far.

        Returns:
            bool: True if all of them finished within ``timeout`` seconds
        """
        with self._dispatch_lock:
            pending = self._pending
        if pending is None:
            return True
        done, _ = wait([pending], timeout=timeout)
        return bool(done)

    def close(self) -> None:
        """
        Drain pending writes and stop the writer thread.

        Logging still works afterwards; writes then happen on the calling
        thread.
        """
        with self._dispatch_lock:
            executor, self._executor = self._executor, None
            self._closed = True
        if executor is not None:
            executor.shutdown(wait=True)

    def __enter__(self) -> "VibeLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _record(self, entry: LogEntry) -> LogEntry:
        self._buffer.append(entry)
        if self._sink is not None:
            self._dispatch(self._sink, entry)
        return entry

    def _dispatch(self, sink: FileSink, entry: LogEntry) -> None:
        with self._dispatch_lock:
            if not self._closed:
                if self._executor is None:
                    self._executor = ThreadPoolExecutor(
                        max_workers=1, thread_name_prefix="vibelogger-writer"
                    )
                try:
                    self._pending = self._executor.submit(sink.write, entry)
                    return
                except RuntimeError:
                    # interpreter shutdown
                    self._closed = True
        sink.write(entry)

    def __repr__(self) -> str:
        return (
            f"VibeLogger(correlation_id={self._correlation_id!r}, "
            f"log_file={self.log_file!r})"
        )
