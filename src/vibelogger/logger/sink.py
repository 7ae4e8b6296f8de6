"""
Fail-soft JSON Lines file sink.

Each entry becomes one self-contained JSON object on its own line, so a
reader (human or AI) can parse any line without the others. A write that
fails for any reason (missing directory, permissions, full disk) is turned
into a WriteResult carrying a PersistenceError; nothing is raised to the
caller and nothing is retried.
"""

import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

from vibelogger.core.exceptions.custom_exceptions import PersistenceError
from vibelogger.core.logging.logger import get_logger
from vibelogger.logger.entry import LogEntry

logger = get_logger(__name__)

ErrorHook = Callable[[PersistenceError], None]


@dataclass(frozen=True)
class WriteResult:
    """
    Outcome of one FileSink.write call.

    Attributes:
        ok: Whether the record was appended
        path: Target file
        bytes_written: Size of the appended record, 0 on failure
        error: Failure description when ``ok`` is False
    """

    ok: bool
    path: str
    bytes_written: int = 0
    error: Optional[PersistenceError] = None


class FileSink:
    """
    Appends log entries to a file, one JSON record per line.

    Writes are serialized by an instance lock; each write opens the file in
    append mode, writes the full line and flushes before the lock is
    released, so records never interleave and no file handle is held
    between writes.

    Args:
        path: Log file path
        create_dirs: Create missing parent directories on first write
        max_file_size_mb: Advisory size; exceeding it only emits a warning
        on_error: Called with the PersistenceError of every failed write
    """

    def __init__(
        self,
        path: Union[str, Path],
        *,
        create_dirs: bool = True,
        max_file_size_mb: Optional[float] = None,
        on_error: Optional[ErrorHook] = None,
    ):
        self._path = Path(path)
        self._create_dirs = create_dirs
        self._max_bytes = (
            int(max_file_size_mb * 1024 * 1024) if max_file_size_mb else None
        )
        self._on_error = on_error
        self._lock = threading.Lock()
        self._dir_ready = False
        self._size_warned = False
        self.failed_writes = 0
        self.successful_writes = 0

    @property
    def path(self) -> Path:
        return self._path

    def write(self, entry: LogEntry) -> WriteResult:
        """Append ``entry``. Never raises."""
        with self._lock:
            result = self._append(entry)
        if result.error is not None:
            self._report(result.error)
        return result

    def _append(self, entry: LogEntry) -> WriteResult:
        try:
            line = entry.to_json() + "\n"
            self._ensure_directory()
            with open(self._path, "a", encoding="utf-8") as f:
                f.write(line)
                f.flush()
                size = f.tell()
        except PersistenceError as e:
            return self._failed(e)
        except Exception as e:
            return self._failed(
                PersistenceError(
                    f"Failed to write log entry: {e}",
                    error_code="LOG_WRITE_ERROR",
                    details={"path": str(self._path), "exception": type(e).__name__},
                )
            )

        self.successful_writes += 1
        self._check_size(size)
        return WriteResult(
            ok=True, path=str(self._path), bytes_written=len(line.encode())
        )

    def _ensure_directory(self) -> None:
        if self._dir_ready:
            return
        parent = self._path.parent
        if not parent.is_dir():
            if not self._create_dirs:
                raise PersistenceError(
                    "Log directory does not exist and directory creation "
                    "is disabled",
                    error_code="LOG_DIR_MISSING",
                    details={"path": str(self._path), "directory": str(parent)},
                )
            parent.mkdir(parents=True, exist_ok=True)
        self._dir_ready = True

    def _failed(self, error: PersistenceError) -> WriteResult:
        self.failed_writes += 1
        error.details.setdefault("failed_writes", self.failed_writes)
        return WriteResult(ok=False, path=str(self._path), error=error)

    def _report(self, error: PersistenceError) -> None:
        # runs outside the write lock; the hook may log again
        first = error.details.get("failed_writes") == 1
        log = logger.warning if first else logger.debug
        log("log_write_failed", **error.to_dict())
        if self._on_error is not None:
            try:
                self._on_error(error)
            except Exception:
                logger.exception("log_error_hook_failed", path=str(self._path))

    def _check_size(self, size: int) -> None:
        if self._max_bytes is None or self._size_warned or size <= self._max_bytes:
            return
        self._size_warned = True
        logger.warning(
            "log_file_size_advisory_exceeded",
            path=str(self._path),
            size_bytes=size,
            advisory_limit_bytes=self._max_bytes,
        )

    def __repr__(self) -> str:
        return f"FileSink(path={os.fspath(self._path)!r})"
