"""
Reading persisted log files back.

Every line of a vibelogger file is an independent JSON record. The reader
parses them one at a time and skips lines that are blank or not valid JSON
objects (a partially written last line after a crash, for example) instead
of failing the whole file.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from vibelogger.core.exceptions.custom_exceptions import PersistenceError


@dataclass
class ReadResult:
    """Records parsed from a log file and the number of lines skipped."""

    entries: List[Dict[str, Any]] = field(default_factory=list)
    skipped_lines: int = 0


def read_log_file(
    path: Union[str, Path], operation_filter: Optional[str] = None
) -> ReadResult:
    """
    Parse a JSON Lines log file.

    Args:
        path: Log file to read
        operation_filter: Keep only records whose operation contains this
            substring

    Returns:
        ReadResult: Parsed records in file order

    Raises:
        PersistenceError: If the file does not exist or cannot be read
    """
    path = Path(path)
    try:
        lines = path.read_text(encoding="utf-8", errors="replace").splitlines()
    except OSError as e:
        raise PersistenceError(
            f"Cannot read log file: {path}",
            error_code="LOG_READ_ERROR",
            details={"path": str(path), "exception": type(e).__name__},
        ) from e

    result = ReadResult()
    for line in lines:
        if not line.strip():
            continue
        try:
            record = json.loads(line)
        except json.JSONDecodeError:
            result.skipped_lines += 1
            continue
        if not isinstance(record, dict):
            result.skipped_lines += 1
            continue
        if operation_filter and operation_filter not in str(
            record.get("operation", "")
        ):
            continue
        result.entries.append(record)
    return result


def export_for_ai(
    path: Union[str, Path],
    operation_filter: Optional[str] = None,
    limit: Optional[int] = None,
) -> str:
    """
    A log file's records as a JSON array, newest ``limit`` records only.
    """
    entries = read_log_file(path, operation_filter).entries
    if limit is not None and limit >= 0:
        entries = entries[-limit:] if limit else []
    return json.dumps(entries, indent=2, ensure_ascii=False)
