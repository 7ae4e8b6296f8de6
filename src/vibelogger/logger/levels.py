"""
Severity levels for log entries.
"""

import logging
from enum import Enum
from typing import Any


class LogLevel(str, Enum):
    """
    Severity of a log entry, totally ordered from DEBUG to CRITICAL.

    Members are strings so they serialize as their name and compare equal
    to plain strings (``LogLevel.INFO == "INFO"``).
    """

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @property
    def severity(self) -> int:
        """Matching numeric level of the standard logging module."""
        return _SEVERITY[self]

    def __lt__(self, other: Any) -> bool:
        if isinstance(other, LogLevel):
            return self.severity < other.severity
        return NotImplemented

    def __le__(self, other: Any) -> bool:
        if isinstance(other, LogLevel):
            return self.severity <= other.severity
        return NotImplemented

    def __gt__(self, other: Any) -> bool:
        if isinstance(other, LogLevel):
            return self.severity > other.severity
        return NotImplemented

    def __ge__(self, other: Any) -> bool:
        if isinstance(other, LogLevel):
            return self.severity >= other.severity
        return NotImplemented

    @classmethod
    def coerce(cls, value: Any) -> "LogLevel":
        """
        Map a member, a level name or a stdlib numeric level to a member.

        Numeric levels round down to the nearest known level, names are
        case-insensitive (``WARN`` and ``FATAL`` are accepted). Anything else
        becomes INFO.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            return cls.INFO
        if isinstance(value, int):
            chosen = cls.DEBUG
            for member in cls:
                if value >= member.severity:
                    chosen = member
            return chosen
        if isinstance(value, str):
            name = value.strip().upper()
            name = {"WARN": "WARNING", "FATAL": "CRITICAL"}.get(name, name)
            if name in cls.__members__:
                return cls[name]
        return cls.INFO


_SEVERITY = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.CRITICAL: logging.CRITICAL,
}
