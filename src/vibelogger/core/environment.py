"""
Execution environment snapshot attached to every log entry.

An AI reviewer reading a log file usually has no other way to know where the
code ran, so each entry carries the operating system, platform, CPU
architecture and Python runtime that produced it. The snapshot is taken per
entry; the underlying platform calls are cached by the standard library so
this is cheap.

Example:
    >>> from vibelogger.core.environment import capture_environment
    >>> env = capture_environment()
    >>> env.runtime
    'CPython'
"""

import platform
import sys
from dataclasses import asdict, dataclass
from typing import Dict


@dataclass(frozen=True)
class EnvironmentInfo:
    """
    Snapshot of the runtime environment.

    Attributes:
        os: Operating system name (e.g. Linux, Darwin, Windows)
        platform: ``sys.platform`` identifier (e.g. linux, darwin, win32)
        architecture: Machine architecture (e.g. x86_64, arm64)
        runtime: Python implementation (e.g. CPython, PyPy)
        runtime_version: Python version string (e.g. 3.12.1)
    """

    os: str
    platform: str
    architecture: str
    runtime: str
    runtime_version: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


UNKNOWN = "unknown"


def _probe(fn) -> str:
    try:
        return fn() or UNKNOWN
    except Exception:
        return UNKNOWN


def capture_environment() -> EnvironmentInfo:
    """Capture the current environment. Never raises."""
    return EnvironmentInfo(
        os=_probe(platform.system),
        platform=sys.platform or UNKNOWN,
        architecture=_probe(platform.machine),
        runtime=_probe(platform.python_implementation),
        runtime_version=_probe(platform.python_version),
    )
