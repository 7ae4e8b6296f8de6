"""
Diagnostics logging for vibelogger itself.

vibelogger produces structured entries for the applications that use it, but
it also needs somewhere to report its own trouble: a log file that could not
be written, a configuration value that had to be replaced, a file that grew
past its advisory size. Those reports go through structlog on top of the
standard library logging module, under the ``vibelogger`` logger namespace,
and never through a VibeLogger instance.

Functions:
    setup_logging(): Initialize diagnostics logging configuration
    get_logger(name): Get a configured structlog logger

Configuration:
    Controlled by the resolved Settings (environment variables):
    - VIBE_LOG_LEVEL: Minimum diagnostics level (default: WARNING)
    - VIBE_LOG_FORMAT: Output format (json/text, default: text)

Example:
    >>> from vibelogger.core.logging.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.warning("log_write_failed", path="/tmp/app.log", error="disk full")
"""

import logging
import sys
from typing import TYPE_CHECKING, Any, List, Optional

import structlog
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from vibelogger.core.config.settings import Settings

DIAGNOSTICS_NAMESPACE = "vibelogger"
DEFAULT_LEVEL = "WARNING"
DEFAULT_FORMAT = "text"

# Shared by every diagnostics logger; setup_logging refills it in place.
_processors: List[Any] = []


def setup_logging(settings: Optional["Settings"] = None) -> None:
    """
    Initialize diagnostics logging.

    Builds the structlog processor chain shared by diagnostics loggers and
    attaches a single handler to the ``vibelogger`` stdlib logger. Neither the
    root logger nor structlog's global configuration is touched, so the host
    application keeps full control of its own logging setup.

    Handlers:
        - text format: Rich console handler on stderr
        - json format: plain stream handler on stderr with JSON rendering

    Args:
        settings: Resolved settings. When omitted, settings are read from the
            environment once.
    """
    log_level, log_format = DEFAULT_LEVEL, DEFAULT_FORMAT
    if settings is None:
        from vibelogger.core.config.settings import settings_with_fallback

        try:
            settings, _ = settings_with_fallback()
        except ValidationError:
            settings = None
    if settings is not None:
        log_level, log_format = settings.log_level, settings.log_format

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format.lower() == "json":
        processors.append(structlog.processors.JSONRenderer())
        handler: logging.Handler = logging.StreamHandler(sys.stderr)
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
        handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_level=True,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )

    _processors[:] = processors

    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter("%(message)s"))

    diagnostics = logging.getLogger(DIAGNOSTICS_NAMESPACE)
    for existing in list(diagnostics.handlers):
        diagnostics.removeHandler(existing)
    diagnostics.addHandler(handler)
    diagnostics.setLevel(log_level)
    diagnostics.propagate = False


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a diagnostics logger.

    Args:
        name (str): Logger name, typically ``__name__`` of the calling module.
            Names outside the ``vibelogger`` namespace are nested under it.

    Returns:
        structlog.stdlib.BoundLogger: Logger bound to the diagnostics handler

    Note:
        Logging is configured on first use if setup_logging() has not run.
    """
    if not _processors:
        setup_logging()
    if name != DIAGNOSTICS_NAMESPACE and not name.startswith(
        DIAGNOSTICS_NAMESPACE + "."
    ):
        name = f"{DIAGNOSTICS_NAMESPACE}.{name}"
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
    )


def is_diagnostics_logger(name: str) -> bool:
    """Whether a stdlib logger name belongs to the diagnostics namespace."""
    return name == DIAGNOSTICS_NAMESPACE or name.startswith(
        DIAGNOSTICS_NAMESPACE + "."
    )
