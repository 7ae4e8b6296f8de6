"""
Convenience constructors for VibeLogger.
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Union

from vibelogger.core.config.models import LoggerConfig
from vibelogger.core.config.settings import Settings, load_settings
from vibelogger.logger.engine import ConfigInput, VibeLogger


def create_logger(config: ConfigInput = None, **overrides: Any) -> VibeLogger:
    """
    Create a logger from a config (or mapping) plus keyword overrides.

    Example:
        >>> logger = create_logger(keep_logs_in_memory=True, auto_save=False)
    """
    on_write_error = overrides.pop("on_write_error", None)
    if overrides:
        base = LoggerConfig.resolve(config).model_dump()
        base.update(overrides)
        config = base
    return VibeLogger(config, on_write_error=on_write_error)


def default_log_path(
    project_name: str, log_dir: Union[str, Path] = "./logs"
) -> Path:
    """``<log_dir>/<project_name>/vibe_<YYYYmmdd_HHMMSS>.log``"""
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return Path(log_dir) / project_name / f"vibe_{stamp}.log"


def create_file_logger(
    project_name: str,
    log_dir: Union[str, Path] = "./logs",
    **overrides: Any,
) -> VibeLogger:
    """
    Create a logger that persists to a timestamped file for a project.

    Example:
        >>> logger = create_file_logger("my_project")
        >>> logger.log_file
        'logs/my_project/vibe_20250101_120000.log'
    """
    config = {
        "log_file": str(default_log_path(project_name, log_dir)),
        "auto_save": True,
        "create_dirs": True,
    }
    config.update(overrides)
    return create_logger(config)


def create_env_logger(settings: Optional[Settings] = None) -> VibeLogger:
    """
    Create a logger configured from ``VIBE_*`` environment variables.

    Malformed values fall back to their defaults instead of raising.
    """
    settings = settings or load_settings()
    return VibeLogger(settings.to_logger_config())
