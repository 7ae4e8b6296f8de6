"""
Environment based configuration for vibelogger.

Settings reads the ``VIBE_*`` environment variables (and an optional .env
file) once and turns them into the immutable LoggerConfig the engine
consumes. The engine never reads the environment itself; only callers that
explicitly opt in (create_env_logger, the CLI) go through this module.

Environment Variables:
    VIBE_LOG_FILE: Log file path (unset for no file output)
    VIBE_AUTO_SAVE: Persist entries as they are logged (default: true)
    VIBE_KEEP_LOGS_IN_MEMORY: Keep entries in memory (default: true)
    VIBE_MAX_MEMORY_LOGS: In-memory buffer capacity (default: 1000)
    VIBE_CREATE_DIRS: Create missing log directories (default: true)
    VIBE_CORRELATION_ID: Fixed correlation id (default: generated)
    VIBE_MAX_FILE_SIZE_MB: Advisory log file size (default: 10)
    VIBE_LOG_LEVEL: vibelogger's own diagnostics level (default: WARNING)
    VIBE_LOG_FORMAT: vibelogger's own diagnostics format, json/text

Example:
    >>> from vibelogger.core.config.settings import Settings
    >>> settings = Settings(log_file="/tmp/app.log", auto_save=True)
    >>> settings.to_logger_config().persists_to_file
    True
"""

from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from vibelogger.core.exceptions.custom_exceptions import ConfigurationError
from vibelogger.core.logging.logger import get_logger

if TYPE_CHECKING:
    from vibelogger.core.config.models import LoggerConfig


class Settings(BaseSettings):
    """
    vibelogger settings with environment variable support.

    Attributes:
        log_file: Log file path
        auto_save: Persist entries as they are logged
        keep_logs_in_memory: Keep entries in the in-memory buffer
        max_memory_logs: Buffer capacity
        create_dirs: Create missing log directories
        correlation_id: Fixed correlation id
        max_file_size_mb: Advisory log file size

        log_level: Diagnostics level (DEBUG/INFO/WARNING/ERROR/CRITICAL)
        log_format: Diagnostics format (json/text)
    """

    # Logger configuration
    log_file: Optional[str] = None
    auto_save: bool = True
    keep_logs_in_memory: bool = True
    max_memory_logs: Optional[int] = 1000
    create_dirs: bool = True
    correlation_id: Optional[str] = None
    max_file_size_mb: float = 10.0

    # Diagnostics logging
    log_level: str = "WARNING"
    log_format: str = "text"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Validate the diagnostics level is a supported value.

        Raises:
            ValueError: If the level is not a standard logging level
        """
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"VIBE_LOG_LEVEL must be one of: {valid_levels}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v.lower() not in ("json", "text"):
            raise ValueError("VIBE_LOG_FORMAT must be 'json' or 'text'")
        return v.lower()

    model_config = SettingsConfigDict(
        env_prefix="VIBE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    def to_logger_config(self) -> "LoggerConfig":
        """Build the immutable configuration consumed by the engine."""
        from vibelogger.core.config.models import LoggerConfig

        return LoggerConfig.resolve(
            {
                "log_file": self.log_file,
                "auto_save": self.auto_save,
                "keep_logs_in_memory": self.keep_logs_in_memory,
                "max_memory_logs": self.max_memory_logs,
                "create_dirs": self.create_dirs,
                "correlation_id": self.correlation_id,
                "max_file_size_mb": self.max_file_size_mb,
            }
        )


def get_settings() -> Settings:
    """Get a settings instance read from the current environment"""
    return Settings()


def settings_with_fallback() -> Tuple[Settings, Dict[str, str]]:
    """
    Read settings, replacing invalid environment values with their defaults.

    Nothing is logged here: diagnostics setup itself reads settings through
    this function.

    Returns:
        Tuple of the settings and a mapping of replaced field to the
        validation message

    Raises:
        ValidationError: If an error cannot be pinned to a single field
    """
    overrides: Dict[str, Any] = {}
    replaced: Dict[str, str] = {}
    while True:
        try:
            return Settings(**overrides), replaced
        except ValidationError as e:
            invalid: Dict[str, str] = {}
            for err in e.errors():
                field = str(err["loc"][0]) if err.get("loc") else ""
                if field in Settings.model_fields and field not in overrides:
                    invalid.setdefault(field, err["msg"])
            if not invalid:
                raise
            for field in invalid:
                overrides[field] = Settings.model_fields[field].default
            replaced.update(invalid)


def load_settings() -> Settings:
    """
    Settings from the environment that never fail on a malformed value.

    Each ``VIBE_*`` value that does not validate falls back to its default
    and is reported as a ConfigurationError through diagnostics logging.
    """
    settings, replaced = settings_with_fallback()
    if replaced:
        logger = get_logger(__name__)
        for field, reason in sorted(replaced.items()):
            error = ConfigurationError(
                f"Invalid VIBE_{field.upper()}, using default",
                error_code="CONFIG_INVALID_ENV",
                details={"field": field, "reason": reason},
            )
            logger.warning("env_setting_replaced", **error.to_dict())
    return settings
