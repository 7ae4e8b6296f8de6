"""
Resolved configuration for a VibeLogger instance.

LoggerConfig is the single immutable value a logger is constructed with. It
is produced by an external resolver (see settings.Settings for the
environment based one, or build it directly) and is never re-read during the
logger's lifetime.

Values that would otherwise break a logger are normalized instead of
rejected: an empty log file path or correlation id means "unset", and a
non-positive memory limit falls back to the default.
"""

from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from vibelogger.core.exceptions.custom_exceptions import ConfigurationError
from vibelogger.core.logging.logger import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_MEMORY_LOGS = 1000
DEFAULT_MAX_FILE_SIZE_MB = 10.0


class LoggerConfig(BaseModel):
    """
    Configuration consumed by the logger engine.

    Attributes:
        log_file: Path of the JSON Lines log file, or None for no file output
        auto_save: Persist every entry to ``log_file`` as it is logged
        keep_logs_in_memory: Retain entries in the in-memory buffer
        max_memory_logs: Buffer capacity, None for unbounded
        create_dirs: Create missing parent directories of ``log_file``
        correlation_id: Fixed correlation id, None to generate one
        max_file_size_mb: Advisory size of the log file; never enforced
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    log_file: Optional[str] = None
    auto_save: bool = True
    keep_logs_in_memory: bool = True
    max_memory_logs: Optional[int] = DEFAULT_MAX_MEMORY_LOGS
    create_dirs: bool = True
    correlation_id: Optional[str] = None
    max_file_size_mb: float = DEFAULT_MAX_FILE_SIZE_MB

    @field_validator("log_file", "correlation_id", mode="before")
    @classmethod
    def blank_is_unset(cls, v: Any) -> Any:
        if v is None:
            return None
        v = str(v)
        return v if v.strip() else None

    @field_validator("max_memory_logs")
    @classmethod
    def validate_max_memory_logs(cls, v: Optional[int]) -> Optional[int]:
        """Non-positive capacities fall back to the default."""
        if v is not None and v <= 0:
            logger.warning(
                "config_value_replaced",
                field="max_memory_logs",
                value=v,
                replacement=DEFAULT_MAX_MEMORY_LOGS,
            )
            return DEFAULT_MAX_MEMORY_LOGS
        return v

    @field_validator("max_file_size_mb")
    @classmethod
    def validate_max_file_size_mb(cls, v: float) -> float:
        if v <= 0:
            return DEFAULT_MAX_FILE_SIZE_MB
        return v

    @property
    def persists_to_file(self) -> bool:
        """True when entries are written to a log file."""
        return self.auto_save and self.log_file is not None

    @classmethod
    def resolve(
        cls, value: Union["LoggerConfig", Mapping[str, Any], None] = None
    ) -> "LoggerConfig":
        """
        Turn whatever the caller supplied into a LoggerConfig.

        Invalid fields are dropped and replaced by their defaults rather than
        failing logger construction. Each dropped field is reported as a
        ConfigurationError through diagnostics logging.

        Args:
            value: An existing LoggerConfig, a mapping of field values, or
                None for all defaults.

        Returns:
            LoggerConfig: A valid configuration.
        """
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        if not isinstance(value, Mapping):
            logger.warning(
                "config_ignored",
                reason="unsupported configuration type",
                type=type(value).__name__,
            )
            return cls()

        data: Dict[str, Any] = dict(value)
        while True:
            try:
                return cls.model_validate(data)
            except ValidationError as e:
                invalid = {
                    str(err["loc"][0]) for err in e.errors() if err.get("loc")
                }
                invalid &= set(data)
                if not invalid:
                    return cls()
                for field in sorted(invalid):
                    error = ConfigurationError(
                        f"Invalid value for {field}, using default",
                        error_code="CONFIG_INVALID_VALUE",
                        details={"field": field, "value": repr(data[field])},
                    )
                    logger.warning("config_value_replaced", **error.to_dict())
                    del data[field]
