"""Configuration: the resolved LoggerConfig and the environment Settings."""

from vibelogger.core.config.models import LoggerConfig
from vibelogger.core.config.settings import Settings, get_settings, load_settings

__all__ = ["LoggerConfig", "Settings", "get_settings", "load_settings"]
