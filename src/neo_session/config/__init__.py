"""Configuration for neo-session."""

from .logging_config import LogFormat, LoggingConfig, LogLevel, setup_logging
from .settings import Environment, SessionSettings, get_settings

__all__ = [
    "Environment",
    "SessionSettings",
    "get_settings",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "setup_logging",
]
