# src/joindata/core/__init__.py
"""Core infrastructure: path resolution, sentinels, configuration, logging."""

from joindata.core.config import (
    JoinSettings,
    LoggingSettings,
    StageSettings,
    load_settings,
)
from joindata.core.logging import bind_join_context, configure_from_settings, configure_logging, get_logger
from joindata.core.paths import DEFAULT_SEPARATOR, PathResolver, is_array
from joindata.core.sentinels import MISSING, MissingSentinel

__all__ = [
    # Config
    "JoinSettings",
    "LoggingSettings",
    "StageSettings",
    "load_settings",
    # Logging
    "bind_join_context",
    "configure_from_settings",
    "configure_logging",
    "get_logger",
    # Paths
    "DEFAULT_SEPARATOR",
    "PathResolver",
    "is_array",
    # Sentinels
    "MISSING",
    "MissingSentinel",
]
