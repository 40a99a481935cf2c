"""Plugin system: stage classes contributed via pluggy."""

from joindata.plugins.hookspecs import hookimpl, hookspec
from joindata.plugins.manager import STAGE_KINDS, StageManager

__all__ = [
    "STAGE_KINDS",
    "StageManager",
    "hookimpl",
    "hookspec",
]
