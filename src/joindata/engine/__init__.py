"""Join engine and engine registries."""

from joindata.engine.core import DEFAULT_AS, JoinEngine
from joindata.engine.registry import (
    DEFAULT_REGISTRY,
    EngineRegistry,
    get_instance,
    get_registry,
    join_data,
    join_data_sync,
    registry_names,
    set_instance,
)

__all__ = [
    "DEFAULT_AS",
    "DEFAULT_REGISTRY",
    "EngineRegistry",
    "JoinEngine",
    "get_instance",
    "get_registry",
    "join_data",
    "join_data_sync",
    "registry_names",
    "set_instance",
]
