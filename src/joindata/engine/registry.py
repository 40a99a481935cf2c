"""Registries holding the active JoinEngine, and the join_data() entry point.

A registry is one mutable slot holding an engine. The process-wide
"default" registry backs join_data(); named registries let different call
sites run differently configured engines side by side.

Thread-safety:
    Creating and looking up named registries is thread-safe. The engine slot
    itself is NOT synchronized: set_instance() is a global reconfiguration.
    Configure registries once at startup, before issuing concurrent joins.
"""

from __future__ import annotations

import asyncio
import threading
from collections.abc import Mapping
from typing import Any

from joindata.contracts.params import JoinParams
from joindata.core.logging import bind_join_context
from joindata.engine.core import JoinEngine
from joindata.stages.protocols import JoinEngineProtocol

DEFAULT_REGISTRY = "default"


class EngineRegistry:
    """One slot holding the active engine.

    The slot starts empty; the first get_instance() fills it with a default
    JoinEngine. There is no implicit reset afterwards.

    Example:
        registry = get_registry("reporting")
        registry.set_instance(JoinEngine(result_assembler=DetailedResultAssembler()))

        result = await join_data(params, registry="reporting")
    """

    def __init__(self, name: str, instance: JoinEngineProtocol | None = None) -> None:
        self.name = name
        self._instance = instance

    def set_instance(self, engine: JoinEngineProtocol) -> None:
        """Replace the active engine (a JoinEngine or any JoinEngineProtocol implementation)."""
        if not isinstance(engine, JoinEngineProtocol):
            raise TypeError(f"Registry '{self.name}' expects an engine with an async join_data(), got {type(engine).__name__}")
        self._instance = engine

    def get_instance(self) -> JoinEngineProtocol:
        """Return the active engine, creating the default one on first use."""
        if self._instance is None:
            self._instance = JoinEngine()
        return self._instance

    def reset_instance(self) -> None:
        """Empty the slot (for tests); the next get_instance() creates a default engine."""
        self._instance = None

    def __repr__(self) -> str:
        engine = type(self._instance).__name__ if self._instance is not None else None
        return f"EngineRegistry(name={self.name!r}, instance={engine})"


_registries: dict[str, EngineRegistry] = {}
_registries_lock = threading.Lock()


def get_registry(name: str = DEFAULT_REGISTRY) -> EngineRegistry:
    """Get or create the named registry."""
    with _registries_lock:
        if name not in _registries:
            _registries[name] = EngineRegistry(name)
        return _registries[name]


def registry_names() -> list[str]:
    """Names of the registries created so far."""
    with _registries_lock:
        return sorted(_registries)


def set_instance(engine: JoinEngineProtocol, registry: str = DEFAULT_REGISTRY) -> None:
    """Set the active engine of a registry (the default registry unless named)."""
    get_registry(registry).set_instance(engine)


def get_instance(registry: str = DEFAULT_REGISTRY) -> JoinEngineProtocol:
    """Get the active engine of a registry (the default registry unless named)."""
    return get_registry(registry).get_instance()


async def join_data(
    params: JoinParams | Mapping[str, Any],
    metadata: Any = None,
    *,
    registry: str = DEFAULT_REGISTRY,
) -> Any:
    """Join using the active engine of a registry.

    Local entries are written in place (unless the engine's local standardizer
    copies them). The return value summarizes the join.

    Args:
        params: JoinParams, or a mapping with keys local, from, local_field
            (localField), from_field (fromField) and optionally as, as_map (asMap)
        metadata: Opaque context forwarded to every stage
        registry: Name of the registry whose engine runs the join

    Returns:
        JoinDataResult(all_success, join_failed_values) with the default engine
    """
    with bind_join_context(registry=registry):
        return await get_instance(registry).join_data(params, metadata)


def join_data_sync(
    params: JoinParams | Mapping[str, Any],
    metadata: Any = None,
    *,
    registry: str = DEFAULT_REGISTRY,
) -> Any:
    """Run join_data() to completion from synchronous code.

    Must not be called from inside a running event loop.
    """
    return asyncio.run(join_data(params, metadata, registry=registry))
