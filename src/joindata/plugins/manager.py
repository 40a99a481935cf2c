# src/joindata/plugins/manager.py
"""Stage manager for discovery, registration, and lookup.

Uses pluggy for hook-based registration of stage classes. Stages are keyed
by (kind, name); the built-ins all register under the name "default"
except the alternates (e.g. "shadow_clone", "detailed").
"""

from __future__ import annotations

from typing import Any

import pluggy

from joindata.contracts.errors import JoinConfigError, StageRegistrationError
from joindata.plugins.hookspecs import PROJECT_NAME, JoinDataStageSpec, hookimpl

# Stage kind -> whether the stage constructor takes the path resolver
STAGE_KINDS: dict[str, bool] = {
    "path_resolver": False,
    "validator": True,
    "local_standardizer": False,
    "from_standardizer": False,
    "value_generator": True,
    "result_assembler": False,
}


class _BuiltinStages:
    """Hook implementer contributing the built-in stages."""

    @hookimpl
    def joindata_get_stages(self) -> list[type]:
        from joindata.stages import BUILTIN_STAGES

        return list(BUILTIN_STAGES)


class StageManager:
    """Manages stage plugin registration and lookup.

    Usage:
        manager = StageManager()
        manager.register_builtin_stages()
        manager.register(MyStagesPlugin())

        cls = manager.get_stage_by_name("result_assembler", "detailed")
        resolver = manager.create_stage("path_resolver", "default", separator="/")
    """

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(JoinDataStageSpec)

        # Cache - (kind, name) -> stage class, for duplicate detection and lookup
        self._stages: dict[tuple[str, str], type] = {}

    def register_builtin_stages(self) -> None:
        """Register the stages shipped with joindata. Call once at startup."""
        self.register(_BuiltinStages())

    def register_entrypoint_plugins(self) -> int:
        """Load third-party stage plugins from the "joindata" entry point group.

        Returns:
            Number of plugins loaded
        """
        count = self._pm.load_setuptools_entrypoints(PROJECT_NAME)
        self._refresh_caches()
        return count

    def register(self, plugin: Any) -> None:
        """Register a plugin implementing joindata_get_stages.

        Raises:
            StageRegistrationError: If the plugin contributes an invalid or
                duplicate stage. The plugin is unregistered again.
        """
        self._pm.register(plugin)
        try:
            self._refresh_caches()
        except StageRegistrationError:
            self._pm.unregister(plugin)
            raise

    def _refresh_caches(self) -> None:
        new_stages: dict[tuple[str, str], type] = {}

        for stage_classes in self._pm.hook.joindata_get_stages():
            for cls in stage_classes:
                kind = getattr(cls, "kind", None)
                name = getattr(cls, "name", None)
                if kind not in STAGE_KINDS:
                    raise StageRegistrationError(
                        f"Stage class {cls.__name__} has unknown kind {kind!r}. Valid kinds: {sorted(STAGE_KINDS)}"
                    )
                if not isinstance(name, str) or not name:
                    raise StageRegistrationError(f"Stage class {cls.__name__} must define a non-empty 'name'")
                key = (kind, name)
                if key in new_stages:
                    raise StageRegistrationError(
                        f"Duplicate {kind} stage name: '{name}'. Already registered by {new_stages[key].__name__}"
                    )
                new_stages[key] = cls

        self._stages = new_stages

    # === Lookup ===

    def get_stages(self, kind: str | None = None) -> list[type]:
        """Get registered stage classes, optionally of one kind."""
        return [cls for (stage_kind, _), cls in self._stages.items() if kind is None or stage_kind == kind]

    def get_stage_by_name(self, kind: str, name: str) -> type | None:
        """Get a stage class by kind and name."""
        return self._stages.get((kind, name))

    def create_stage(self, kind: str, name: str, *, resolver: Any = None, separator: str | None = None) -> Any:
        """Instantiate a registered stage.

        Args:
            kind: Stage kind
            name: Registered stage name
            resolver: Path resolver, for kinds whose constructor takes one
            separator: Path separator, for path resolvers

        Raises:
            JoinConfigError: If no stage is registered under (kind, name)
        """
        cls = self.get_stage_by_name(kind, name)
        if cls is None:
            available = sorted(stage_name for stage_kind, stage_name in self._stages if stage_kind == kind)
            raise JoinConfigError(f"Unknown {kind} stage '{name}'. Available: {available}")

        if kind == "path_resolver":
            return cls() if separator is None else cls(separator=separator)
        if STAGE_KINDS[kind]:
            return cls(resolver)
        return cls()
