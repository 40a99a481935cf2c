"""Join parameters.

JoinParams carries everything one join_data() call needs. It is a plain
frozen container: checking the field specifications is the job of the
validator stage, so that custom validators see exactly what the caller
passed.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

from joindata.contracts.errors import JoinValidationError

FetchCallback = Callable[[], Any | Awaitable[Any]]

# Accepted spellings for each parameter when building from a mapping.
# Both snake_case and the camelCase names used by JSON-ish configs work.
_KEY_ALIASES: dict[str, tuple[str, ...]] = {
    "local": ("local",),
    "from_": ("from_", "from"),
    "local_field": ("local_field", "localField"),
    "from_field": ("from_field", "fromField"),
    "as_": ("as_", "as"),
    "as_map": ("as_map", "asMap"),
}


@dataclass(frozen=True)
class JoinParams:
    """Parameters of one join.

    Attributes:
        local: Local entry or list of local entries (mutated with results)
        from_: Zero-argument callable returning the source entries, or an
            awaitable of them
        local_field: Path of the key on each local entry (e.g. "items.id")
        from_field: Path of the key on each source entry
        as_: Name of the single field that receives matched entries
        as_map: Source path -> local field name, for plucking several fields
    """

    local: Any
    from_: FetchCallback
    local_field: str
    from_field: str
    as_: str | None = None
    as_map: Mapping[str, str] | None = None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> JoinParams:
        """Build JoinParams from a mapping.

        Args:
            raw: Mapping using snake_case or camelCase keys ("from", "asMap", ...)

        Returns:
            JoinParams

        Raises:
            JoinValidationError: If a required key is absent or a key is unknown
        """
        known = {alias for aliases in _KEY_ALIASES.values() for alias in aliases}
        unknown = sorted(set(raw) - known)
        if unknown:
            raise JoinValidationError(f"Unknown join parameter(s): {unknown}", field=unknown[0])

        values: dict[str, Any] = {}
        for name, aliases in _KEY_ALIASES.items():
            present = [alias for alias in aliases if alias in raw]
            if len(present) > 1:
                raise JoinValidationError(f"Join parameter '{name}' given more than once as {present}", field=name)
            if present:
                values[name] = raw[present[0]]

        for required in ("local", "from_", "local_field", "from_field"):
            if required not in values:
                raise JoinValidationError(f"Missing required join parameter '{required}'", field=required)

        return cls(**values)
