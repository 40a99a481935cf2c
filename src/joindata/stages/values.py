"""Value generation for matched entries.

generate_as_value() returns the fields to write on a local entry:

- as_:    {as_: matched}   (the raw entry, or the list of entries)
- as_map: {target: plucked} for every source path -> target pair. With
  several matches each target holds a list in match order, with None where
  a matched entry lacks the source field. With one match, a source field
  that is absent is simply not written.
"""

from collections.abc import Mapping
from typing import Any

from joindata.core.paths import is_array
from joindata.core.sentinels import MISSING
from joindata.stages.protocols import PathResolverProtocol


class ValueGenerator:
    """Default value generator."""

    name = "default"
    kind = "value_generator"

    def __init__(self, resolver: PathResolverProtocol) -> None:
        self._resolver = resolver

    def generate_as_value(
        self,
        matched: Any,
        as_: str | None,
        as_map: Mapping[str, str] | None,
        metadata: Any,
    ) -> dict[str, Any]:
        if as_map is None:
            if as_ is None:
                raise ValueError("generate_as_value requires as_ or as_map")
            return {as_: matched}

        if is_array(matched):
            return {
                target: [self._pluck(entry, source_path, None, metadata) for entry in matched]
                for source_path, target in as_map.items()
            }

        fields: dict[str, Any] = {}
        for source_path, target in as_map.items():
            value = self._pluck(matched, source_path, MISSING, metadata)
            if value is not MISSING:
                fields[target] = value
        return fields

    def _pluck(self, entry: Any, path: str, default: Any, metadata: Any) -> Any:
        value = self._resolver.resolve(entry, path, metadata)
        return default if value is MISSING else value
