# src/joindata/core/paths.py
"""Array-aware field path resolution.

A field path is a separator-joined list of segments ("items.id"). Resolution
walks the segments from a root object:

- Mapping values are indexed by key.
- Any other object is read through its attributes.
- List/tuple values fan out: the REMAINING path is resolved against every
  element and the results are flattened into one list. This is what lets
  "items.id" produce [101, 102] when items is a list of objects.
- Absence at any step yields the MISSING sentinel. Resolution never raises
  for normal absence.

Writing uses a different path than reading. The result field is a sibling of
the last key segment, so the write path is the parent of the last segment.
The write target is the deepest object reachable along that parent path
WITHOUT crossing a list; results of a fanned-out key ("items.id") are
therefore written on the object that owns the list.

Result field names (as_, as_map targets) are always plain field names, never
dotted paths.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any

from joindata.core.sentinels import MISSING

DEFAULT_SEPARATOR = "."


def is_array(value: Any) -> bool:
    """Whether a value fans out during resolution (list or tuple, never str/bytes)."""
    return isinstance(value, (list, tuple))


class PathResolver:
    """Resolve and write field paths.

    Attributes:
        name: Stage plugin name
        kind: Stage kind for the StageManager
        separator: Segment separator (default ".")
    """

    name = "default"
    kind = "path_resolver"

    def __init__(self, separator: str = DEFAULT_SEPARATOR) -> None:
        if not isinstance(separator, str) or not separator:
            raise ValueError(f"Path separator must be a non-empty string, got {separator!r}")
        self.separator = separator

    def split(self, path: str) -> tuple[str, ...]:
        """Split a path into segments. The empty path is the single key ""."""
        return tuple(path.split(self.separator))

    def read_path(self, path: str) -> tuple[str, ...]:
        """Segments followed when reading a key."""
        return self.split(path)

    def write_path(self, path: str) -> tuple[str, ...]:
        """Segments followed to reach the object that receives the result.

        This is the parent of the last segment: "user.id" -> ("user",),
        "id" -> ().
        """
        return self.split(path)[:-1]

    def resolve(self, obj: Any, path: str, metadata: Any = None) -> Any:
        """Resolve a path against an object.

        Args:
            obj: Root object (mapping, attribute object, or list of them)
            path: Field path ("" and flat keys are direct lookups)
            metadata: Opaque caller context (unused by this resolver)

        Returns:
            The value, a flattened list when the path crosses a list,
            or MISSING when the path does not exist.
        """
        return self._resolve_segments(obj, self.read_path(path))

    def _resolve_segments(self, current: Any, segments: tuple[str, ...]) -> Any:
        for index, segment in enumerate(segments):
            if is_array(current):
                rest = segments[index:]
                flattened: list[Any] = []
                for element in current:
                    value = self._resolve_segments(element, rest)
                    if value is MISSING:
                        continue
                    if is_array(value):
                        flattened.extend(value)
                    else:
                        flattened.append(value)
                return flattened
            current = self.get_field(current, segment)
            if current is MISSING:
                return MISSING
        return current

    @staticmethod
    def get_field(obj: Any, field: str) -> Any:
        """Read one field from a mapping or attribute object, or MISSING."""
        if isinstance(obj, Mapping):
            return obj[field] if field in obj else MISSING
        if obj is None or isinstance(obj, (str, bytes, int, float, bool)):
            return MISSING
        return getattr(obj, field, MISSING)

    def write_target(self, obj: Any, path: str, metadata: Any = None) -> Any:
        """Find the object that receives the result for a key path.

        Walks write_path(path) from obj and stops before any list or missing
        value, returning the deepest object reached.
        """
        target = obj
        for segment in self.write_path(path):
            value = self.get_field(target, segment)
            if value is MISSING or value is None or is_array(value):
                break
            target = value
        return target

    @staticmethod
    def assign(target: Any, field: str, value: Any, metadata: Any = None) -> None:
        """Write one field onto a mutable mapping or attribute object."""
        if isinstance(target, MutableMapping):
            target[field] = value
        else:
            setattr(target, field, value)
