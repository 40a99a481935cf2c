"""Shared sentinel values for path resolution.

This module provides the sentinel used to distinguish between "value not found"
and "value is explicitly None" when resolving field paths.

The distinction matters for joins:
- A local entry may legitimately carry None as its key (None can be matched)
- A local entry may lack the key field entirely (always a join miss)
- A plucked as_map field may be absent from a matched source entry

Example usage:
    from joindata.core.sentinels import MISSING

    value = resolver.resolve(entry, "customer.id")
    if value is MISSING:
        # Path does not exist on this entry
        record_miss()
    elif value is None:
        # Path exists and is explicitly None
        lookup(None)
"""

from typing import Final


class MissingSentinel:
    """Sentinel class to distinguish missing fields from None values.

    This is a singleton - use the MISSING instance, not the class directly.
    Comparison should always use `is` identity, never equality.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return "<MISSING>"

    def __bool__(self) -> bool:
        return False


MISSING: Final[MissingSentinel] = MissingSentinel()
"""Singleton sentinel indicating a field was not found.

Use identity comparison: `if value is MISSING:`
"""
