"""Join outcomes.

These types answer: "What did a join produce?"

The primary output of a join is the mutation of the local entries.
JoinDataResult is the secondary, summary-only channel.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class JoinDataResult:
    """Summary of a join.

    Attributes:
        all_success: True iff every local key found at least one source entry
        join_failed_values: Scalar keys that matched nothing, in local order.
            Duplicates are kept when several local entries share a failing key.
            A local entry whose key path is absent contributes None.
    """

    all_success: bool
    join_failed_values: list[Any] = field(default_factory=list)

    @classmethod
    def from_failures(cls, join_failed_values: list[Any]) -> JoinDataResult:
        """Create a result whose all_success is derived from the failures."""
        return cls(all_success=not join_failed_values, join_failed_values=list(join_failed_values))


@dataclass(frozen=True)
class JoinDataDetailedResult(JoinDataResult):
    """Summary plus the local entries the results were written onto.

    Returned by DetailedResultAssembler. Useful together with
    ShadowCloneLocalStandardizer, where the written entries are copies and
    not the caller's objects.
    """

    local: list[Any] = field(default_factory=list)
