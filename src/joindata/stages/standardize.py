"""Input standardizers.

Both sides of a join are normalized to lists before matching:

- Local side: a single entry becomes [entry]; a list or tuple becomes a list
  holding the SAME objects, so writes land on the caller's data.
- Source side: the fetch callback is called exactly once. An awaitable
  result is awaited. A single entry becomes [entry], None becomes [].

Fetch callback exceptions are not caught here. They reach the caller of
join_data() unchanged.
"""

import copy
import inspect
from typing import Any

from joindata.contracts.params import FetchCallback
from joindata.core.paths import is_array


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if is_array(value):
        return list(value)
    return [value]


class LocalStandardizer:
    """Default local standardizer: keeps caller identity (in-place writes)."""

    name = "default"
    kind = "local_standardizer"

    def standardize_local_param(self, local: Any, metadata: Any) -> list[Any]:
        return _as_list(local)


class ShadowCloneLocalStandardizer(LocalStandardizer):
    """Deep-copies local entries so the caller's objects are never written.

    Pair with DetailedResultAssembler to get the written copies back.
    """

    name = "shadow_clone"

    def standardize_local_param(self, local: Any, metadata: Any) -> list[Any]:
        return [copy.deepcopy(entry) for entry in super().standardize_local_param(local, metadata)]


class FromStandardizer:
    """Default source standardizer: one call, awaited when needed."""

    name = "default"
    kind = "from_standardizer"

    async def standardize_from_param(self, from_: FetchCallback, metadata: Any) -> list[Any]:
        result = from_()
        if inspect.isawaitable(result):
            result = await result
        return _as_list(result)
