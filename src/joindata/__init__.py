"""
joindata: in-memory joins between local objects and fetched data.

Resolves a (dotted, array-aware) key on each local object, matches it against
the same kind of key on objects returned by a sync or async fetch callback,
and writes the matches back onto the local objects.

    result = await join_data(
        {"local": orders, "from": fetch_products, "local_field": "items", "from_field": "id", "as": "products"}
    )
"""

from joindata.contracts import (
    JoinConfigError,
    JoinDataDetailedResult,
    JoinDataError,
    JoinDataResult,
    JoinParams,
    JoinValidationError,
)
from joindata.engine import (
    EngineRegistry,
    JoinEngine,
    get_instance,
    get_registry,
    join_data,
    join_data_sync,
    set_instance,
)

__version__ = "0.1.0"

__all__ = [
    "EngineRegistry",
    "JoinConfigError",
    "JoinDataDetailedResult",
    "JoinDataError",
    "JoinDataResult",
    "JoinEngine",
    "JoinParams",
    "JoinValidationError",
    "get_instance",
    "get_registry",
    "join_data",
    "join_data_sync",
    "set_instance",
]
