"""Shared contracts: parameters, results and errors.

This package is a LEAF MODULE with no outbound dependencies to core/engine.
Settings classes are NOT re-exported here - import them from joindata.core.config.
"""

from joindata.contracts.errors import (
    JoinConfigError,
    JoinDataError,
    JoinValidationError,
    StageRegistrationError,
)
from joindata.contracts.params import FetchCallback, JoinParams
from joindata.contracts.results import JoinDataDetailedResult, JoinDataResult

__all__ = [
    # Errors
    "JoinConfigError",
    "JoinDataError",
    "JoinValidationError",
    "StageRegistrationError",
    # Parameters
    "FetchCallback",
    "JoinParams",
    # Results
    "JoinDataDetailedResult",
    "JoinDataResult",
]
