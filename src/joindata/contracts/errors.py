"""Exception types raised by joindata.

Hard failures abort the join; join misses are never exceptions.
They are data, recorded in JoinDataResult.join_failed_values.

Errors raised by the caller's ``from_`` callback are NOT wrapped here.
They propagate to the caller of join_data() unchanged.
"""


class JoinDataError(Exception):
    """Base class for all joindata errors."""

    pass


class JoinValidationError(JoinDataError, ValueError):
    """Raised when a join is specified incorrectly.

    Covers empty or non-string field paths, empty path segments, dotted
    result field names, conflicting ``as_``/``as_map`` and a non-callable
    ``from_``. Always raised before the fetch and before any local entry
    is touched.

    Attributes:
        field: Name of the offending parameter (e.g. "local_field")
        value: The rejected value
    """

    def __init__(self, message: str, *, field: str | None = None, value: object = None) -> None:
        self.field = field
        self.value = value
        super().__init__(message)


class JoinConfigError(JoinDataError):
    """Raised when settings are invalid or name an unknown stage."""

    pass


class StageRegistrationError(JoinDataError):
    """Raised when two stage plugins register the same kind and name."""

    pass
