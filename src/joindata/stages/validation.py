"""Field specification validation.

Runs first in every join. A malformed specification raises
JoinValidationError before the fetch callback is called and before any
local entry is written, so a bad call never leaves partial results behind.
"""

from collections.abc import Mapping
from typing import Any

from joindata.contracts.errors import JoinValidationError
from joindata.contracts.params import JoinParams
from joindata.stages.protocols import PathResolverProtocol


class FieldValidator:
    """Default validator for local_field, from_field, as_ and as_map.

    Rules:
        - local_field / from_field: non-empty strings with no empty segment
        - as_: non-empty string without the path separator
        - as_map: non-empty mapping; keys are valid paths, values are
          non-empty strings without the path separator
        - as_ and as_map are mutually exclusive
        - from_ must be callable
    """

    name = "default"
    kind = "validator"

    def __init__(self, resolver: PathResolverProtocol) -> None:
        self._resolver = resolver

    def validate_fields(self, params: JoinParams, metadata: Any) -> None:
        self._check_path("local_field", params.local_field)
        self._check_path("from_field", params.from_field)

        if params.as_ is not None and params.as_map is not None:
            raise JoinValidationError("Specify either 'as_' or 'as_map', not both", field="as_map", value=params.as_map)

        if params.as_ is not None:
            self._check_result_name("as_", params.as_)

        if params.as_map is not None:
            if not isinstance(params.as_map, Mapping) or not params.as_map:
                raise JoinValidationError(
                    f"'as_map' must be a non-empty mapping, got {params.as_map!r}",
                    field="as_map",
                    value=params.as_map,
                )
            for source_path, target in params.as_map.items():
                self._check_path("as_map", source_path)
                self._check_result_name("as_map", target)

        if not callable(params.from_):
            raise JoinValidationError(
                f"'from_' must be callable, got {type(params.from_).__name__}",
                field="from_",
                value=params.from_,
            )

    def _check_path(self, field: str, value: Any) -> None:
        if not isinstance(value, str) or not value:
            raise JoinValidationError(f"'{field}' must be a non-empty string, got {value!r}", field=field, value=value)
        if any(segment == "" for segment in self._resolver.split(value)):
            raise JoinValidationError(
                f"'{field}' path {value!r} has an empty segment (separator {self._resolver.separator!r})",
                field=field,
                value=value,
            )

    def _check_result_name(self, field: str, value: Any) -> None:
        if not isinstance(value, str) or not value:
            raise JoinValidationError(f"'{field}' result name must be a non-empty string, got {value!r}", field=field, value=value)
        if self._resolver.separator in value:
            raise JoinValidationError(
                f"'{field}' result name {value!r} must be a plain field name, not a path",
                field=field,
                value=value,
            )
