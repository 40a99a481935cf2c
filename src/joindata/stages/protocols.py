# src/joindata/stages/protocols.py
"""Stage protocols defining the contracts for each join pipeline stage.

These protocols define what methods stages must implement.
They're used for type checking and for runtime_checkable isinstance() checks
when an engine is assembled.

Pipeline order (one join_data() call):
1. FieldValidator.validate_fields() - fail fast on malformed field specs
2. LocalStandardizer.standardize_local_param() - local input -> list
3. PathResolver.resolve() - local keys
4. FromStandardizer.standardize_from_param() - fetch once, -> list
5. PathResolver.resolve() - source keys, indexed by the engine
6. ValueGenerator.generate_as_value() - fields to write per matched entry
7. ResultAssembler.generate_result() - summary returned to the caller

Every stage receives ``metadata``: an opaque value the caller passes to
join_data(). The engine never inspects it.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

from joindata.contracts.params import FetchCallback, JoinParams


@runtime_checkable
class StageProtocol(Protocol):
    """Common metadata for all stage plugins."""

    name: str
    kind: str


@runtime_checkable
class PathResolverProtocol(Protocol):
    """Resolves field paths for reading and locates write targets."""

    name: str
    kind: str
    separator: str

    def split(self, path: str) -> tuple[str, ...]: ...

    def read_path(self, path: str) -> tuple[str, ...]: ...

    def write_path(self, path: str) -> tuple[str, ...]: ...

    def resolve(self, obj: Any, path: str, metadata: Any = None) -> Any:
        """Return the value at path, a flattened list, or MISSING."""
        ...

    def write_target(self, obj: Any, path: str, metadata: Any = None) -> Any: ...

    def assign(self, target: Any, field: str, value: Any, metadata: Any = None) -> None: ...


@runtime_checkable
class FieldValidatorProtocol(Protocol):
    """Validates field specifications before anything is fetched or written."""

    name: str
    kind: str

    def validate_fields(self, params: JoinParams, metadata: Any) -> None:
        """Raise JoinValidationError if the field specification is malformed."""
        ...


@runtime_checkable
class LocalStandardizerProtocol(Protocol):
    """Normalizes the local input into the list the engine writes onto."""

    name: str
    kind: str

    def standardize_local_param(self, local: Any, metadata: Any) -> list[Any]: ...


@runtime_checkable
class FromStandardizerProtocol(Protocol):
    """Invokes the fetch callback once and normalizes its result."""

    name: str
    kind: str

    async def standardize_from_param(self, from_: FetchCallback, metadata: Any) -> list[Any]: ...


@runtime_checkable
class ValueGeneratorProtocol(Protocol):
    """Turns matched source entries into the fields written on a local entry."""

    name: str
    kind: str

    def generate_as_value(
        self,
        matched: Any,
        as_: str | None,
        as_map: Mapping[str, str] | None,
        metadata: Any,
    ) -> dict[str, Any]:
        """Return field name -> value to write.

        Args:
            matched: The single matched source entry, or a list when several matched
            as_: Result field name (None when as_map is active)
            as_map: Source path -> result field name (None when as_ is active)
            metadata: Opaque caller context
        """
        ...


@runtime_checkable
class ResultAssemblerProtocol(Protocol):
    """Shapes the value join_data() returns."""

    name: str
    kind: str

    def generate_result(self, join_failed_values: Sequence[Any], local_overwrite: list[Any], metadata: Any) -> Any: ...


@runtime_checkable
class JoinEngineProtocol(Protocol):
    """A whole join pipeline, as held by an engine registry.

    JoinEngine is the built-in implementation. Any object with a matching
    coroutine method can be registered in its place.
    """

    async def join_data(self, params: JoinParams | Mapping[str, Any], metadata: Any = None) -> Any: ...
