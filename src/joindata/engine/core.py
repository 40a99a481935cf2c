# src/joindata/engine/core.py
"""JoinEngine: the join/match pipeline.

One join_data() call runs a single linear pass:

    validate -> standardize local -> resolve local keys
      -> fetch + standardize source (the only await)
      -> index source keys -> match/write each local entry once
      -> assemble result

Matching semantics:
    - Keys compare by strict equality: 1 never matches "1" and True never
      matches 1. Numbers compare by value (1 matches 1.0).
    - A source entry whose key resolves to a list is indexed under every
      element. Source entries with an absent or unhashable key are skipped.
    - A local list key matches the union of the lookups for each element,
      in key order then source order, without repeating an entry.
    - Every scalar key that finds nothing is recorded as a failure. An absent
      key, an empty key list, or a key element that is not a scalar (a
      nested list or a mapping, which cannot be matched) is recorded as None.
    - Scalar key, one match: the entry itself is written. Several matches, or
      any list key: the list of entries is written.
    - Local entries without any match are left untouched.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from joindata.contracts.params import JoinParams
from joindata.core.logging import get_logger
from joindata.core.paths import PathResolver, is_array
from joindata.core.sentinels import MISSING
from joindata.stages.protocols import (
    FieldValidatorProtocol,
    FromStandardizerProtocol,
    LocalStandardizerProtocol,
    PathResolverProtocol,
    ResultAssemblerProtocol,
    ValueGeneratorProtocol,
)
from joindata.stages.results import ResultAssembler
from joindata.stages.standardize import FromStandardizer, LocalStandardizer
from joindata.stages.validation import FieldValidator
from joindata.stages.values import ValueGenerator

if TYPE_CHECKING:
    from joindata.core.config import JoinSettings
    from joindata.plugins.manager import StageManager

slog = get_logger(__name__)

DEFAULT_AS = "joined"


def _strict_key(value: Any) -> Any:
    """Index key for a scalar. Keeps bools apart from the ints they equal."""
    if isinstance(value, bool):
        return (bool, value)
    return value


def _is_hashable(value: Any) -> bool:
    try:
        hash(value)
    except TypeError:
        return False
    return True


class JoinEngine:
    """Join local entries against entries fetched by a callback.

    Every stage is injected at construction; omitted stages get the
    built-in default. Engines hold no per-call state and can be shared.

    Example:
        engine = JoinEngine(local_standardizer=ShadowCloneLocalStandardizer())
        result = await engine.join_data(
            JoinParams(local=orders, from_=fetch_products, local_field="items", from_field="id", as_="products")
        )
        if not result.all_success:
            log_unknown_products(result.join_failed_values)
    """

    def __init__(
        self,
        *,
        path_resolver: PathResolverProtocol | None = None,
        validator: FieldValidatorProtocol | None = None,
        local_standardizer: LocalStandardizerProtocol | None = None,
        from_standardizer: FromStandardizerProtocol | None = None,
        value_generator: ValueGeneratorProtocol | None = None,
        result_assembler: ResultAssemblerProtocol | None = None,
        default_as: str = DEFAULT_AS,
    ) -> None:
        self.path_resolver: PathResolverProtocol = path_resolver if path_resolver is not None else PathResolver()
        self.validator: FieldValidatorProtocol = validator if validator is not None else FieldValidator(self.path_resolver)
        self.local_standardizer: LocalStandardizerProtocol = (
            local_standardizer if local_standardizer is not None else LocalStandardizer()
        )
        self.from_standardizer: FromStandardizerProtocol = from_standardizer if from_standardizer is not None else FromStandardizer()
        self.value_generator: ValueGeneratorProtocol = (
            value_generator if value_generator is not None else ValueGenerator(self.path_resolver)
        )
        self.result_assembler: ResultAssemblerProtocol = result_assembler if result_assembler is not None else ResultAssembler()
        self.default_as = default_as

    @classmethod
    def from_settings(cls, settings: JoinSettings, manager: StageManager | None = None) -> JoinEngine:
        """Build an engine whose stages are selected by name in settings.

        Args:
            settings: Validated settings
            manager: Stage manager to look stages up in. A manager with only
                the built-in stages is used when omitted.

        Raises:
            JoinConfigError: If settings name an unregistered stage
        """
        from joindata.plugins.manager import StageManager

        if manager is None:
            manager = StageManager()
            manager.register_builtin_stages()

        stages = settings.stages
        resolver = manager.create_stage("path_resolver", stages.path_resolver, separator=settings.path_separator)
        return cls(
            path_resolver=resolver,
            validator=manager.create_stage("validator", stages.validator, resolver=resolver),
            local_standardizer=manager.create_stage("local_standardizer", stages.local_standardizer),
            from_standardizer=manager.create_stage("from_standardizer", stages.from_standardizer),
            value_generator=manager.create_stage("value_generator", stages.value_generator, resolver=resolver),
            result_assembler=manager.create_stage("result_assembler", stages.result_assembler),
            default_as=settings.default_as,
        )

    async def join_data(self, params: JoinParams | Mapping[str, Any], metadata: Any = None) -> Any:
        """Run one join.

        Args:
            params: JoinParams, or a mapping accepted by JoinParams.from_mapping()
            metadata: Opaque context forwarded to every stage

        Returns:
            Whatever the result assembler builds (JoinDataResult by default)

        Raises:
            JoinValidationError: Malformed field specification (nothing fetched or written)
            Exception: Anything the from_ callback raises, unchanged (nothing written)
        """
        if not isinstance(params, JoinParams):
            params = JoinParams.from_mapping(params)

        self.validator.validate_fields(params, metadata)

        as_ = params.as_
        if as_ is None and params.as_map is None:
            as_ = self.default_as

        local = self.local_standardizer.standardize_local_param(params.local, metadata)
        local_keys = [self.path_resolver.resolve(entry, params.local_field, metadata) for entry in local]

        log = slog.bind(engine=type(self).__name__, local_field=params.local_field, from_field=params.from_field)
        log.debug("join_started", local_count=len(local))

        try:
            source = await self.from_standardizer.standardize_from_param(params.from_, metadata)
        except Exception as e:
            log.warning("join_fetch_failed", error_type=type(e).__name__, error=str(e))
            raise

        index = self._build_index(source, params.from_field, metadata)

        join_failed_values: list[Any] = []
        matched_count = 0
        for entry, key in zip(local, local_keys, strict=True):
            matched = self._lookup(index, key, join_failed_values)
            if not matched:
                continue
            matched_count += 1
            value = matched if is_array(key) or len(matched) > 1 else matched[0]
            fields = self.value_generator.generate_as_value(value, as_, params.as_map, metadata)
            target = self.path_resolver.write_target(entry, params.local_field, metadata)
            for field_name, field_value in fields.items():
                self.path_resolver.assign(target, field_name, field_value, metadata)

        if join_failed_values:
            log.debug("join_misses", failed_count=len(join_failed_values))

        log.info(
            "join_completed",
            local_count=len(local),
            source_count=len(source),
            matched_count=matched_count,
            failed_count=len(join_failed_values),
        )

        return self.result_assembler.generate_result(join_failed_values, local, metadata)

    def _build_index(self, source: list[Any], from_field: str, metadata: Any) -> dict[Any, list[Any]]:
        """Map each source key to the source entries carrying it, in source order."""
        index: dict[Any, list[Any]] = {}
        for entry in source:
            key = self.path_resolver.resolve(entry, from_field, metadata)
            if key is MISSING:
                continue
            keys = key if is_array(key) else [key]
            seen: set[Any] = set()
            for item in keys:
                if not _is_hashable(item):
                    continue
                index_key = _strict_key(item)
                if index_key in seen:
                    continue
                seen.add(index_key)
                index.setdefault(index_key, []).append(entry)
        return index

    @staticmethod
    def _lookup(index: dict[Any, list[Any]], key: Any, join_failed_values: list[Any]) -> list[Any]:
        """Collect the source entries matching a local key, recording misses."""
        if key is MISSING or (is_array(key) and not key):
            join_failed_values.append(None)
            return []

        matched: list[Any] = []
        seen_ids: set[int] = set()
        for item in key if is_array(key) else [key]:
            if not _is_hashable(item):
                # Not a scalar key: nested lists, mappings
                join_failed_values.append(None)
                continue
            hits = index.get(_strict_key(item))
            if not hits:
                join_failed_values.append(item)
                continue
            for hit in hits:
                if id(hit) not in seen_ids:
                    seen_ids.add(id(hit))
                    matched.append(hit)
        return matched
