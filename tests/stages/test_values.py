# tests/stages/test_values.py
"""Tests for value generation and result assembly."""

import pytest

from joindata.contracts import JoinDataDetailedResult, JoinDataResult
from joindata.core.paths import PathResolver
from joindata.stages.results import DetailedResultAssembler, ResultAssembler
from joindata.stages.values import ValueGenerator


@pytest.fixture
def generator() -> ValueGenerator:
    return ValueGenerator(PathResolver())


class TestValueGeneratorAs:
    """Single result field."""

    def test_single_match_written_raw(self, generator: ValueGenerator) -> None:
        product = {"id": 101, "title": "Widget"}
        assert generator.generate_as_value(product, "product", None, None) == {"product": product}

    def test_multiple_matches_written_as_list(self, generator: ValueGenerator) -> None:
        matched = [{"id": 1}, {"id": 2}]
        fields = generator.generate_as_value(matched, "products", None, None)
        assert fields["products"] is matched

    def test_requires_as_or_as_map(self, generator: ValueGenerator) -> None:
        with pytest.raises(ValueError):
            generator.generate_as_value({"id": 1}, None, None, None)


class TestValueGeneratorAsMap:
    """Plucked result fields."""

    def test_single_match(self, generator: ValueGenerator) -> None:
        fields = generator.generate_as_value(
            {"id": 101, "title": "Widget"},
            None,
            {"id": "productId", "title": "productName"},
            None,
        )
        assert fields == {"productId": 101, "productName": "Widget"}

    def test_multiple_matches_become_lists(self, generator: ValueGenerator) -> None:
        fields = generator.generate_as_value(
            [{"id": 101, "title": "Widget"}, {"id": 102, "title": "Gadget"}],
            None,
            {"id": "productId", "title": "productName"},
            None,
        )
        assert fields == {"productId": [101, 102], "productName": ["Widget", "Gadget"]}

    def test_nested_source_path(self, generator: ValueGenerator) -> None:
        fields = generator.generate_as_value({"id": 1, "meta": {"sku": "W-1"}}, None, {"meta.sku": "sku"}, None)
        assert fields == {"sku": "W-1"}

    def test_single_match_missing_field_omitted(self, generator: ValueGenerator) -> None:
        fields = generator.generate_as_value({"id": 1}, None, {"id": "productId", "title": "productName"}, None)
        assert fields == {"productId": 1}

    def test_multiple_matches_missing_field_is_none(self, generator: ValueGenerator) -> None:
        fields = generator.generate_as_value([{"id": 1, "title": "A"}, {"id": 2}], None, {"title": "names"}, None)
        assert fields == {"names": ["A", None]}


class TestResultAssemblers:
    """Result shaping."""

    def test_default_summary(self) -> None:
        local = [{"id": 1}]
        result = ResultAssembler().generate_result([], local, None)
        assert type(result) is JoinDataResult
        assert result == JoinDataResult(all_success=True, join_failed_values=[])

    def test_default_with_failures(self) -> None:
        result = ResultAssembler().generate_result([5, None], [], None)
        assert result.all_success is False
        assert result.join_failed_values == [5, None]

    def test_detailed_returns_local(self) -> None:
        local = [{"id": 1, "joined": {"id": 1}}]
        result = DetailedResultAssembler().generate_result((), local, None)
        assert isinstance(result, JoinDataDetailedResult)
        assert result.all_success is True
        assert result.local is local
