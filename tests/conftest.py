# tests/conftest.py
"""Shared test fixtures and helpers.

Fixtures:
- orders / products: the order -> product example used across engine tests
- make_fetch: builds sync or async fetch callbacks that count their calls
- isolated_registries: autouse, empties the engine registries around each test

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

import os
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

import pytest
from hypothesis import Phase, Verbosity, settings

# =============================================================================
# Hypothesis Configuration
# =============================================================================

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


# =============================================================================
# Fetch helpers
# =============================================================================


@dataclass
class CountingFetch:
    """Fetch callback that returns fixed data and counts its calls."""

    data: Any
    is_async: bool = False
    error: BaseException | None = None
    calls: int = 0

    def __call__(self) -> Any:
        self.calls += 1
        if self.is_async:
            return self._async_result()
        if self.error is not None:
            raise self.error
        return self.data

    async def _async_result(self) -> Any:
        if self.error is not None:
            raise self.error
        return self.data


@pytest.fixture
def make_fetch() -> Callable[..., CountingFetch]:
    """Factory for counting fetch callbacks.

    Usage:
        fetch = make_fetch(products, is_async=True)
    """

    def _make(data: Any = None, *, is_async: bool = False, error: BaseException | None = None) -> CountingFetch:
        return CountingFetch(data=data, is_async=is_async, error=error)

    return _make


# =============================================================================
# Sample data
# =============================================================================


@pytest.fixture
def orders() -> list[dict[str, Any]]:
    return [
        {"id": 1, "items": [101, 102]},
        {"id": 2, "items": [201]},
    ]


@pytest.fixture
def products() -> list[dict[str, Any]]:
    return [
        {"id": 101, "title": "Widget"},
        {"id": 102, "title": "Gadget"},
        {"id": 201, "title": "Sprocket"},
    ]


# =============================================================================
# Registry isolation
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_registries() -> Iterator[None]:
    """Engine registries are process-wide; start and end every test empty."""
    from joindata.engine import registry

    registry._registries.clear()
    yield
    registry._registries.clear()
