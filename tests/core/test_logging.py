# tests/core/test_logging.py
"""Tests for structured logging configuration."""

import io
import json
import logging
from collections.abc import Callable, Iterator
from typing import Any

import pytest
import structlog

from joindata.contracts import JoinParams
from joindata.core.config import JoinSettings
from joindata.core.logging import LIBRARY_LOGGER, bind_join_context, configure_from_settings, configure_logging, get_logger
from joindata.engine import JoinEngine, join_data


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    library_logger = logging.getLogger(LIBRARY_LOGGER)
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
    library_logger.handlers = []
    library_logger.setLevel(logging.NOTSET)
    library_logger.propagate = True


def _events(stream: io.StringIO) -> list[dict[str, Any]]:
    return [json.loads(line) for line in stream.getvalue().splitlines() if line.strip()]


class TestConfigureLogging:
    """Handler setup on the joindata logger tree."""

    def test_get_logger_returns_logger(self) -> None:
        logger = get_logger("joindata.test")
        assert hasattr(logger, "info")
        assert hasattr(logger, "bind")

    def test_json_output(self) -> None:
        stream = io.StringIO()
        configure_logging(json_output=True, stream=stream)

        get_logger("joindata.test").info("test message", key="value")

        [event] = _events(stream)
        assert event["event"] == "test message"
        assert event["key"] == "value"
        assert event["level"] == "info"
        assert event["logger"] == "joindata.test"
        assert "_record" not in event

    def test_console_output(self) -> None:
        stream = io.StringIO()
        configure_logging(json_output=False, stream=stream)

        get_logger("joindata.test").info("test message", key="value")

        assert "test message" in stream.getvalue()
        assert "key=value" in stream.getvalue()

    def test_level_filters_events(self) -> None:
        stream = io.StringIO()
        configure_logging(json_output=True, level="WARNING", stream=stream)

        get_logger("joindata.test").info("hidden")

        assert stream.getvalue() == ""

    def test_root_logger_untouched(self) -> None:
        root = logging.getLogger()
        handlers_before = list(root.handlers)
        level_before = root.level

        handler = configure_logging(stream=io.StringIO())

        assert root.handlers == handlers_before
        assert root.level == level_before
        assert logging.getLogger(LIBRARY_LOGGER).handlers == [handler]
        assert logging.getLogger(LIBRARY_LOGGER).propagate is False

    def test_reconfigure_replaces_handler(self) -> None:
        first = io.StringIO()
        second = io.StringIO()
        configure_logging(json_output=True, stream=first)
        configure_logging(json_output=True, stream=second)

        get_logger("joindata.test").info("once")

        assert first.getvalue() == ""
        assert [e["event"] for e in _events(second)] == ["once"]

    def test_configure_from_settings(self) -> None:
        stream = io.StringIO()
        settings = JoinSettings.from_dict({"logging": {"level": "debug", "json_output": True}})

        configure_from_settings(settings, stream=stream)
        get_logger("joindata.test").debug("debug event")

        assert _events(stream)[0]["event"] == "debug event"

    def test_bind_join_context(self) -> None:
        stream = io.StringIO()
        configure_logging(json_output=True, stream=stream)
        logger = get_logger("joindata.test")

        with bind_join_context(registry="reporting"):
            logger.info("inside")
        logger.info("outside")

        inside, outside = _events(stream)
        assert inside["registry"] == "reporting"
        assert "registry" not in outside


class TestJoinEvents:
    """Events emitted by the engine."""

    @pytest.mark.asyncio
    async def test_join_events(self, make_fetch: Callable[..., Any]) -> None:
        stream = io.StringIO()
        configure_logging(json_output=True, level="DEBUG", stream=stream)
        local = [{"k": 1}, {"k": 2}]

        await JoinEngine().join_data(JoinParams(local=local, from_=make_fetch([{"id": 1}]), local_field="k", from_field="id"))

        events = {e["event"]: e for e in _events(stream)}
        assert list(events) == ["join_started", "join_misses", "join_completed"]
        completed = events["join_completed"]
        assert completed["engine"] == "JoinEngine"
        assert completed["local_field"] == "k"
        assert completed["matched_count"] == 1
        assert completed["failed_count"] == 1
        assert completed["logger"] == "joindata.engine.core"

    @pytest.mark.asyncio
    async def test_fetch_failure_logged(self, make_fetch: Callable[..., Any]) -> None:
        stream = io.StringIO()
        configure_logging(json_output=True, stream=stream)

        with pytest.raises(ConnectionError):
            await JoinEngine().join_data(
                JoinParams(local=[{"k": 1}], from_=make_fetch(error=ConnectionError("down")), local_field="k", from_field="id")
            )

        [event] = _events(stream)
        assert event["event"] == "join_fetch_failed"
        assert event["level"] == "warning"
        assert event["error_type"] == "ConnectionError"

    @pytest.mark.asyncio
    async def test_registry_name_bound(self, make_fetch: Callable[..., Any]) -> None:
        stream = io.StringIO()
        configure_logging(json_output=True, stream=stream)

        await join_data({"local": [{"k": 1}], "from": make_fetch([{"id": 1}]), "local_field": "k", "from_field": "id"}, registry="reporting")

        [event] = _events(stream)
        assert event["event"] == "join_completed"
        assert event["registry"] == "reporting"
