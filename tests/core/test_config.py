# tests/core/test_config.py
"""Tests for settings and settings loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from joindata.contracts.errors import JoinConfigError
from joindata.core.config import JoinSettings, LoggingSettings, StageSettings, load_settings


class TestJoinSettings:
    """Settings schema."""

    def test_defaults(self) -> None:
        settings = JoinSettings()
        assert settings.path_separator == "."
        assert settings.default_as == "joined"
        assert settings.stages == StageSettings()
        assert settings.logging.level == "INFO"
        assert settings.logging.json_output is False

    def test_frozen(self) -> None:
        settings = JoinSettings()
        with pytest.raises(ValidationError):
            settings.default_as = "other"  # type: ignore[misc]

    def test_from_dict_nested(self) -> None:
        settings = JoinSettings.from_dict(
            {
                "path_separator": "/",
                "stages": {"result_assembler": "detailed"},
                "logging": {"level": "debug"},
            }
        )
        assert settings.path_separator == "/"
        assert settings.stages.result_assembler == "detailed"
        assert settings.stages.validator == "default"
        assert settings.logging.level == "DEBUG"

    def test_unknown_key_rejected(self) -> None:
        with pytest.raises(JoinConfigError, match="Invalid joindata configuration"):
            JoinSettings.from_dict({"separator": "."})

    def test_unknown_stage_kind_rejected(self) -> None:
        with pytest.raises(JoinConfigError):
            JoinSettings.from_dict({"stages": {"matcher": "fuzzy"}})

    def test_empty_separator_rejected(self) -> None:
        with pytest.raises(JoinConfigError):
            JoinSettings.from_dict({"path_separator": ""})

    def test_default_as_containing_separator_rejected(self) -> None:
        with pytest.raises(JoinConfigError, match="path separator"):
            JoinSettings.from_dict({"default_as": "a.b"})

    def test_invalid_log_level_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LoggingSettings(level="LOUD")  # type: ignore[arg-type]


class TestLoadSettings:
    """YAML + environment loading via Dynaconf."""

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "nope.yaml")

    def test_loads_yaml(self, tmp_path: Path) -> None:
        config = tmp_path / "joindata.yaml"
        config.write_text(
            "path_separator: '/'\n"
            "default_as: matches\n"
            "stages:\n"
            "  local_standardizer: shadow_clone\n"
            "logging:\n"
            "  level: WARNING\n"
            "  json_output: true\n"
        )

        settings = load_settings(config)

        assert settings.path_separator == "/"
        assert settings.default_as == "matches"
        assert settings.stages.local_standardizer == "shadow_clone"
        assert settings.logging.level == "WARNING"
        assert settings.logging.json_output is True

    def test_expands_env_var_defaults(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("JOIN_FIELD_NAME", raising=False)
        config = tmp_path / "joindata.yaml"
        config.write_text("default_as: \"${JOIN_FIELD_NAME:-fallback}\"\n")

        assert load_settings(config).default_as == "fallback"

    def test_expands_env_vars(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("JOIN_FIELD_NAME", "from_env")
        config = tmp_path / "joindata.yaml"
        config.write_text("default_as: \"${JOIN_FIELD_NAME:-fallback}\"\n")

        assert load_settings(config).default_as == "from_env"

    def test_invalid_file_raises_config_error(self, tmp_path: Path) -> None:
        config = tmp_path / "joindata.yaml"
        config.write_text("unexpected: true\n")

        with pytest.raises(JoinConfigError):
            load_settings(config)
