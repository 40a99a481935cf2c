# src/joindata/core/config.py
"""
Configuration schema and loading for joindata.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.

Example YAML:
    path_separator: "."
    default_as: joined
    stages:
      local_standardizer: shadow_clone
      result_assembler: detailed
    logging:
      level: ${LOG_LEVEL:-INFO}
      json_output: false
"""

import os
import re
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError, field_validator

from joindata.contracts.errors import JoinConfigError


class LoggingSettings(BaseModel):
    """Logging configuration (see joindata.core.logging)."""

    model_config = {"frozen": True, "extra": "forbid"}

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Level of the joindata logger",
    )
    json_output: bool = Field(default=False, description="Emit JSON lines instead of console output")

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        """Accept lowercase level names."""
        if isinstance(v, str):
            return v.upper()
        return v


class StageSettings(BaseModel):
    """Stage plugin selection, by registered name, for each pipeline stage."""

    model_config = {"frozen": True, "extra": "forbid"}

    path_resolver: str = "default"
    validator: str = "default"
    local_standardizer: str = "default"
    from_standardizer: str = "default"
    value_generator: str = "default"
    result_assembler: str = "default"


class JoinSettings(BaseModel):
    """Top-level joindata configuration.

    All settings are validated and frozen after construction.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    path_separator: str = Field(
        default=".",
        min_length=1,
        description="Separator between field path segments",
    )
    default_as: str = Field(
        default="joined",
        min_length=1,
        description="Result field name used when neither as_ nor as_map is given",
    )
    stages: StageSettings = Field(
        default_factory=StageSettings,
        description="Stage plugin selection",
    )
    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration",
    )

    @field_validator("default_as")
    @classmethod
    def validate_default_as(cls, v: str) -> str:
        """default_as is a plain field name."""
        if not v.strip():
            raise ValueError("default_as must not be blank")
        return v

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "JoinSettings":
        """Create settings from a dict with a clear error on validation failure.

        Raises:
            JoinConfigError: If configuration is invalid.
        """
        try:
            settings = cls.model_validate(config)
        except ValidationError as e:
            raise JoinConfigError(f"Invalid joindata configuration: {e}") from e
        if settings.path_separator in settings.default_as:
            raise JoinConfigError(
                f"default_as '{settings.default_as}' must not contain the path separator '{settings.path_separator}'"
            )
        return settings


# Regex pattern for ${VAR} or ${VAR:-default} syntax
_ENV_VAR_PATTERN = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}")


def _expand_env_vars(config: dict[str, Any]) -> dict[str, Any]:
    """Recursively expand ${VAR} and ${VAR:-default} patterns in config values.

    Args:
        config: Configuration dict (may contain nested structures)

    Returns:
        New dict with environment variables expanded
    """

    def _expand_string(value: str) -> str:
        def replacer(match: re.Match[str]) -> str:
            var_name = match.group(1)
            default = match.group(2)  # None if no default specified
            env_value = os.environ.get(var_name)
            if env_value is not None:
                return env_value
            if default is not None:
                return default
            # No env var and no default - keep original (validation reports it)
            return match.group(0)

        return _ENV_VAR_PATTERN.sub(replacer, value)

    def _expand_value(value: Any) -> Any:
        if isinstance(value, str):
            return _expand_string(value)
        elif isinstance(value, dict):
            return {k: _expand_value(v) for k, v in value.items()}
        elif isinstance(value, list):
            return [_expand_value(item) for item in value]
        else:
            return value

    return {k: _expand_value(v) for k, v in config.items()}


def _lowercase_keys(value: Any) -> Any:
    """Dynaconf uppercases keys; Pydantic fields are lowercase."""
    if isinstance(value, dict):
        return {str(k).lower(): _lowercase_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_lowercase_keys(item) for item in value]
    return value


def load_settings(config_path: Path) -> JoinSettings:
    """Load settings from a YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (JOINDATA_*) - highest priority
    2. Config file
    3. Defaults from Pydantic schema - lowest priority

    Environment variable format: JOINDATA_STAGES__RESULT_ASSEMBLER for nested keys.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated JoinSettings instance

    Raises:
        JoinConfigError: If configuration fails validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix="JOINDATA",
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Loader options passed above can surface as settings; drop them
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES", "ENVVAR_PREFIX", "MERGE_ENABLED"}
    raw_config = {
        k: v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys and not k.endswith("_FOR_DYNACONF")
    }
    raw_config = _lowercase_keys(raw_config)
    raw_config = _expand_env_vars(raw_config)

    return JoinSettings.from_dict(raw_config)
