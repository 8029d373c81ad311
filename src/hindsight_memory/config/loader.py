"""Configuration loading from host dicts, TOML files and environment variables."""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from hindsight_memory.config.models import ConfigError, PluginConfig
from hindsight_memory.config.paths import get_config_path

logger = logging.getLogger(__name__)

SECTION = "hindsight"

# (field name, camelCase alias, env var)
ENV_OVERRIDES = [
    ("api_key", "apiKey", "HINDSIGHT_API_KEY"),
    ("base_url", "baseUrl", "HINDSIGHT_BASE_URL"),
    ("bank_id", "bankId", "HINDSIGHT_BANK_ID"),
]


def _get_default_config_paths() -> list[Path]:
    """Get ordered list of default config file locations."""
    return [
        Path("hindsight.toml"),  # Current directory
        get_config_path(),  # ~/.hindsight-memory/config.toml (or HINDSIGHT_HOME)
    ]


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Fill fields from the environment where the config is silent."""
    resolved = dict(raw)
    for field_name, alias, env_var in ENV_OVERRIDES:
        if resolved.get(field_name) is not None or resolved.get(alias) is not None:
            continue
        value = os.environ.get(env_var)
        if value:
            resolved[field_name] = value
    return resolved


def parse_plugin_config(raw: dict[str, Any] | None) -> PluginConfig:
    """Validate a host-supplied plugin config.

    Args:
        raw: Mapping using camelCase or snake_case keys. None means defaults.

    Raises:
        ConfigError: If the config is invalid.
    """
    try:
        return PluginConfig.model_validate(raw or {})
    except ValidationError as e:
        raise ConfigError(f"Invalid hindsight-memory config: {e}") from e


def load_config(path: Path | None = None) -> PluginConfig:
    """Load configuration from a TOML file.

    Args:
        path: Explicit path to config file. If None, searches default
            locations and falls back to defaults when none exist.

    Returns:
        Validated PluginConfig instance.

    Raises:
        FileNotFoundError: If an explicit path does not exist.
        ConfigError: If the config file is invalid.
    """
    config_path: Path | None = None

    if path is not None:
        config_path = Path(path).expanduser()
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
    else:
        for default_path in _get_default_config_paths():
            expanded = default_path.expanduser()
            if expanded.exists():
                config_path = expanded
                break

    raw_config: dict[str, Any] = {}
    if config_path is not None:
        try:
            with config_path.open("rb") as f:
                raw_config = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e
        logger.debug("Loaded config from %s", config_path)

    section = raw_config.get(SECTION, raw_config)
    if not isinstance(section, dict):
        raise ConfigError(f"[{SECTION}] must be a table")

    return parse_plugin_config(_apply_env_overrides(section))
