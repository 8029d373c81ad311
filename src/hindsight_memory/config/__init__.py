"""Configuration module."""

from hindsight_memory.config.loader import load_config, parse_plugin_config
from hindsight_memory.config.models import (
    DEFAULT_BANK_ID,
    DEFAULT_BASE_URL,
    ConfigError,
    PluginConfig,
)
from hindsight_memory.config.paths import get_config_path, get_hindsight_home

__all__ = [
    "DEFAULT_BANK_ID",
    "DEFAULT_BASE_URL",
    "ConfigError",
    "PluginConfig",
    "get_config_path",
    "get_hindsight_home",
    "load_config",
    "parse_plugin_config",
]
