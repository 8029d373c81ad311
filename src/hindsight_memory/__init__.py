"""Hindsight-backed long-term memory for conversational agents."""

from hindsight_memory.client import HindsightClient
from hindsight_memory.config import PluginConfig
from hindsight_memory.errors import (
    MemoryClientError,
    RemoteServiceError,
    TransportError,
)
from hindsight_memory.plugin import HindsightMemoryPlugin, PluginAPI

__all__ = [
    "HindsightClient",
    "HindsightMemoryPlugin",
    "MemoryClientError",
    "PluginAPI",
    "PluginConfig",
    "RemoteServiceError",
    "TransportError",
]
