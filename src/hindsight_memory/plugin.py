"""Plugin definition: wires config, client, tools and hooks into a host."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import httpx

from hindsight_memory.client import HindsightClient
from hindsight_memory.config import PluginConfig, parse_plugin_config
from hindsight_memory.events import (
    HookKind,
    PrependContext,
    TurnEndedEvent,
    TurnStartingEvent,
)
from hindsight_memory.hooks import HookRegistry, MemoryHooks
from hindsight_memory.recall import RecallPolicy
from hindsight_memory.retention import RetentionPolicy
from hindsight_memory.tools import (
    MemoryRecallTool,
    MemoryRetainTool,
    ToolContext,
    ToolRegistry,
    ToolResult,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

PLUGIN_ID = "hindsight-memory"


@dataclass(frozen=True)
class PluginService:
    """Start/stop pair the host calls around the plugin's lifetime."""

    id: str
    start: Callable[[], None]
    stop: Callable[[], None]


@dataclass
class PluginAPI:
    """Host surface the plugin registers against."""

    plugin_config: dict[str, Any] | None = None
    tools: ToolRegistry = field(default_factory=ToolRegistry)
    hooks: HookRegistry = field(default_factory=HookRegistry)
    services: list[PluginService] = field(default_factory=list)

    def register_service(self, service: PluginService) -> None:
        self.services.append(service)

    def start_services(self) -> None:
        for service in self.services:
            service.start()

    def stop_services(self) -> None:
        for service in reversed(self.services):
            service.stop()

    async def execute_tool(
        self,
        name: str,
        params: dict[str, Any],
        context: ToolContext | None = None,
    ) -> ToolResult:
        tool = self.tools.get(name)
        return await tool.execute(params, context or ToolContext())

    async def turn_starting(
        self, raw: Mapping[str, Any] | None
    ) -> PrependContext | None:
        return await self.hooks.run_turn_starting(TurnStartingEvent.from_raw(raw))

    async def turn_ended(self, raw: Mapping[str, Any] | None) -> None:
        await self.hooks.dispatch(HookKind.TURN_ENDED, TurnEndedEvent.from_raw(raw))


class HindsightMemoryPlugin:
    """Hindsight-backed long-term memory.

    Provides the hindsight_recall and hindsight_retain tools plus lifecycle
    hooks for automatic capture and context injection.
    """

    id = PLUGIN_ID
    name = "Memory (Hindsight)"
    description = "Hindsight-backed long-term memory"
    kind = "memory"

    def __init__(self, *, transport: httpx.AsyncBaseTransport | None = None):
        self._transport = transport
        self.config: PluginConfig | None = None
        self.client: HindsightClient | None = None

    def register(self, api: PluginAPI) -> None:
        """Register tools, hooks and the lifecycle service with the host.

        Raises:
            ConfigError: If the plugin config is invalid.
        """
        cfg = parse_plugin_config(api.plugin_config)
        client = HindsightClient.from_config(cfg, transport=self._transport)
        self.config = cfg
        self.client = client

        logger.info(
            "hindsight-memory: registered (bank: %s, url: %s)",
            cfg.bank_id,
            cfg.base_url,
        )

        recall = RecallPolicy(client)
        retention = RetentionPolicy(client)

        api.tools.register(MemoryRecallTool(recall))
        api.tools.register(MemoryRetainTool(client))

        MemoryHooks(cfg, retention, recall).register(api.hooks)

        def start() -> None:
            logger.info(
                "hindsight-memory: started (bank: %s, autoRetain: %s, autoRecall: %s)",
                cfg.bank_id,
                cfg.auto_retain,
                cfg.auto_recall,
            )

        def stop() -> None:
            logger.info("hindsight-memory: stopped")

        api.register_service(PluginService(id=PLUGIN_ID, start=start, stop=stop))
