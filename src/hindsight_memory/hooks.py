"""Lifecycle hook registry and the memory hook bindings."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from hindsight_memory.events import HookHandler, HookKind, PrependContext

if TYPE_CHECKING:
    from hindsight_memory.config import PluginConfig
    from hindsight_memory.events import TurnStartingEvent
    from hindsight_memory.recall import RecallPolicy
    from hindsight_memory.retention import RetentionPolicy

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class HookHealthSnapshot:
    """Operational summary of registered hooks."""

    handler_counts: dict[str, int]
    hook_failures: dict[str, int]

    @property
    def is_degraded(self) -> bool:
        return bool(self.hook_failures)


def _handler_name(handler: HookHandler) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)


class HookRegistry:
    """Handlers keyed by lifecycle point.

    Dispatch never raises: a failing handler is logged, counted and skipped
    so memory problems cannot abort the host's turn.
    """

    def __init__(self) -> None:
        self._handlers: dict[HookKind, list[HookHandler]] = defaultdict(list)
        self._failure_counts: dict[str, int] = {}

    def on(self, kind: HookKind, handler: HookHandler) -> None:
        self._handlers[kind].append(handler)
        logger.debug("Registered %s hook: %s", kind.value, _handler_name(handler))

    def handlers(self, kind: HookKind) -> tuple[HookHandler, ...]:
        return tuple(self._handlers.get(kind, ()))

    def _log_hook_failure(self, kind: HookKind, handler: HookHandler) -> None:
        key = f"{kind.value}.{_handler_name(handler)}"
        self._failure_counts[key] = self._failure_counts.get(key, 0) + 1
        logger.warning(
            "hook_failed: %s handler %s",
            kind.value,
            _handler_name(handler),
            extra={"hook.kind": kind.value, "hook.handler": _handler_name(handler)},
            exc_info=True,
        )

    async def dispatch(self, kind: HookKind, event: Any) -> list[PrependContext]:
        """Run every handler for ``kind`` in registration order.

        Returns:
            Non-None handler results.
        """
        results: list[PrependContext] = []
        for handler in self.handlers(kind):
            try:
                result = await handler(event)
            except Exception:
                self._log_hook_failure(kind, handler)
                continue
            if result is not None:
                results.append(result)
        return results

    async def run_turn_starting(self, event: TurnStartingEvent) -> PrependContext | None:
        """Dispatch a turn-start event and merge injected context."""
        results = await self.dispatch(HookKind.TURN_STARTING, event)
        if not results:
            return None
        return PrependContext("\n\n".join(r.prepend_context for r in results))

    def health_snapshot(self) -> HookHealthSnapshot:
        return HookHealthSnapshot(
            handler_counts={
                kind.value: len(handlers)
                for kind, handlers in sorted(self._handlers.items())
            },
            hook_failures=dict(sorted(self._failure_counts.items())),
        )


class MemoryHooks:
    """Binds the retention and recall policies to lifecycle points.

    Auto-retain is on by default; auto-recall is opt-in because injected
    memories change the model's input.
    """

    def __init__(
        self,
        config: PluginConfig,
        retention: RetentionPolicy,
        recall: RecallPolicy,
    ) -> None:
        self._config = config
        self._retention = retention
        self._recall = recall

    def register(self, registry: HookRegistry) -> list[HookKind]:
        """Register enabled hooks; returns the lifecycle points bound."""
        bound: list[HookKind] = []
        if self._config.auto_recall:
            registry.on(HookKind.TURN_STARTING, self._recall.on_turn_starting)
            bound.append(HookKind.TURN_STARTING)
        if self._config.auto_retain:
            registry.on(HookKind.TURN_ENDED, self._retention.on_turn_ended)
            bound.append(HookKind.TURN_ENDED)
        return bound
