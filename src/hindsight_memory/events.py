"""Lifecycle event records emitted by the host runtime."""

from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from hindsight_memory.messages import Message, message_from_raw


class HookKind(str, Enum):
    """Host lifecycle points the plugin can react to."""

    TURN_STARTING = "before_agent_start"
    TURN_ENDED = "agent_end"


@dataclass(frozen=True)
class TurnStartingEvent:
    prompt: str | None = None

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any] | None) -> "TurnStartingEvent":
        prompt = (raw or {}).get("prompt")
        return cls(prompt=prompt if isinstance(prompt, str) else None)


@dataclass(frozen=True)
class TurnEndedEvent:
    success: bool
    messages: tuple[Message, ...] = ()

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any] | None) -> "TurnEndedEvent":
        """Build the event from a host payload, dropping unusable messages."""
        raw = raw or {}
        raw_messages = raw.get("messages") or ()
        messages: list[Message] = []
        if isinstance(raw_messages, Sequence) and not isinstance(raw_messages, str):
            for item in raw_messages:
                message = message_from_raw(item)
                if message is not None:
                    messages.append(message)
        return cls(success=bool(raw.get("success")), messages=tuple(messages))


@dataclass(frozen=True)
class PrependContext:
    """Instruction for the host to merge text ahead of the model's input."""

    prepend_context: str

    def to_dict(self) -> dict[str, str]:
        return {"prependContext": self.prepend_context}


HookEvent = TurnStartingEvent | TurnEndedEvent
HookHandler = Callable[[Any], Awaitable[PrependContext | None]]
