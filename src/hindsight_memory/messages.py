"""Conversation message model.

Host runtimes hand over messages as loose mappings whose ``content`` is
either a plain string or a list of typed blocks. Both shapes are normalized
into a tagged variant so that text extraction can match on the tag.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Role(str, Enum):
    """Message role."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


TEXT_BLOCK = "text"


@dataclass(frozen=True)
class ContentBlock:
    """A typed block of message content (text, image, tool_use, ...)."""

    kind: str
    payload: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PlainText:
    text: str


@dataclass(frozen=True)
class BlockSequence:
    blocks: tuple[ContentBlock, ...] = ()


MessageContent = PlainText | BlockSequence


@dataclass(frozen=True)
class Message:
    """A message in the conversation.

    ``role`` stays a plain string when the host uses a role outside
    :class:`Role`, so unknown roles are carried rather than rejected.
    """

    role: Role | str
    content: MessageContent

    @property
    def is_user(self) -> bool:
        return self.role == Role.USER


def _parse_role(value: Any) -> Role | str:
    try:
        return Role(value)
    except ValueError:
        return str(value)


def _parse_content(value: Any) -> MessageContent:
    if isinstance(value, str):
        return PlainText(value)
    if isinstance(value, list | tuple):
        blocks = tuple(
            ContentBlock(kind=str(block["type"]), payload=block)
            for block in value
            if isinstance(block, Mapping) and "type" in block
        )
        return BlockSequence(blocks)
    return BlockSequence()


def message_from_raw(raw: Any) -> Message | None:
    """Build a Message from a host message mapping.

    Returns None for entries that are not mappings (or already a Message,
    which is returned unchanged).
    """
    if isinstance(raw, Message):
        return raw
    if not isinstance(raw, Mapping):
        return None
    return Message(
        role=_parse_role(raw.get("role")),
        content=_parse_content(raw.get("content")),
    )


def extract_texts(content: MessageContent) -> list[str]:
    """Return the raw text fragments of a message's content."""
    match content:
        case PlainText(text=text):
            return [text]
        case BlockSequence(blocks=blocks):
            texts: list[str] = []
            for block in blocks:
                if block.kind != TEXT_BLOCK:
                    continue
                text = block.payload.get("text")
                if isinstance(text, str):
                    texts.append(text)
            return texts
    return []
