"""Memory service data types."""

import math
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

DEFAULT_RECALL_MAX_TOKENS = 2000
RECALL_BUDGET = "mid"


def utc_timestamp() -> str:
    """Current instant as ISO-8601 with millisecond precision and a Z suffix."""
    return (
        datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    )


def _list_field(data: dict[str, Any], key: str) -> list[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"{key} must be a list, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class MemoryItem:
    """A single memory submitted for storage."""

    content: str
    context: str | None = None
    tags: tuple[str, ...] | None = None
    timestamp: str = field(default_factory=utc_timestamp)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"content": self.content}
        if self.context is not None:
            payload["context"] = self.context
        if self.tags is not None:
            payload["tags"] = list(self.tags)
        payload["timestamp"] = self.timestamp
        return payload


@dataclass(frozen=True)
class RecallQuery:
    """A relevance query against one bank."""

    text: str
    max_tokens: int = DEFAULT_RECALL_MAX_TOKENS
    tags: tuple[str, ...] | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "query": self.text,
            "max_tokens": self.max_tokens,
            "budget": RECALL_BUDGET,
        }
        if self.tags is not None:
            payload["tags"] = list(self.tags)
        return payload


@dataclass(frozen=True)
class RecallResult:
    """A scored memory returned by a recall."""

    memory_id: str
    content: str
    score: float
    timestamp: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RecallResult":
        """Parse one result entry.

        Raises:
            ValueError: If the score is not a number in [0, 1].
        """
        score = float(data.get("score") or 0.0)
        if not math.isfinite(score) or not 0.0 <= score <= 1.0:
            raise ValueError(f"score out of range: {score}")
        return cls(
            memory_id=str(data.get("memory_id", "")),
            content=str(data.get("content", "")),
            score=score,
            timestamp=data.get("timestamp"),
        )


@dataclass(frozen=True)
class RetainResponse:
    success: bool
    items_count: int
    memory_ids: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RetainResponse":
        return cls(
            success=bool(data.get("success", False)),
            items_count=int(data.get("items_count") or 0),
            memory_ids=[str(m) for m in _list_field(data, "memory_ids")],
        )


@dataclass(frozen=True)
class RecallResponse:
    """Recall results in the order the service returned them.

    The service ranks by descending relevance; the order is forwarded as-is.
    """

    results: list[RecallResult] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RecallResponse":
        results: list[RecallResult] = []
        for item in _list_field(data, "results"):
            if not isinstance(item, dict):
                raise TypeError(f"recall result must be an object, got {item!r}")
            results.append(RecallResult.from_dict(item))
        return cls(results=results)
