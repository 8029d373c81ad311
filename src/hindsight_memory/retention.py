"""Auto-retain: capture durable user statements at the end of a turn."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Protocol

from hindsight_memory.messages import Message, extract_texts

if TYPE_CHECKING:
    from collections.abc import Sequence

    from hindsight_memory.events import TurnEndedEvent
    from hindsight_memory.types import RetainResponse

logger = logging.getLogger(__name__)

MIN_CONTENT_LENGTH = 10
MAX_RETAINS_PER_TURN = 5
AUTO_RETAIN_CONTEXT = "auto-captured from conversation"
AUTO_RETAIN_TAGS = ("conversation", "auto")


class RetainClient(Protocol):
    async def retain(
        self,
        content: str,
        *,
        context: str | None = None,
        tags: Sequence[str] | None = None,
    ) -> RetainResponse: ...


def extract_candidates(
    messages: Iterable[Message],
    min_length: int = MIN_CONTENT_LENGTH,
) -> list[str]:
    """Collect trimmed user text worth storing, in message order.

    Assistant output is skipped since it can be derived again from the
    user's side of the conversation. Fragments must be longer than
    ``min_length`` characters after trimming.
    """
    candidates: list[str] = []
    for message in messages:
        if not message.is_user:
            continue
        for text in extract_texts(message.content):
            trimmed = text.strip()
            if len(trimmed) > min_length:
                candidates.append(trimmed)
    return candidates


class RetentionPolicy:
    """Decides what to store from a finished turn and submits it."""

    def __init__(
        self,
        client: RetainClient,
        *,
        max_items: int = MAX_RETAINS_PER_TURN,
        min_length: int = MIN_CONTENT_LENGTH,
    ) -> None:
        self._client = client
        self.max_items = max_items
        self.min_length = min_length

    async def on_turn_ended(self, event: TurnEndedEvent) -> None:
        """Hook entry point; never raises."""
        await self.retain_turn(event)

    async def retain_turn(self, event: TurnEndedEvent) -> int:
        """Submit up to ``max_items`` candidates from a successful turn.

        Failures are logged and swallowed; the turn has already completed.
        Submissions are sequential, so a failure part-way leaves the earlier
        ones stored.

        Returns:
            Number of memories successfully retained.
        """
        if not event.success or not event.messages:
            return 0

        retained = 0
        try:
            candidates = extract_candidates(event.messages, self.min_length)
            for content in candidates[: self.max_items]:
                await self._client.retain(
                    content,
                    context=AUTO_RETAIN_CONTEXT,
                    tags=list(AUTO_RETAIN_TAGS),
                )
                retained += 1
        except Exception as e:
            logger.warning(
                "hindsight-memory: auto-retain failed after %d item(s): %s",
                retained,
                e,
            )

        if retained > 0:
            logger.info("hindsight-memory: auto-retained %d messages", retained)
        return retained
