"""Recall policy shared by the auto-recall hook and the recall tool."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

from hindsight_memory.events import PrependContext
from hindsight_memory.tools.base import ToolResult

if TYPE_CHECKING:
    from hindsight_memory.events import TurnStartingEvent
    from hindsight_memory.types import RecallResponse, RecallResult

logger = logging.getLogger(__name__)

MIN_PROMPT_LENGTH = 10
AUTO_RECALL_MAX_TOKENS = 1500
MAX_INJECTED_MEMORIES = 5
NO_MEMORIES_TEXT = "No relevant memories found."


class RecallClient(Protocol):
    async def recall(
        self,
        query: str,
        *,
        max_tokens: int | None = None,
        tags: Sequence[str] | None = None,
    ) -> RecallResponse: ...


def format_context_block(results: Sequence[RecallResult]) -> str:
    """Render memories as the block injected ahead of the model's input."""
    bullets = "\n".join(f"- {result.content}" for result in results)
    return (
        "<relevant-memories>\n"
        "The following memories may be relevant:\n"
        f"{bullets}\n"
        "</relevant-memories>"
    )


def relevance_percent(score: float) -> int:
    return round(score * 100)


def format_recall_listing(results: Sequence[RecallResult]) -> str:
    """Render memories as a numbered list for tool output."""
    entries = "\n\n".join(
        f"{index}. {result.content} (relevance: {relevance_percent(result.score)}%)"
        for index, result in enumerate(results, start=1)
    )
    return f"Found {len(results)} memories:\n\n{entries}"


class RecallPolicy:
    """Queries memory and shapes the results for context or tool output.

    Result order is whatever the service returned (descending relevance);
    nothing here re-sorts.
    """

    def __init__(
        self,
        client: RecallClient,
        *,
        min_prompt_length: int = MIN_PROMPT_LENGTH,
        max_tokens: int = AUTO_RECALL_MAX_TOKENS,
        max_injected: int = MAX_INJECTED_MEMORIES,
    ) -> None:
        self._client = client
        self.min_prompt_length = min_prompt_length
        self.max_tokens = max_tokens
        self.max_injected = max_injected

    async def on_turn_starting(self, event: TurnStartingEvent) -> PrependContext | None:
        """Return memories to inject for the upcoming turn, if any; never raises."""
        prompt = event.prompt
        if not prompt or len(prompt) < self.min_prompt_length:
            return None

        try:
            response = await self._client.recall(prompt, max_tokens=self.max_tokens)
        except Exception as e:
            logger.warning("hindsight-memory: auto-recall failed: %s", e)
            return None

        if not response.results:
            return None

        logger.info(
            "hindsight-memory: injecting %d memories into context",
            len(response.results),
        )
        return PrependContext(
            format_context_block(response.results[: self.max_injected])
        )

    async def recall_for_tool(
        self,
        query: str,
        max_tokens: int | None = None,
    ) -> ToolResult:
        """Run an explicit recall; failures become a degraded result."""
        try:
            response = await self._client.recall(query, max_tokens=max_tokens)
            results = response.results
            if not results:
                return ToolResult.success(NO_MEMORIES_TEXT, count=0)
            listing = format_recall_listing(results)
        except Exception as e:
            logger.warning("hindsight_recall failed: %s", e)
            return ToolResult.error(f"Memory recall failed: {e}", error=str(e))

        return ToolResult.success(
            listing,
            count=len(results),
            memories=[
                {"id": r.memory_id, "content": r.content, "score": r.score}
                for r in results
            ],
        )
