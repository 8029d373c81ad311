"""Memory tools for explicit recall and retain."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from hindsight_memory.tools.base import Tool, ToolContext, ToolResult

if TYPE_CHECKING:
    from hindsight_memory.recall import RecallPolicy
    from hindsight_memory.retention import RetainClient

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 100


def preview(content: str, limit: int = PREVIEW_LENGTH) -> str:
    """Truncate content for display, marking the cut with an ellipsis."""
    if len(content) <= limit:
        return content
    return f"{content[:limit]}..."


class MemoryRecallTool(Tool):
    """Search long-term memory for relevant context."""

    def __init__(self, policy: RecallPolicy):
        self._policy = policy

    @property
    def name(self) -> str:
        return "hindsight_recall"

    @property
    def label(self) -> str:
        return "Memory Recall"

    @property
    def description(self) -> str:
        return (
            "Search through long-term memory for relevant context. Use when you "
            "need information about past conversations, user preferences, "
            "decisions, or previously discussed topics."
        )

    @property
    def input_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": "What to search for in memory",
                },
                "maxTokens": {
                    "type": "integer",
                    "description": "Max tokens to return (default: 2000)",
                },
            },
            "required": ["query"],
        }

    async def execute(
        self,
        input_data: dict[str, Any],
        context: ToolContext,
    ) -> ToolResult:
        query = input_data.get("query")
        if not isinstance(query, str) or not query.strip():
            return ToolResult.error("Missing required parameter: query")

        max_tokens = input_data.get("maxTokens")
        if max_tokens is not None:
            # bool is an int subclass
            if isinstance(max_tokens, bool) or not isinstance(max_tokens, int | float):
                return ToolResult.error("maxTokens must be a positive integer")
            if max_tokens <= 0 or int(max_tokens) != max_tokens:
                return ToolResult.error("maxTokens must be a positive integer")
            max_tokens = int(max_tokens)

        return await self._policy.recall_for_tool(query, max_tokens)


class MemoryRetainTool(Tool):
    """Store information in long-term memory on request."""

    def __init__(self, client: RetainClient):
        self._client = client

    @property
    def name(self) -> str:
        return "hindsight_retain"

    @property
    def label(self) -> str:
        return "Memory Store"

    @property
    def description(self) -> str:
        return (
            "Store important information in long-term memory. Use for facts, "
            "preferences, decisions, and anything worth remembering across "
            "conversations."
        )

    @property
    def input_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "content": {
                    "type": "string",
                    "description": "Information to remember",
                },
                "context": {
                    "type": "string",
                    "description": "Additional context about when/why this was stored",
                },
                "tags": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": (
                        "Tags for categorization "
                        "(e.g., 'preference', 'fact', 'decision')"
                    ),
                },
            },
            "required": ["content"],
        }

    async def execute(
        self,
        input_data: dict[str, Any],
        context: ToolContext,
    ) -> ToolResult:
        content = input_data.get("content")
        if not isinstance(content, str) or not content.strip():
            return ToolResult.error("Missing required parameter: content")

        memory_context = input_data.get("context")
        if memory_context is not None and not isinstance(memory_context, str):
            return ToolResult.error("context must be a string")

        tags = input_data.get("tags")
        if tags is not None and (
            not isinstance(tags, list) or not all(isinstance(t, str) for t in tags)
        ):
            return ToolResult.error("tags must be a list of strings")

        try:
            response = await self._client.retain(
                content, context=memory_context, tags=tags
            )
        except Exception as e:
            logger.warning("hindsight_retain failed: %s", e)
            return ToolResult.error(f"Failed to store memory: {e}", error=str(e))

        return ToolResult.success(
            f'Stored in memory: "{preview(content)}"',
            action="created",
            memoryIds=response.memory_ids,
        )
