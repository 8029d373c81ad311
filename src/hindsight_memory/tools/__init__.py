"""Tool system."""

from hindsight_memory.tools.base import Tool, ToolContext, ToolResult
from hindsight_memory.tools.memory import MemoryRecallTool, MemoryRetainTool
from hindsight_memory.tools.registry import ToolRegistry

__all__ = [
    "MemoryRecallTool",
    "MemoryRetainTool",
    "Tool",
    "ToolContext",
    "ToolRegistry",
    "ToolResult",
]
