"""Abstract tool interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass
class ToolContext:
    """Context passed to tool execution."""

    tool_call_id: str | None = None
    session_id: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class ToolResult:
    """Result from tool execution.

    ``content`` is the human-readable text shown to the model; ``details``
    is the structured payload handed back to the host.
    """

    content: str
    is_error: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def success(cls, content: str, **details: Any) -> "ToolResult":
        """Create a successful result."""
        return cls(content=content, is_error=False, details=details)

    @classmethod
    def error(cls, message: str, **details: Any) -> "ToolResult":
        """Create an error result."""
        return cls(content=message, is_error=True, details=details)

    def to_dict(self) -> dict[str, Any]:
        """Host wire shape: text content blocks plus details."""
        return {
            "content": [{"type": "text", "text": self.content}],
            "details": dict(self.details),
        }


class Tool(ABC):
    """Abstract base class for tools.

    Tools are operations the agent can invoke directly, independent of
    the automatic lifecycle hooks.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier for this tool."""
        ...

    @property
    @abstractmethod
    def label(self) -> str:
        """Short display name."""
        ...

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description for the LLM."""
        ...

    @property
    @abstractmethod
    def input_schema(self) -> dict[str, Any]:
        """JSON Schema for tool input parameters."""
        ...

    @abstractmethod
    async def execute(
        self,
        input_data: dict[str, Any],
        context: ToolContext,
    ) -> ToolResult:
        """Execute the tool with the given input.

        Args:
            input_data: Tool input matching the input_schema.
            context: Execution context.

        Returns:
            Tool execution result. Tools report failures through the result
            rather than raising.
        """
        ...

    def to_definition(self) -> dict[str, Any]:
        """Convert to LLM tool definition format."""
        return {
            "name": self.name,
            "label": self.label,
            "description": self.description,
            "input_schema": self.input_schema,
        }
