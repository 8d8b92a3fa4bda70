"""Data models for tool execution."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class ToolCallRequest:
    """Represents a normalized tool call request from an LLM response."""

    name: str
    arguments: Dict[str, Any] = field(default_factory=dict)
    call_id: Optional[str] = None


@dataclass(frozen=True)
class ToolCallResult:
    """Represents the outcome of executing a tool call."""

    name: str
    response: Dict[str, Any]
    call_id: Optional[str] = None

    @property
    def failed(self) -> bool:
        return "error" in self.response


@dataclass(frozen=True)
class ModelTurn:
    """One normalized model response: the assistant text plus any requested tool calls.

    Attributes:
        text: Assistant text content, empty when the model only requested tools.
        tool_calls: Tool calls in the order the model emitted them.
        raw: The vendor payload, kept for debugging.
    """

    text: str = ""
    tool_calls: List[ToolCallRequest] = field(default_factory=list)
    raw: Any = None
