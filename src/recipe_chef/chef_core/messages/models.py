"""Provider-agnostic message models for chat history."""

from abc import ABC
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence

from pydantic import BaseModel

from ..tools.models import ToolCallRequest


class MessageRole(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


class BaseMessage(ABC, BaseModel):
    """Base model for messages exchanged with a chef's model.

    Attributes:
        role: Role associated with the message.
        content: Text payload of the message. May be empty for pure tool-call turns.
    """

    role: MessageRole
    content: str = ""


class SystemMessage(BaseMessage):
    """Message authored by the system to steer behavior. Always first in a history."""

    role: MessageRole = MessageRole.SYSTEM


class UserMessage(BaseMessage):
    """Message authored by an end user."""

    role: MessageRole = MessageRole.USER


class AssistantMessage(BaseMessage):
    """Message authored by the assistant, optionally containing tool calls."""

    role: MessageRole = MessageRole.ASSISTANT
    tool_calls: Optional[List[ToolCallRequest]] = None


class ToolMessage(BaseMessage):
    """Message emitted by a tool invocation, correlated to the requesting assistant turn."""

    role: MessageRole = MessageRole.TOOL
    tool_call_id: str
    name: str


def message_from_dict(data: Mapping[str, Any]) -> BaseMessage:
    """Build a canonical message from a wire dictionary.

    Accepts ``role`` or the legacy ``sender`` key. Assistant tool calls may be
    given in canonical form (``{id, name, arguments}``) or OpenAI form
    (``{id, function: {name, arguments}}``).

    Raises:
        ValueError: If the role is missing or unknown.
    """
    from ..tools.normalizer import normalize_arguments

    role = data.get("role") or data.get("sender")
    content = data.get("content") or ""

    if role == MessageRole.SYSTEM:
        return SystemMessage(content=content)
    if role == MessageRole.USER:
        return UserMessage(content=content)
    if role == MessageRole.ASSISTANT:
        raw_calls = data.get("tool_calls") or []
        tool_calls = []
        for raw in raw_calls:
            function = raw.get("function") or {}
            tool_calls.append(
                ToolCallRequest(
                    name=raw.get("name") or function.get("name", ""),
                    arguments=normalize_arguments(raw.get("arguments", function.get("arguments"))),
                    call_id=raw.get("id") or raw.get("call_id"),
                )
            )
        return AssistantMessage(content=content, tool_calls=tool_calls or None)
    if role == MessageRole.TOOL:
        return ToolMessage(
            content=content,
            tool_call_id=data.get("tool_call_id") or data.get("name") or "",
            name=data.get("name") or "",
        )

    raise ValueError(f"Unknown message role: {role!r}")


def message_to_dict(message: BaseMessage) -> Dict[str, Any]:
    """Serialize a canonical message for the HTTP layer."""
    return message.model_dump(mode="json", exclude_none=True)


def trailing_window(history: Sequence[BaseMessage], size: int) -> List[BaseMessage]:
    """Return the most recent ``size`` non-system messages of ``history``.

    Tool messages at the start of the window are dropped because the assistant
    message that requested them fell outside of it.
    """
    messages = [m for m in history if not isinstance(m, SystemMessage)]
    window = messages[-size:] if size > 0 else []
    while window and isinstance(window[0], ToolMessage):
        window.pop(0)
    return window
