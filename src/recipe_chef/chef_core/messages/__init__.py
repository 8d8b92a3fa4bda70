"""Expose provider-agnostic message model types shared by chef implementations."""

from .models import (
    MessageRole,
    BaseMessage,
    UserMessage,
    AssistantMessage,
    SystemMessage,
    ToolMessage,
    message_from_dict,
    message_to_dict,
    trailing_window,
)

__all__ = [
    "MessageRole",
    "BaseMessage",
    "UserMessage",
    "AssistantMessage",
    "SystemMessage",
    "ToolMessage",
    "message_from_dict",
    "message_to_dict",
    "trailing_window",
]
