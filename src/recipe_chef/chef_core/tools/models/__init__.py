"""Tool-related data models."""

from .models import ToolDefinition
from .tool_call import ToolCallRequest, ToolCallResult, ModelTurn

__all__ = ["ToolDefinition", "ToolCallRequest", "ToolCallResult", "ModelTurn"]
