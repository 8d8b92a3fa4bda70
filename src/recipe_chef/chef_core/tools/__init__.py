"""Tool definitions, schema generation and vendor-response normalization."""

from .models import ToolDefinition, ToolCallRequest, ToolCallResult, ModelTurn
from .registry import ToolRegistry
from .schema import SchemaValidator
from .adapter import ProviderAdapter
from .normalizer import normalize_arguments, normalize_tool_calls

__all__ = [
    "ToolDefinition",
    "ToolCallRequest",
    "ToolCallResult",
    "ModelTurn",
    "ToolRegistry",
    "SchemaValidator",
    "ProviderAdapter",
    "normalize_arguments",
    "normalize_tool_calls",
]
