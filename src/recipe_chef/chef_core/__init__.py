"""Public exports for the provider-agnostic chef abstractions."""

from .exceptions import (
    ChefError,
    UnknownAgentError,
    ConfigurationError,
    ModelCallError,
    InvalidTokenError,
    LLMToolError,
    ToolRegistrationError,
    ToolNotFoundError,
    ToolExecutionError,
    ToolValidationError,
)
from .logger import get_logger, setup_logging
from .tools import (
    ToolDefinition,
    ToolRegistry,
    ToolCallRequest,
    ToolCallResult,
    ModelTurn,
    ProviderAdapter,
    SchemaValidator,
)
from .messages import (
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
from .tools.tool_loop import ToolExecutionLoop
from .prompts import SystemPromptTemplate
from .collaborators import (
    Recipe,
    IngredientName,
    SimilarRecipes,
    UserIdentity,
    RecipeStore,
    MemoryRecipeStore,
    VectorStore,
    QdrantVectorStore,
    MemoryVectorStore,
    AuthVerifier,
    StaticTokenVerifier,
    DictionaryStore,
    MemoryDictionaryStore,
)
from .config import ChefSettings, get_settings
from .base import Chef

__all__ = [
    "ChefError",
    "UnknownAgentError",
    "ConfigurationError",
    "ModelCallError",
    "InvalidTokenError",
    "LLMToolError",
    "ToolRegistrationError",
    "ToolNotFoundError",
    "ToolExecutionError",
    "ToolValidationError",
    "get_logger",
    "setup_logging",
    "ToolDefinition",
    "ToolRegistry",
    "ToolCallRequest",
    "ToolCallResult",
    "ModelTurn",
    "ProviderAdapter",
    "SchemaValidator",
    "MessageRole",
    "BaseMessage",
    "UserMessage",
    "AssistantMessage",
    "SystemMessage",
    "ToolMessage",
    "message_from_dict",
    "message_to_dict",
    "trailing_window",
    "ToolExecutionLoop",
    "SystemPromptTemplate",
    "Recipe",
    "IngredientName",
    "SimilarRecipes",
    "UserIdentity",
    "RecipeStore",
    "MemoryRecipeStore",
    "VectorStore",
    "QdrantVectorStore",
    "MemoryVectorStore",
    "AuthVerifier",
    "StaticTokenVerifier",
    "DictionaryStore",
    "MemoryDictionaryStore",
    "ChefSettings",
    "get_settings",
    "Chef",
]
