"""Export the chef exception hierarchy used across the agent, tools and HTTP layer."""

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
]
