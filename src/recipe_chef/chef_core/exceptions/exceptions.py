"""
Exception hierarchy for the recipe chef service.

Tool errors never escape a chat turn (the tool loop turns them into tool
messages). Configuration and factory errors propagate to the HTTP layer.
"""


class ChefError(Exception):
    """Base exception for all chef errors."""

    pass


class UnknownAgentError(ChefError):
    """Raised when a model identifier names a provider the factory does not know."""

    pass


class ConfigurationError(ChefError):
    """Raised when a chef is requested but its vendor client is not configured."""

    pass


class ModelCallError(ChefError):
    """Raised by an adapter when the vendor call fails or returns an unusable payload."""

    pass


class InvalidTokenError(ChefError):
    """Raised by an auth verifier when a bearer token is invalid or expired."""

    pass


class LLMToolError(ChefError):
    """Base exception for all tool-related errors."""

    pass


class ToolRegistrationError(LLMToolError):
    """Raised when there is an error registering a tool."""

    pass


class ToolNotFoundError(LLMToolError):
    """Raised when a requested tool is not found in the registry."""

    pass


class ToolExecutionError(LLMToolError):
    """Raised when a tool fails during execution."""

    pass


class ToolValidationError(LLMToolError):
    """Raised when tool parameters or definition are invalid."""

    pass
