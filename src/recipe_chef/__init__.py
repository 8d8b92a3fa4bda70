"""Recipe chat agent: a tool-calling chef over OpenAI, Gemini and Ollama."""

from .chef_core import Chef, ChefSettings, get_logger, get_settings, setup_logging
from .chef_impl import ChefFactory, GeminiChef, GPTChef, ModelSpec, OllamaChef

__all__ = [
    "Chef",
    "ChefSettings",
    "get_logger",
    "get_settings",
    "setup_logging",
    "ChefFactory",
    "GeminiChef",
    "GPTChef",
    "ModelSpec",
    "OllamaChef",
]
