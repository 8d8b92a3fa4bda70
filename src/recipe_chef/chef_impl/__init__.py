"""Concrete chefs for OpenAI, Gemini and Ollama, and the factory selecting between them."""

from .openai_api import GPTChef, OpenAIToolRegistry
from .gemini import GeminiChef, GeminiToolRegistry
from .ollama import OllamaChef
from .factory import ChefFactory, ModelSpec, CHEFS
from .models import MODELS, supported_models

__all__ = [
    "GPTChef",
    "OpenAIToolRegistry",
    "GeminiChef",
    "GeminiToolRegistry",
    "OllamaChef",
    "ChefFactory",
    "ModelSpec",
    "CHEFS",
    "MODELS",
    "supported_models",
]
