"""Registry of the models a client may select, keyed by composite model id."""

import copy
import re
from typing import Any, Dict

_PROVIDER_PREFIX = re.compile(r"^[^-]+-")

MODELS: Dict[str, Dict[str, Any]] = {
    "gpt": {
        "title": "GPT",
        "supported": True,
        "models": {
            "gpt-4o-mini": {"max_tokens": 1024, "temperature": 0.7, "title": "GPT-4o Mini", "provider": "openai"},
            "gpt-4o": {"max_tokens": 2048, "temperature": 0.7, "title": "GPT-4o", "provider": "openai"},
            "gpt-4-turbo": {"max_tokens": 128000, "temperature": 0.7, "title": "GPT-4 Turbo", "provider": "openai"},
            "gpt-4": {"max_tokens": 8192, "temperature": 0.7, "title": "GPT-4", "provider": "openai"},
            "gpt-3.5-turbo": {"max_tokens": 4096, "temperature": 0.7, "title": "GPT-3.5 Turbo", "provider": "openai"},
        },
    },
    "google": {
        "title": "Gemini",
        "supported": True,
        "models": {
            "google-gemini-1.5-pro": {
                "max_tokens": 32768,
                "temperature": 0.7,
                "title": "Gemini 1.5 Pro",
                "provider": "google",
            },
            "google-gemini-1.5-flash": {
                "max_tokens": 32768,
                "temperature": 0.7,
                "title": "Gemini 1.5 Flash",
                "provider": "google",
            },
            "google-gemini-2.0-flash": {
                "max_tokens": 8192,
                "temperature": 0.7,
                "title": "Gemini 2.0 Flash",
                "provider": "google",
            },
        },
    },
    "ollama": {
        "title": "Ollama",
        "supported": True,
        "models": {
            "ollama-llama3.1": {"max_tokens": 4096, "temperature": 0.7, "title": "Llama 3.1", "provider": "ollama"},
            "ollama-mistral": {"max_tokens": 4096, "temperature": 0.7, "title": "Mistral", "provider": "ollama"},
        },
    },
    "claude": {
        "title": "Claude",
        "supported": False,
        "models": {
            "claude-3-haiku-20240307": {
                "max_tokens": 200000,
                "temperature": 0.7,
                "title": "Claude 3 Haiku",
                "provider": "anthropic",
            },
        },
    },
}


def supported_models(default_model: str) -> Dict[str, Dict[str, Any]]:
    """
    The supported providers and their models, as served by ``GET /models``.

    Each model gets an ``id`` (its composite id without the provider tag) and
    the model matching ``default_model`` is flagged with ``default: True``.

    Args:
        default_model: The configured default composite model id.

    Returns:
        A deep copy of the supported part of ``MODELS``.
    """
    result: Dict[str, Dict[str, Any]] = {}
    for provider, entry in MODELS.items():
        if not entry.get("supported"):
            continue
        provider_entry = copy.deepcopy(entry)
        for model_key, model in provider_entry["models"].items():
            model["id"] = _PROVIDER_PREFIX.sub("", model_key, count=1)
            if model_key == default_model:
                model["default"] = True
        result[provider] = provider_entry
    return result
