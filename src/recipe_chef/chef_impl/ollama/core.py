from typing import Any, Optional, Sequence

from ollama import AsyncClient

from recipe_chef.chef_core import Chef
from ..openai_api.registry import OpenAIToolRegistry
from .adapter import OllamaChefAdapter


class OllamaChef(Chef):
    """Chef backed by a model served by Ollama, e.g. ``llama3.1``."""

    provider = "ollama"

    def __init__(
        self,
        name: str,
        model: str,
        history: Optional[Sequence[Any]] = None,
        *,
        client: AsyncClient,
        temperature: float = 0.7,
        max_tokens: int = 1024,
        **kwargs: Any,
    ):
        self.client = client
        self.temperature = temperature
        self.max_tokens = max_tokens
        super().__init__(name, model, history, **kwargs)

    def _create_registry(self) -> OpenAIToolRegistry:
        return OpenAIToolRegistry()

    def _create_adapter(self) -> OllamaChefAdapter:
        return OllamaChefAdapter(
            client=self.client,
            model=self.model,
            registry=self.registry,  # type: ignore[arg-type]
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
