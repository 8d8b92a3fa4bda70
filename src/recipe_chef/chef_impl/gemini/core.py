from typing import Any, Optional, Sequence

from google.genai.client import AsyncClient

from recipe_chef.chef_core import Chef, get_logger
from .adapter import GeminiChefAdapter
from .registry import GeminiToolRegistry

logger = get_logger(__name__)


class GeminiChef(Chef):
    """
    Chef backed by Google's Gemini models.

    Recipe search uses the exact ingredient lookup of the base chef.
    """

    provider = "google"

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
        """
        Initializes the Gemini chef.

        Args:
            name: The name the chef introduces itself with.
            model: The Gemini model name, e.g. ``gemini-1.5-flash``.
            history: Prior conversation messages.
            client: The async Google GenAI client.
            temperature: Sampling temperature.
            max_tokens: Maximum tokens per completion.
            **kwargs: Passed on to ``Chef``.
        """
        self.client = client
        self.temperature = temperature
        self.max_tokens = max_tokens
        super().__init__(name, model, history, **kwargs)
        logger.debug("Initialized GeminiChef with model='%s'.", model)

    def _create_registry(self) -> GeminiToolRegistry:
        return GeminiToolRegistry()

    def _create_adapter(self) -> GeminiChefAdapter:
        return GeminiChefAdapter(
            client=self.client,
            model=self.model,
            registry=self.registry,  # type: ignore[arg-type]
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
