"""Select and build a chef from a composite model id."""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Type, Union

import ollama
from google import genai
from openai import AsyncOpenAI

from recipe_chef.chef_core import (
    AuthVerifier,
    BaseMessage,
    Chef,
    ChefSettings,
    ConfigurationError,
    MemoryRecipeStore,
    MemoryVectorStore,
    QdrantVectorStore,
    RecipeStore,
    StaticTokenVerifier,
    UnknownAgentError,
    VectorStore,
    get_logger,
    get_settings,
)
from .gemini import GeminiChef
from .ollama import OllamaChef
from .openai_api import GPTChef

logger = get_logger(__name__)

CHEFS: Dict[str, Type[Chef]] = {
    GPTChef.provider: GPTChef,
    OllamaChef.provider: OllamaChef,
    GeminiChef.provider: GeminiChef,
}


@dataclass(frozen=True)
class ModelSpec:
    """An explicit ``(provider, model)`` pair.

    ``parse`` keeps the ``"<provider>-<model>"`` string convention: the
    provider is everything up to the first hyphen, so ``"gpt-4o-mini"`` is
    ``ModelSpec("gpt", "4o-mini")``.
    """

    provider: str
    model: str

    @classmethod
    def parse(cls, specified_model: str) -> "ModelSpec":
        """
        Raises:
            UnknownAgentError: If the id has no provider tag or no model part.
        """
        provider, separator, model = specified_model.strip().partition("-")
        if not separator or not provider or not model:
            raise UnknownAgentError(f"Unknown agent for model '{specified_model}'.")
        return cls(provider=provider, model=model)

    def __str__(self) -> str:
        return f"{self.provider}-{self.model}"


class ChefFactory:
    """
    Builds a fresh chef per request around vendor clients created once.

    The clients and collaborators are injected, so one factory can serve
    every request of a process while each request gets its own chef.
    """

    def __init__(
        self,
        *,
        settings: ChefSettings,
        recipe_store: RecipeStore,
        openai_client: Optional[AsyncOpenAI] = None,
        gemini_client: Optional[Any] = None,
        ollama_client: Optional[ollama.AsyncClient] = None,
        vector_store: Optional[VectorStore] = None,
        auth_verifier: Optional[AuthVerifier] = None,
    ):
        self.settings = settings
        self.recipe_store = recipe_store
        self.openai_client = openai_client
        self.gemini_client = gemini_client
        self.ollama_client = ollama_client
        self.vector_store = vector_store
        self.auth_verifier = auth_verifier

    @classmethod
    def from_settings(
        cls,
        settings: Optional[ChefSettings] = None,
        *,
        recipe_store: Optional[RecipeStore] = None,
        auth_verifier: Optional[AuthVerifier] = None,
    ) -> "ChefFactory":
        """
        Creates the vendor clients and collaborators described by ``settings``.

        Vendor clients whose API key is not configured are left out; asking
        for a chef of that provider then raises ``ConfigurationError``.

        Args:
            settings: Service settings; the process-wide settings when omitted.
            recipe_store: Recipe store; an in-memory store (seeded from
                ``settings.recipes_file`` when set) when omitted.
            auth_verifier: Token verifier; a static verifier over
                ``settings.auth_tokens`` when omitted.

        Returns:
            The factory.
        """
        settings = settings or get_settings()

        if recipe_store is None:
            recipe_store = (
                MemoryRecipeStore.from_file(settings.recipes_file) if settings.recipes_file else MemoryRecipeStore()
            )

        vector_store: VectorStore
        if settings.qdrant_url:
            vector_store = QdrantVectorStore.from_url(
                settings.qdrant_url,
                collection_name=settings.qdrant_collection,
                vector_size=settings.embedding_size,
                api_key=settings.qdrant_api_key,
            )
        else:
            vector_store = MemoryVectorStore()

        return cls(
            settings=settings,
            recipe_store=recipe_store,
            openai_client=AsyncOpenAI(api_key=settings.openai_api_key) if settings.openai_api_key else None,
            gemini_client=genai.Client(api_key=settings.gemini_api_key).aio if settings.gemini_api_key else None,
            ollama_client=ollama.AsyncClient(host=settings.ollama_host),
            vector_store=vector_store,
            auth_verifier=auth_verifier or StaticTokenVerifier(settings.auth_tokens),
        )

    def get_chef(
        self,
        name: Optional[str] = None,
        specified_model: Union[str, ModelSpec, None] = None,
        history: Optional[Iterable[BaseMessage]] = None,
    ) -> Chef:
        """
        Instantiates the chef for a model id.

        Args:
            name: Chef name; ``settings.chef_name`` when omitted.
            specified_model: ``"<provider>-<model>"`` or a ``ModelSpec``;
                ``settings.default_model`` when omitted.
            history: Prior conversation messages.

        Returns:
            A new chef. Chefs are never shared between requests.

        Raises:
            UnknownAgentError: If the provider is not known.
            ConfigurationError: If the provider's client is not configured.
        """
        if isinstance(specified_model, ModelSpec):
            spec = specified_model
        else:
            spec = ModelSpec.parse(specified_model or self.settings.default_model)

        chef_class = CHEFS.get(spec.provider)
        if chef_class is None:
            raise UnknownAgentError(f"Unknown agent: {spec.provider}")

        logger.info("Creating %s for model '%s'.", chef_class.__name__, spec)
        common: Dict[str, Any] = {
            "recipe_store": self.recipe_store,
            "auth_verifier": self.auth_verifier,
            "max_tool_rounds": self.settings.max_tool_rounds,
            "max_recipes": self.settings.max_recipes,
            "temperature": self.settings.temperature,
            "max_tokens": self.settings.max_tokens,
        }
        chef_name = name or self.settings.chef_name

        if chef_class is GPTChef:
            return GPTChef(
                chef_name,
                spec.model,
                history,
                client=self._require(self.openai_client, spec),
                vector_store=self.vector_store,
                embedding_model=self.settings.embedding_model,
                vector_search_limit=self.settings.vector_search_limit,
                duplicate_threshold=self.settings.duplicate_threshold,
                related_threshold=self.settings.related_threshold,
                **common,
            )
        if chef_class is GeminiChef:
            return GeminiChef(chef_name, spec.model, history, client=self._require(self.gemini_client, spec), **common)
        return OllamaChef(chef_name, spec.model, history, client=self._require(self.ollama_client, spec), **common)

    @staticmethod
    def _require(client: Any, spec: ModelSpec) -> Any:
        if client is None:
            raise ConfigurationError(f"No client configured for provider '{spec.provider}'.")
        return client
