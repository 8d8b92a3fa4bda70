import uuid
from typing import Any, List, Mapping, Optional, Sequence

from openai import AsyncOpenAI

from recipe_chef.chef_core import Chef, SimilarRecipes, VectorStore, get_logger
from recipe_chef.chef_core.collaborators import RecipeDocument
from .adapter import OpenAIChefAdapter
from .registry import OpenAIToolRegistry

logger = get_logger(__name__)


def recipe_embedding_text(recipe: Mapping[str, Any]) -> str:
    """The text embedded for a recipe: its name, description and ingredient list."""
    parts = [str(recipe.get("name") or ""), str(recipe.get("description") or "")]
    parts.append(", ".join(str(item) for item in recipe.get("ingredientList") or []))
    return "\n".join(part for part in parts if part)


class GPTChef(Chef):
    """
    Chef backed by OpenAI chat completions.

    This is the only chef with vector support: it embeds recipes with the
    OpenAI embeddings API, stores the vectors in a ``VectorStore`` and uses
    them for recipe search and duplicate detection.
    """

    provider = "gpt"

    def __init__(
        self,
        name: str,
        model: str,
        history: Optional[Sequence[Any]] = None,
        *,
        client: AsyncOpenAI,
        vector_store: Optional[VectorStore] = None,
        embedding_model: str = "text-embedding-3-small",
        vector_search_limit: int = 10,
        duplicate_threshold: float = 0.95,
        related_threshold: float = 0.85,
        temperature: float = 0.7,
        max_tokens: int = 1024,
        **kwargs: Any,
    ):
        """
        Initializes the GPT chef.

        Args:
            name: The name the chef introduces itself with.
            model: The model id without the provider tag, e.g. ``4o-mini``.
            history: Prior conversation messages.
            client: The initialized AsyncOpenAI client.
            vector_store: Optional store of recipe vectors.
            embedding_model: OpenAI embedding model name.
            vector_search_limit: Number of neighbours fetched per vector search.
            duplicate_threshold: Minimum score for a recipe to count as a duplicate.
            related_threshold: Minimum score for a recipe to count as related.
            temperature: Sampling temperature.
            max_tokens: Maximum tokens per completion.
            **kwargs: Passed on to ``Chef``.
        """
        self.client = client
        self.vector_store = vector_store
        self.embedding_model = embedding_model
        self.vector_search_limit = vector_search_limit
        self.duplicate_threshold = duplicate_threshold
        self.related_threshold = related_threshold
        self.temperature = temperature
        self.max_tokens = max_tokens
        super().__init__(name, model, history, **kwargs)

    @property
    def supports_vectors(self) -> bool:
        return self.vector_store is not None

    @property
    def vendor_model(self) -> str:
        """The model name sent to OpenAI; the provider tag doubles as its prefix."""
        return self.model if self.model.startswith("gpt-") else f"gpt-{self.model}"

    def _create_registry(self) -> OpenAIToolRegistry:
        return OpenAIToolRegistry()

    def _create_adapter(self) -> OpenAIChefAdapter:
        return OpenAIChefAdapter(
            client=self.client,
            model=self.vendor_model,
            registry=self.registry,  # type: ignore[arg-type]
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )

    async def embed(self, texts: Sequence[str]) -> List[List[float]]:
        """Embed ``texts`` with the configured embedding model, preserving order."""
        response = await self.client.embeddings.create(model=self.embedding_model, input=list(texts))
        return [list(item.embedding) for item in response.data]

    async def store_embeddings(self, recipes: Sequence[RecipeDocument]) -> List[RecipeDocument]:
        """
        Embeds recipes and upserts their vectors.

        Recipes without a ``uuid`` get one; it is the vector's id.

        Args:
            recipes: Recipe documents to embed.

        Returns:
            The recipes, each with its ``uuid`` set.
        """
        if self.vector_store is None:
            logger.warning("No vector store configured; embeddings are not stored.")
            return list(recipes)

        prepared = [dict(recipe, uuid=recipe.get("uuid") or str(uuid.uuid4())) for recipe in recipes]
        if not prepared:
            return []

        vectors = await self.embed([recipe_embedding_text(recipe) for recipe in prepared])
        for recipe, vector in zip(prepared, vectors):
            await self.vector_store.upsert(
                recipe["uuid"],
                vector,
                {"id": recipe.get("id"), "slug": recipe.get("slug"), "name": recipe.get("name")},
            )
        logger.info("Stored embeddings for %d recipe(s).", len(prepared))
        return prepared

    async def search_for_matching_recipes(self, ingredients: Sequence[str]) -> List[RecipeDocument]:
        """
        Vector search over recipes, falling back to the exact ingredient lookup.

        The fallback is used when no vector store is configured or the vector
        search finds no stored recipe.
        """
        if not ingredients:
            return []

        if self.vector_store is not None:
            [vector] = await self.embed([", ".join(ingredients)])
            hits = await self.vector_store.search_by_vector(vector, self.vector_search_limit)
            slugs = [metadata["slug"] for metadata, _ in hits if metadata.get("slug")]
            if slugs:
                recipes = await self.recipe_store.query_by_slugs(slugs)
                if recipes:
                    return recipes[: self.max_recipes]
            logger.info("Vector search found no recipes for %s; using the exact lookup.", list(ingredients))

        return await super().search_for_matching_recipes(ingredients)

    async def find_similar_recipes(self, recipe: RecipeDocument) -> SimilarRecipes:
        """
        Splits the stored recipes closest to ``recipe`` into duplicates and related ones.

        Args:
            recipe: The recipe to compare.

        Returns:
            Ids scoring at least ``duplicate_threshold`` as duplicates, ids scoring
            at least ``related_threshold`` as distinct. The recipe itself is skipped.
        """
        if self.vector_store is None:
            return SimilarRecipes()

        [vector] = await self.embed([recipe_embedding_text(recipe)])
        hits = await self.vector_store.search_by_vector(vector, self.vector_search_limit)

        similar = SimilarRecipes()
        for metadata, score in hits:
            recipe_id = metadata.get("id")
            if not recipe_id or recipe_id == recipe.get("id"):
                continue
            if score >= self.duplicate_threshold:
                similar.duplicates.append(recipe_id)
            elif score >= self.related_threshold:
                similar.distinct.append(recipe_id)
        return similar
