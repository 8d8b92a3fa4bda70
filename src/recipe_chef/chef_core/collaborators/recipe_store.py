"""Recipe document store interface and its in-memory implementation."""

import json
import uuid
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Sequence, Union

from ..logger import get_logger

logger = get_logger(__name__)

RecipeDocument = Dict[str, Any]


class RecipeStore(Protocol):
    """Document store holding recipes keyed by ``id``."""

    async def query_by_ingredients(
        self, ingredients: Sequence[str], limit: Optional[int] = None
    ) -> List[RecipeDocument]:
        """Recipes whose ``ingredientList`` contains any of ``ingredients``."""
        ...

    async def query_by_slugs(self, slugs: Sequence[str]) -> List[RecipeDocument]:
        """Recipes with the given slugs, in the order of ``slugs``."""
        ...

    async def batch_write(self, records: Sequence[Mapping[str, Any]]) -> None:
        """Merge ``records`` into the stored documents with the same ``id``."""
        ...

    async def list_recipes(self, without_vector: bool = False, limit: Optional[int] = None) -> List[RecipeDocument]:
        """All recipes, or only those without ``hasVector`` set."""
        ...


class MemoryRecipeStore:
    """A recipe store kept in process memory.

    Documents keep insertion order. Writes merge field by field, like a
    document store ``set(..., merge=True)``.
    """

    def __init__(self, recipes: Iterable[Mapping[str, Any]] = ()) -> None:
        self._recipes: Dict[str, RecipeDocument] = {}
        for recipe in recipes:
            self._merge(recipe)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "MemoryRecipeStore":
        """Seed a store from a JSON file holding an array of recipes."""
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"Recipe file {path} must contain a JSON array.")
        logger.info("Loaded %d recipes from %s.", len(data), path)
        return cls(data)

    def __len__(self) -> int:
        return len(self._recipes)

    def get(self, recipe_id: str) -> Optional[RecipeDocument]:
        recipe = self._recipes.get(recipe_id)
        return dict(recipe) if recipe is not None else None

    async def query_by_ingredients(
        self, ingredients: Sequence[str], limit: Optional[int] = None
    ) -> List[RecipeDocument]:
        wanted = set(ingredients)
        if not wanted:
            return []
        matches = [
            dict(recipe)
            for recipe in self._recipes.values()
            if wanted.intersection(recipe.get("ingredientList") or [])
        ]
        return matches[:limit] if limit is not None else matches

    async def query_by_slugs(self, slugs: Sequence[str]) -> List[RecipeDocument]:
        by_slug = {recipe.get("slug"): recipe for recipe in self._recipes.values()}
        return [dict(by_slug[slug]) for slug in slugs if slug in by_slug]

    async def batch_write(self, records: Sequence[Mapping[str, Any]]) -> None:
        for record in records:
            self._merge(record)
        logger.debug("Wrote %d recipe(s).", len(records))

    async def list_recipes(self, without_vector: bool = False, limit: Optional[int] = None) -> List[RecipeDocument]:
        recipes = [
            dict(recipe) for recipe in self._recipes.values() if not (without_vector and recipe.get("hasVector") is True)
        ]
        return recipes[:limit] if limit is not None else recipes

    def _merge(self, record: Mapping[str, Any]) -> None:
        recipe_id = record.get("id") or record.get("slug") or str(uuid.uuid4())
        stored = self._recipes.setdefault(str(recipe_id), {})
        stored.update(record)
        stored["id"] = str(recipe_id)
