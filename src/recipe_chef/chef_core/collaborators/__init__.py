"""Interfaces of the services a chef depends on, with bundled implementations."""

from .models import Recipe, IngredientName, SimilarRecipes, UserIdentity
from .recipe_store import RecipeStore, MemoryRecipeStore, RecipeDocument
from .vector_store import VectorStore, QdrantVectorStore, MemoryVectorStore
from .auth import AuthVerifier, StaticTokenVerifier
from .dictionary import DictionaryStore, MemoryDictionaryStore

__all__ = [
    "Recipe",
    "IngredientName",
    "SimilarRecipes",
    "UserIdentity",
    "RecipeStore",
    "MemoryRecipeStore",
    "RecipeDocument",
    "VectorStore",
    "QdrantVectorStore",
    "MemoryVectorStore",
    "AuthVerifier",
    "StaticTokenVerifier",
    "DictionaryStore",
    "MemoryDictionaryStore",
]
