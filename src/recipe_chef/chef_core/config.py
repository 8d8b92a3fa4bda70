"""Service configuration using pydantic-settings."""

from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ChefSettings(BaseSettings):
    """Settings read from the environment and an optional ``.env`` file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Chef selection
    default_model: str = Field(default="gpt-4o-mini", description="Composite '<provider>-<model>' id used when none is given")
    chef_name: str = Field(default="Andel", description="Name the chef introduces itself with")

    # Vendor clients
    openai_api_key: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("openai_api_key", "openai_key"), description="OpenAI API key"
    )
    gemini_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("gemini_api_key", "google_api_key"),
        description="Google Gemini API key",
    )
    ollama_host: Optional[str] = Field(default=None, description="Ollama server URL, e.g. http://localhost:11434")

    # Vector store
    qdrant_url: Optional[str] = Field(default=None, description="Qdrant server URL; in-memory vectors when unset")
    qdrant_api_key: Optional[str] = Field(default=None, description="Qdrant API key")
    qdrant_collection: str = Field(default="recipes", description="Qdrant collection holding recipe vectors")
    embedding_model: str = Field(default="text-embedding-3-small", description="OpenAI embedding model")
    embedding_size: int = Field(default=1536, description="Dimension of the embedding vectors")

    # Chat turn behaviour
    max_tool_rounds: int = Field(default=5, ge=1, description="Maximum model calls per chat turn")
    context_window: int = Field(default=10, ge=0, description="Trailing history messages sent with each turn")
    temperature: float = Field(default=0.7, description="Sampling temperature")
    max_tokens: int = Field(default=1024, description="Maximum tokens per completion")

    # Recipe search
    max_recipes: int = Field(default=10, ge=1, description="Maximum recipes returned by find_recipes")
    vector_search_limit: int = Field(default=10, ge=1, description="Neighbours fetched by a vector search")
    duplicate_threshold: float = Field(default=0.95, description="Similarity score marking a duplicate recipe")
    related_threshold: float = Field(default=0.85, description="Similarity score marking a related recipe")

    # Collaborators
    recipes_file: Optional[Path] = Field(default=None, description="JSON file seeding the in-memory recipe store")
    auth_tokens: Dict[str, str] = Field(default_factory=dict, description="Bearer token to display name map")

    # Jobs
    vector_batch_size: int = Field(default=20, ge=1, description="Recipes embedded per computeVector run")

    # HTTP server
    host: str = Field(default="127.0.0.1", description="Interface the HTTP server binds to")
    port: int = Field(default=8000, description="Port the HTTP server listens on")

    log_level: str = Field(default="INFO", description="Log level of the service logger")


@lru_cache
def get_settings() -> ChefSettings:
    """Return the process-wide settings, read once."""
    return ChefSettings()
