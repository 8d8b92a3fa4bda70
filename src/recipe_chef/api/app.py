"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI

from recipe_chef.chef_core import (
    ChefSettings,
    DictionaryStore,
    MemoryDictionaryStore,
    get_logger,
    get_settings,
    setup_logging,
)
from recipe_chef.chef_impl import ChefFactory

from .routes import router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup/shutdown events."""
    factory: ChefFactory = app.state.factory
    logger.info("Starting recipe chef service with default model '%s'.", factory.settings.default_model)

    yield

    logger.info("Shutting down recipe chef service.")


def create_app(
    factory: Optional[ChefFactory] = None,
    settings: Optional[ChefSettings] = None,
    dictionary_store: Optional[DictionaryStore] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        factory: Chef factory; built from ``settings`` when omitted.
        settings: Service settings; the factory's (or the process-wide) settings when omitted.
        dictionary_store: Ingredient dictionary used by the tagging job.

    Returns:
        The application, with its collaborators on ``app.state``.
    """
    settings = settings or (factory.settings if factory is not None else get_settings())
    factory = factory or ChefFactory.from_settings(settings)

    app = FastAPI(
        title="Recipe Chef",
        description="A recipe chat agent backed by OpenAI, Gemini or Ollama",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.factory = factory
    app.state.dictionary_store = dictionary_store or MemoryDictionaryStore()

    app.include_router(router)
    return app


def get_app() -> FastAPI:
    """Application factory for ``uvicorn --factory``."""
    settings = get_settings()
    setup_logging(settings.log_level)
    return create_app(settings=settings)


def main() -> None:
    settings = get_settings()
    uvicorn.run("recipe_chef.api.app:get_app", factory=True, host=settings.host, port=settings.port)
