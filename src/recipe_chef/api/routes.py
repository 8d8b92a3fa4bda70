"""HTTP endpoints of the chef service."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Sequence

from fastapi import APIRouter
from pydantic import ValidationError
from fastapi.responses import JSONResponse

from recipe_chef.chef_core import UserMessage, get_logger, message_from_dict, message_to_dict, trailing_window
from recipe_chef.chef_core.base import parse_recipe_list
from recipe_chef.chef_core.collaborators import Recipe, RecipeDocument
from recipe_chef.chef_core.prompts import find_recipe_prompt
from recipe_chef.chef_impl import supported_models
from recipe_chef.jobs import run_computation, tag

from .deps import BearerTokenDep, DictionaryStoreDep, FactoryDep, SettingsDep
from .models import (
    ChatRequest,
    ChatResponse,
    FindRecipeRequest,
    FindRecipeResponse,
    JobResponse,
    ParseRecipeRequest,
    PublishRecipeRequest,
)

logger = get_logger(__name__)

router = APIRouter(tags=["chef"])


def error_response(exc: Exception, status_code: int = 500) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": str(exc)})


def filter_by_tags(recipes: Sequence[RecipeDocument], tags: Sequence[Any]) -> List[RecipeDocument]:
    """Recipes carrying every one of ``tags``."""
    wanted = set(tags)
    return [recipe for recipe in recipes if wanted.issubset(recipe.get("tags") or ())]


def merge_related(recipe: RecipeDocument, distinct: Sequence[str]) -> List[str]:
    """The recipe's ``related`` ids followed by the new ``distinct`` ones, without repeats."""
    existing = recipe.get("related")
    if not isinstance(existing, list):
        existing = []
    return list(dict.fromkeys([*existing, *distinct]))


@router.post("/chat", response_model=ChatResponse)
async def chat(chat_request: ChatRequest, factory: FactoryDep, settings: SettingsDep, token: BearerTokenDep):
    """
    Runs one chat turn.

    The request context is trimmed to the configured trailing window before
    it reaches the chef. The response carries the final text, the recipes the
    chef chose to display and the messages appended during this turn.
    """
    try:
        history = trailing_window(
            [message_from_dict(item) for item in chat_request.context], settings.context_window
        )
        chef = factory.get_chef(specified_model=chat_request.model, history=history)
        text = await chef.get_response(chat_request.prompt, authorization_token=token)
    except Exception as exc:
        logger.error("Chat request failed: %s", exc, exc_info=True)
        return error_response(exc)

    return ChatResponse(
        messages=text,
        recommendations=chef.recipe_recommendations,
        ingredients=chef.ingredients,
        history=[message_to_dict(message) for message in chef.latest_history],
        has_recipe_recommendations=chef.has_recipe_recommendations,
    )


@router.post("/findRecipe", response_model=FindRecipeResponse)
async def find_recipe(find_request: FindRecipeRequest, factory: FactoryDep, settings: SettingsDep):
    """
    Looks recipes up by ingredients.

    Stored recipes come first, filtered by ``tags`` when given. When nothing
    is stored, a chef is asked to invent recipes as a JSON array; output that
    does not parse yields ``status: "error"`` and no recipes.
    """
    ingredients = [item.strip() for item in find_request.ingredients if item and item.strip()]
    try:
        recipes = await factory.recipe_store.query_by_ingredients(ingredients, limit=settings.max_recipes)
        if find_request.tags:
            recipes = filter_by_tags(recipes, find_request.tags)
        if recipes:
            return FindRecipeResponse(recipes=recipes)

        chef = factory.get_chef(
            specified_model=find_request.model,
            history=[UserMessage(content=find_recipe_prompt(ingredients))],
        )
        generated = parse_recipe_list(await chef.get_response())
    except Exception as exc:
        logger.error("Recipe search failed: %s", exc, exc_info=True)
        return error_response(exc)

    if generated is None:
        return FindRecipeResponse(recipes=[], status="error")
    return FindRecipeResponse(recipes=generated)


@router.get("/models")
async def models(settings: SettingsDep) -> Dict[str, Dict[str, Any]]:
    """The selectable providers and models, with the default model flagged."""
    return supported_models(settings.default_model)


@router.post("/parseRecipe")
async def parse_recipe(parse_request: ParseRecipeRequest, factory: FactoryDep):
    """
    Turns free recipe text into a structured recipe.

    The answer holds the fields the model extracted: ``name``,
    ``description``, ``ingredients`` and ``instructions``, plus
    ``preparationTime``, ``servings`` and ``calories`` when known.
    """
    text = parse_request.candidate_recipe.strip()
    if not text:
        return JSONResponse(status_code=400, content={"error": "Missing candidateRecipe in request body"})

    try:
        chef = factory.get_chef(specified_model=parse_request.model)
        recipe = await chef.parse_recipe(text)
    except Exception as exc:
        logger.error("Recipe parsing failed: %s", exc, exc_info=True)
        return error_response(exc)

    return recipe.to_document(exclude_unset=True)


@router.post("/publishRecipe")
async def publish_recipe(publish_request: PublishRecipeRequest, factory: FactoryDep):
    """
    Publishes a recipe unless a near-duplicate is already stored.

    The recipe must validate as a ``Recipe`` and carry an ``id``. A recipe
    with duplicates is stored unpublished and queued for review. Either way
    the ids of related (similar but distinct) recipes are merged into its
    ``related`` list.
    """
    if not publish_request.recipe:
        return JSONResponse(status_code=400, content={"error": "Missing recipe in request body"})
    try:
        recipe = Recipe.model_validate(publish_request.recipe).to_document()
    except ValidationError as exc:
        return error_response(exc, status_code=400)
    if not recipe.get("id"):
        return JSONResponse(status_code=400, content={"error": "Recipe id is required"})

    try:
        chef = factory.get_chef()
        similar = await chef.find_similar_recipes(recipe)

        now = datetime.now(timezone.utc).isoformat()
        published = not similar.duplicates
        await factory.recipe_store.batch_write(
            [
                {
                    **recipe,
                    "published": published,
                    "publishedAt": now,
                    "updatedAt": now,
                    "related": merge_related(recipe, similar.distinct),
                }
            ]
        )
    except Exception as exc:
        logger.error("Publishing recipe %s failed: %s", recipe.get("id"), exc, exc_info=True)
        return error_response(exc)

    if not published:
        logger.info("Recipe %s has duplicates %s; queued instead of published.", recipe.get("id"), similar.duplicates)
        return {
            "message": "Similar recipes found, not publishing.",
            "similarRecipes": similar.model_dump(),
            "status": False,
            "queued": True,
            "id": recipe.get("id"),
        }
    return {"status": True, "message": "Recipe published successfully", "id": recipe.get("id")}


@router.post("/computeVector", response_model=JobResponse)
async def compute_vector(factory: FactoryDep):
    """Embeds the next batch of recipes that have no vector yet."""
    try:
        processed = await run_computation(factory)
    except Exception as exc:
        logger.error("Vector computation failed: %s", exc, exc_info=True)
        return error_response(exc)
    return JobResponse(processed=processed)


@router.post("/tagRecipes", response_model=JobResponse)
async def tag_recipes(factory: FactoryDep, dictionary_store: DictionaryStoreDep):
    """Tags every recipe with the dictionary ids of its ingredients."""
    try:
        processed = await tag(factory, dictionary_store)
    except Exception as exc:
        logger.error("Recipe tagging failed: %s", exc, exc_info=True)
        return error_response(exc)
    return JobResponse(processed=processed)
