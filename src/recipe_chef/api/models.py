"""Pydantic models for the HTTP API."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    """Request model for the chat endpoint."""

    context: List[Dict[str, Any]] = Field(
        default_factory=list,
        description="Previous conversation messages, each with a `role` (or legacy `sender`) and `content`",
    )
    model: Optional[str] = Field(default=None, description="Composite model id, e.g. `gpt-4o-mini`")
    prompt: Optional[str] = Field(default=None, description="New user utterance appended to the context")


class ChatResponse(BaseModel):
    """Response model for a successful chat turn."""

    model_config = ConfigDict(populate_by_name=True)

    messages: str = Field(description="The final assistant text")
    recommendations: List[Dict[str, Any]] = Field(default_factory=list)
    ingredients: List[str] = Field(default_factory=list)
    history: List[Dict[str, Any]] = Field(
        default_factory=list, description="Messages appended during this turn"
    )
    has_recipe_recommendations: bool = Field(default=False, alias="hasRecipeRecommendations")
    status: str = "success"


class FindRecipeRequest(BaseModel):
    """Request model for the recipe search endpoint."""

    ingredients: List[str] = Field(default_factory=list, description="Ingredients to search by")
    tags: Optional[List[Any]] = Field(default=None, description="Ingredient tag ids every result must carry")
    model: Optional[str] = Field(default=None, description="Composite model id used when the store has no match")


class FindRecipeResponse(BaseModel):
    recipes: List[Dict[str, Any]] = Field(default_factory=list)
    status: str = "success"


class PublishRecipeRequest(BaseModel):
    """Request model for publishing a recipe; a missing recipe is answered with 400."""

    recipe: Optional[Dict[str, Any]] = None


class ParseRecipeRequest(BaseModel):
    """Request model for turning free recipe text into a structured recipe."""

    model_config = ConfigDict(populate_by_name=True)

    candidate_recipe: str = Field(default="", alias="candidateRecipe", description="Free recipe text")
    model: Optional[str] = Field(default=None, description="Composite model id, e.g. `gpt-4o-mini`")


class JobResponse(BaseModel):
    """Result of a job triggered over HTTP."""

    status: str = "success"
    processed: int = Field(description="Number of recipes the job updated")
