"""Data shapes exchanged with the chef's external collaborators."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Recipe(BaseModel):
    """A recipe document as stored by the recipe store.

    Inside a chat turn recipes travel as plain dictionaries; this model
    validates recipes published over HTTP and recipes parsed from free text.
    Unknown fields are kept. ``id`` stays ``None`` until the recipe is stored.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: Optional[str] = None
    slug: str = ""
    name: str
    description: Optional[str] = None
    image: str = ""
    other_images: Optional[List[str]] = None
    preparation_time: Optional[int] = None
    servings: Optional[int] = None
    calories: Optional[int] = None
    ingredients: List[Dict[str, Any]] = Field(default_factory=list)
    ingredient_list: List[str] = Field(default_factory=list)
    instructions: List[Dict[str, Any]] = Field(default_factory=list)
    tags: Optional[List[Any]] = None
    published: bool = False
    created_by: str = "system"

    def to_document(self, *, exclude_unset: bool = False) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, exclude_unset=exclude_unset)


class IngredientName(BaseModel):
    """Canonical names of one ingredient, as extracted by a chef."""

    word: str
    plural: str
    variations: List[str] = Field(default_factory=list)


class SimilarRecipes(BaseModel):
    """Recipe ids close to a given recipe, split by similarity score."""

    duplicates: List[str] = Field(default_factory=list)
    distinct: List[str] = Field(default_factory=list)


class UserIdentity(BaseModel):
    uid: str
    display_name: str
