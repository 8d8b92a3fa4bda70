from typing import Annotated, Any, Dict, Iterator, List, Optional

import pytest
from pydantic import BaseModel, Field

from recipe_chef.chef_impl.gemini import GeminiToolRegistry, schema_sanitizer


class RecipeFilter(BaseModel):
    tags: List[int] = Field(default_factory=list, description="Dictionary ids every recipe must carry")
    max_minutes: Optional[int] = Field(default=None, description="Upper bound on preparation time")


async def filter_recipes(
    recipes: Annotated[List[Dict[str, Any]], Field(description="Recipes to filter")],
    recipe_filter: Annotated[RecipeFilter, Field(description="Filter to apply")],
) -> List[Dict[str, Any]]:
    """Keeps the recipes that match a filter."""
    return recipes


def walk_keys(node: Any) -> Iterator[str]:
    if isinstance(node, dict):
        for key, value in node.items():
            yield key
            yield from walk_keys(value)
    elif isinstance(node, list):
        for item in node:
            yield from walk_keys(item)


@pytest.fixture
def tool_schema() -> Dict[str, Any]:
    registry = GeminiToolRegistry()
    registry.register(filter_recipes)
    return registry.tools["filter_recipes"].parameters


def test_registered_schema_loses_additional_properties(tool_schema) -> None:
    assert tool_schema["additionalProperties"] is False

    sanitized = schema_sanitizer.sanitize(tool_schema)

    assert "additionalProperties" not in set(walk_keys(sanitized))
    assert sanitized["properties"]["recipes"]["items"] == {"type": "object"}
    assert sanitized["required"] == ["recipes", "recipe_filter"]


def test_input_is_not_modified(tool_schema) -> None:
    schema_sanitizer.sanitize(tool_schema)

    assert tool_schema["additionalProperties"] is False
    assert tool_schema["properties"]["recipes"]["items"]["additionalProperties"] is True


def test_required_names_must_be_defined() -> None:
    schema = {
        "type": "object",
        "properties": {"ingredients": {"type": "array", "items": {"type": "string"}}},
        "required": ["ingredients", "servings"],
    }

    assert schema_sanitizer.sanitize(schema)["required"] == ["ingredients"]


def test_required_is_dropped_when_nothing_is_defined() -> None:
    schema = {
        "type": "object",
        "properties": {"ingredients": {"type": "array", "items": {"type": "string"}}},
        "required": ["servings", "calories"],
    }

    assert "required" not in schema_sanitizer.sanitize(schema)


def test_clean_schema_is_unchanged() -> None:
    schema = {
        "type": "object",
        "properties": {"ingredients": {"type": "array", "items": {"type": "string"}, "description": "Ingredients"}},
        "required": ["ingredients"],
    }

    assert schema_sanitizer.sanitize(schema) == schema
