import json
from typing import Annotated, Any, Dict, List, Optional

import pytest
from google.genai import types
from pydantic import BaseModel, Field

from recipe_chef.chef_core import (
    ToolDefinition,
    ToolNotFoundError,
    ToolRegistrationError,
    ToolRegistry,
    ToolValidationError,
)
from recipe_chef.chef_impl import GeminiToolRegistry, OpenAIToolRegistry


# Renamed to avoid PytestCollectionWarning
class ConcreteTestRegistry(ToolRegistry):
    @property
    def tool_object(self) -> Any:
        return None


def find_recipes(ingredients: Annotated[List[str], Field(description="List of ingredients")]) -> List[str]:
    """Finds recipes based on ingredients."""
    return ingredients


def test_register_callable() -> None:
    registry = ConcreteTestRegistry()

    definition = registry.register(find_recipes)

    assert "find_recipes" in registry
    assert registry.get("find_recipes") is definition
    assert definition.description == "Finds recipes based on ingredients."
    assert definition.func(["egg"]) == ["egg"]
    assert definition.parameters == {
        "type": "object",
        "properties": {
            "ingredients": {"type": "array", "items": {"type": "string"}, "description": "List of ingredients"}
        },
        "required": ["ingredients"],
        "additionalProperties": False,
    }
    assert registry.implementations == {"find_recipes": find_recipes}


def test_register_with_overrides() -> None:
    registry = ConcreteTestRegistry()

    registry.register(find_recipes, name="search", description="Search recipes.")

    assert registry.get("search").description == "Search recipes."


def test_register_definition() -> None:
    registry = ConcreteTestRegistry()
    definition = ToolDefinition(name="noop", description="Does nothing.", func=lambda: None)

    registry.register(definition)

    assert registry.get("noop") is definition


def test_register_bound_method_skips_self() -> None:
    class Kitchen:
        def display_recipes(
            self, recipes: Annotated[List[Dict[str, Any]], Field(description="List of recipes")]
        ) -> int:
            """Displays recipes."""
            return len(recipes)

    registry = ConcreteTestRegistry()
    definition = registry.register(Kitchen().display_recipes)

    assert list(definition.parameters["properties"]) == ["recipes"]
    # free-form recipe objects keep their extra fields
    assert definition.parameters["properties"]["recipes"]["items"]["additionalProperties"] is True


def test_duplicate_registration_raises() -> None:
    registry = ConcreteTestRegistry()
    registry.register(find_recipes)

    with pytest.raises(ToolRegistrationError, match="already registered"):
        registry.register(find_recipes)


def test_unknown_tool_raises() -> None:
    with pytest.raises(ToolNotFoundError, match="The tool bake is not implemented."):
        ConcreteTestRegistry().get("bake")


def test_registry_missing_docstring() -> None:
    registry = ConcreteTestRegistry()

    def no_doc_tool(x: Annotated[int, Field(description="desc")]) -> None:
        pass

    with pytest.raises(ToolValidationError, match="missing docstring"):
        registry.register(no_doc_tool)


def test_registry_missing_param_description() -> None:
    registry = ConcreteTestRegistry()

    def bad_param_tool(x: int) -> None:
        """Docstring."""

    with pytest.raises(ToolValidationError, match="needs a description"):
        registry.register(bad_param_tool)


def test_nested_models_are_resolved_inline() -> None:
    registry = ConcreteTestRegistry()

    class Ingredient(BaseModel):
        name: str = Field(description="Ingredient name")
        quantity: Optional[str] = Field(default=None, description="Quantity")

    class Draft(BaseModel):
        name: str = Field(description="Recipe name")
        ingredients: List[Ingredient] = Field(description="Ingredients")

    def save_recipe(recipe: Annotated[Draft, Field(description="The recipe to save")]) -> str:
        """Saves a recipe."""
        return recipe.name

    schema = registry.register(save_recipe).parameters

    assert "$defs" not in schema
    assert "$ref" not in json.dumps(schema)
    item_schema = schema["properties"]["recipe"]["properties"]["ingredients"]["items"]
    assert item_schema["type"] == "object"
    assert item_schema["properties"]["quantity"]["type"] == "string"
    assert "title" not in item_schema


def test_recursive_model_detection() -> None:
    registry = ConcreteTestRegistry()

    class Node(BaseModel):
        name: str = Field(description="Node name")
        child: Optional["Node"] = Field(default=None, description="Child node")

    Node.model_rebuild()

    def process_tree(root: Annotated[Node, Field(description="Root node")]) -> str:
        """Process a tree structure."""
        return "processed"

    with pytest.raises(ToolValidationError, match="Recursive structure detected"):
        registry.register(process_tree)


def test_openai_registry_tool_object() -> None:
    registry = OpenAIToolRegistry()
    assert registry.tool_object is None

    registry.register(find_recipes)
    [tool] = registry.tool_object

    assert tool["type"] == "function"
    assert tool["function"]["name"] == "find_recipes"
    assert tool["function"]["description"] == "Finds recipes based on ingredients."
    assert tool["function"]["parameters"]["type"] == "object"


def test_gemini_registry_tool_object() -> None:
    registry = GeminiToolRegistry()
    assert registry.tool_object is None

    registry.register(find_recipes)
    tool = registry.tool_object

    assert isinstance(tool, types.Tool)
    [declaration] = tool.function_declarations
    assert declaration.name == "find_recipes"
    assert declaration.description == "Finds recipes based on ingredients."
    assert declaration.parameters.required == ["ingredients"]
