import copy
from typing import Any, Callable, Dict, List, Optional, Sequence

import pytest
from dotenv import find_dotenv, load_dotenv

from recipe_chef.chef_core import (
    BaseMessage,
    Chef,
    ChefSettings,
    MemoryRecipeStore,
    ModelTurn,
    StaticTokenVerifier,
)
from recipe_chef.chef_impl import OpenAIToolRegistry

# Load environment variables from .env file, if there is one
env_file = find_dotenv(usecwd=True)
if env_file:
    load_dotenv(env_file)


RECIPES: List[Dict[str, Any]] = [
    {
        "id": "r1",
        "slug": "tomato-soup",
        "name": "Tomato Soup",
        "description": "A warm soup.",
        "ingredientList": ["tomato", "onion", "garlic"],
        "tags": [1, 2, 3],
    },
    {
        "id": "r2",
        "slug": "garlic-bread",
        "name": "Garlic Bread",
        "ingredientList": ["bread", "garlic", "butter"],
        "tags": [3, 4],
    },
    {
        "id": "r3",
        "slug": "pancakes",
        "name": "Pancakes",
        "ingredientList": ["flour", "egg", "milk"],
        "hasVector": True,
    },
]


class ScriptedAdapter:
    """Provider adapter replaying prepared turns.

    The last turn repeats once the others are used up. Exceptions in the
    script are raised instead of returned.
    """

    def __init__(self, turns: Sequence[Any]) -> None:
        self.turns = list(turns)
        self.calls: List[List[BaseMessage]] = []
        self.use_tools: List[bool] = []
        self.response_schemas: List[Optional[Dict[str, Any]]] = []

    def convert_history(self, history: Sequence[BaseMessage]) -> List[Any]:
        return list(history)

    def build_tool_response_message(self, message: Any) -> Any:
        return message

    async def complete(
        self,
        history: Sequence[BaseMessage],
        use_tools: bool = True,
        response_schema: Optional[Dict[str, Any]] = None,
    ) -> ModelTurn:
        self.calls.append(list(history))
        self.use_tools.append(use_tools)
        self.response_schemas.append(response_schema)
        if not self.turns:
            raise AssertionError("No scripted turn left.")
        turn = self.turns.pop(0) if len(self.turns) > 1 else self.turns[0]
        if isinstance(turn, Exception):
            raise turn
        return turn


class StubChef(Chef):
    provider = "stub"

    def __init__(self, name: str = "Andel", model: str = "stub-model", history: Any = None, *, turns=(), **kwargs):
        self.turns = list(turns)
        kwargs.setdefault("recipe_store", MemoryRecipeStore())
        super().__init__(name, model, history, **kwargs)

    def _create_registry(self) -> OpenAIToolRegistry:
        return OpenAIToolRegistry()

    def _create_adapter(self) -> ScriptedAdapter:
        return ScriptedAdapter(self.turns)


@pytest.fixture
def recipes() -> List[Dict[str, Any]]:
    return copy.deepcopy(RECIPES)


@pytest.fixture
def recipe_store(recipes: List[Dict[str, Any]]) -> MemoryRecipeStore:
    return MemoryRecipeStore(recipes)


@pytest.fixture
def auth_verifier() -> StaticTokenVerifier:
    return StaticTokenVerifier({"good-token": "Ann"})


@pytest.fixture
def settings() -> ChefSettings:
    return ChefSettings(
        _env_file=None,
        default_model="gpt-4o-mini",
        openai_api_key="test-key",
        gemini_api_key=None,
        ollama_host=None,
        qdrant_url=None,
        recipes_file=None,
        auth_tokens={"good-token": "Ann"},
    )


@pytest.fixture
def make_chef(recipe_store: MemoryRecipeStore, auth_verifier: StaticTokenVerifier) -> Callable[..., StubChef]:
    """Builds stub chefs sharing the test recipe store and token verifier."""

    def factory(turns: Sequence[Any] = (), history: Any = None, **kwargs: Any) -> StubChef:
        kwargs.setdefault("recipe_store", recipe_store)
        kwargs.setdefault("auth_verifier", auth_verifier)
        return StubChef(history=history, turns=turns, **kwargs)

    return factory
