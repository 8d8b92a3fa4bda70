import json
from typing import Any, Dict, List
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from openai import AsyncOpenAI

from recipe_chef.api import create_app
from recipe_chef.chef_core import (
    AssistantMessage,
    MemoryDictionaryStore,
    ModelTurn,
    SimilarRecipes,
    SystemMessage,
    ToolCallRequest,
    UserMessage,
)
from recipe_chef.chef_core.prompts import RECIPE_EXTRACTION_SCHEMA
from recipe_chef.chef_impl import ChefFactory


class ChefRecorder:
    """Stands in for ``ChefFactory.get_chef`` and keeps every chef it built."""

    def __init__(self, make_chef, turns: List[Any]) -> None:
        self.make_chef = make_chef
        self.turns = turns
        self.requests: List[Dict[str, Any]] = []
        self.chefs: List[Any] = []

    def __call__(self, name=None, specified_model=None, history=None):
        self.requests.append({"name": name, "specified_model": specified_model, "history": list(history or [])})
        chef = self.make_chef(turns=list(self.turns), history=history)
        self.chefs.append(chef)
        return chef


@pytest.fixture
def factory(settings, recipe_store) -> ChefFactory:
    return ChefFactory(settings=settings, recipe_store=recipe_store, openai_client=MagicMock(spec=AsyncOpenAI))


@pytest.fixture
def dictionary_store() -> MemoryDictionaryStore:
    return MemoryDictionaryStore()


@pytest.fixture
def client(factory, dictionary_store) -> TestClient:
    return TestClient(create_app(factory=factory, dictionary_store=dictionary_store))


def script(factory, make_chef, *turns) -> ChefRecorder:
    recorder = ChefRecorder(make_chef, list(turns))
    factory.get_chef = recorder
    return recorder


class TestChat:
    def test_chat_turn_with_recommendations(self, client, factory, make_chef, recipes) -> None:
        recorder = script(
            factory,
            make_chef,
            ModelTurn(
                tool_calls=[ToolCallRequest(name="find_recipes", arguments={"ingredients": ["garlic"]}, call_id="c1")]
            ),
            ModelTurn(
                tool_calls=[ToolCallRequest(name="display_recipes", arguments={"recipes": recipes[1:2]}, call_id="c2")]
            ),
            ModelTurn(text="Garlic bread it is."),
        )

        response = client.post(
            "/chat",
            json={
                "context": [{"sender": "user", "content": "Hi"}, {"sender": "assistant", "content": "Hello!"}],
                "model": "gpt-4o-mini",
                "prompt": "I have garlic.",
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "success"
        assert body["messages"] == "Garlic bread it is."
        assert body["hasRecipeRecommendations"] is True
        assert body["recommendations"] == recipes[1:2]
        assert body["ingredients"] == ["garlic"]
        assert [message["role"] for message in body["history"]] == [
            "user",
            "assistant",
            "tool",
            "assistant",
            "tool",
            "assistant",
        ]
        assert body["history"][0] == {"role": "user", "content": "I have garlic."}

        request = recorder.requests[0]
        assert request["specified_model"] == "gpt-4o-mini"
        assert request["history"] == [UserMessage(content="Hi"), AssistantMessage(content="Hello!")]

    def test_context_is_trimmed_to_the_window(self, client, factory, make_chef, settings) -> None:
        settings.context_window = 2
        recorder = script(factory, make_chef, ModelTurn(text="ok"))
        context = [{"role": "user" if i % 2 == 0 else "assistant", "content": str(i)} for i in range(5)]

        client.post("/chat", json={"context": context})

        assert [m.content for m in recorder.requests[0]["history"]] == ["3", "4"]

    def test_bearer_token_personalizes_the_prompt(self, client, factory, make_chef) -> None:
        recorder = script(factory, make_chef, ModelTurn(text="Hi Ann"))

        response = client.post(
            "/chat", json={"context": [{"role": "user", "content": "Hi"}]}, headers={"Authorization": "Bearer good-token"}
        )

        assert response.status_code == 200
        system_message = recorder.chefs[0].history[0]
        assert isinstance(system_message, SystemMessage)
        assert "The user's name is Ann." in system_message.content

    def test_unknown_model_is_a_server_error(self, client) -> None:
        response = client.post("/chat", json={"context": [], "model": "unknown-model"})

        assert response.status_code == 500
        assert response.json() == {"error": "Unknown agent: unknown"}

    def test_bad_context_is_a_server_error(self, client) -> None:
        response = client.post("/chat", json={"context": [{"role": "robot", "content": "beep"}]})

        assert response.status_code == 500
        assert "Unknown message role" in response.json()["error"]


class TestFindRecipe:
    def test_stored_recipes(self, client) -> None:
        response = client.post("/findRecipe", json={"ingredients": ["garlic"]})

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "success"
        assert {recipe["id"] for recipe in body["recipes"]} == {"r1", "r2"}

    def test_tag_filter(self, client) -> None:
        response = client.post("/findRecipe", json={"ingredients": ["garlic"], "tags": [3, 4]})

        assert [recipe["id"] for recipe in response.json()["recipes"]] == ["r2"]

    def test_generated_recipes_when_nothing_is_stored(self, client, factory, make_chef) -> None:
        generated = [{"name": "Rice Bowl", "ingredients": [{"name": "rice", "quantity": "1 cup"}]}]
        recorder = script(factory, make_chef, ModelTurn(text=f"```json\n{json.dumps(generated)}\n```"))

        response = client.post("/findRecipe", json={"ingredients": ["rice"], "model": "ollama-llama3.1"})

        assert response.json() == {"recipes": generated, "status": "success"}
        request = recorder.requests[0]
        assert request["specified_model"] == "ollama-llama3.1"
        assert "What can I make with these ingredients: rice." in request["history"][0].content

    def test_unparsable_generated_recipes(self, client, factory, make_chef) -> None:
        script(factory, make_chef, ModelTurn(text="How about rice pudding?"))

        response = client.post("/findRecipe", json={"ingredients": ["rice"]})

        assert response.status_code == 200
        assert response.json() == {"recipes": [], "status": "error"}


def test_models(client) -> None:
    response = client.get("/models")

    assert response.status_code == 200
    body = response.json()
    assert body["gpt"]["models"]["gpt-4o-mini"]["default"] is True
    assert "claude" not in body


class TestParseRecipe:
    def test_extracts_a_structured_recipe(self, client, factory, make_chef) -> None:
        extracted = {
            "name": "Pancakes",
            "description": "Fluffy breakfast pancakes.",
            "servings": 4,
            "ingredients": [{"name": "flour", "quantity": "200 g"}, {"name": "egg", "quantity": "2"}],
            "instructions": [{"instruction": "Whisk everything.", "duration": 120}, {"instruction": "Fry."}],
        }
        recorder = script(factory, make_chef, ModelTurn(text=f"```json\n{json.dumps(extracted)}\n```"))

        response = client.post(
            "/parseRecipe", json={"candidateRecipe": "Pancakes for 4: mix 200 g flour and 2 eggs, then fry."}
        )

        assert response.status_code == 200
        assert response.json() == extracted
        adapter = recorder.chefs[0].adapter
        assert adapter.use_tools == [False]
        assert adapter.response_schemas == [RECIPE_EXTRACTION_SCHEMA]
        prompt = adapter.calls[0][0]
        assert isinstance(prompt, UserMessage)
        assert prompt.content.endswith("Pancakes for 4: mix 200 g flour and 2 eggs, then fry.")
        assert len(recorder.chefs[0].history) == 1

    def test_selects_the_requested_model(self, client, factory, make_chef) -> None:
        recorder = script(factory, make_chef, ModelTurn(text=json.dumps({"name": "Rice", "description": "Plain."})))

        response = client.post("/parseRecipe", json={"candidateRecipe": "Boil rice.", "model": "ollama-llama3.1"})

        assert response.status_code == 200
        assert recorder.requests[0]["specified_model"] == "ollama-llama3.1"

    def test_missing_text(self, client, factory, make_chef) -> None:
        recorder = script(factory, make_chef, ModelTurn(text="{}"))

        response = client.post("/parseRecipe", json={"candidateRecipe": "   "})

        assert response.status_code == 400
        assert response.json() == {"error": "Missing candidateRecipe in request body"}
        assert recorder.chefs == []

    def test_unparsable_output_is_a_server_error(self, client, factory, make_chef) -> None:
        script(factory, make_chef, ModelTurn(text="Sorry, I cannot read that recipe."))

        response = client.post("/parseRecipe", json={"candidateRecipe": "scribbles"})

        assert response.status_code == 500
        assert response.json() == {"error": "The model did not return a recipe object."}

    def test_output_without_a_name_is_a_server_error(self, client, factory, make_chef) -> None:
        script(factory, make_chef, ModelTurn(text=json.dumps({"description": "Something tasty."})))

        response = client.post("/parseRecipe", json={"candidateRecipe": "Something tasty."})

        assert response.status_code == 500
        assert response.json()["error"].startswith("The model returned an invalid recipe")


class TestPublishRecipe:
    @pytest.fixture
    def similar(self, factory, make_chef) -> AsyncMock:
        chef = make_chef()
        chef.find_similar_recipes = AsyncMock(return_value=SimilarRecipes())
        factory.get_chef = MagicMock(return_value=chef)
        return chef.find_similar_recipes

    def test_missing_recipe(self, client) -> None:
        response = client.post("/publishRecipe", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "Missing recipe in request body"}

    def test_publishes_distinct_recipe(self, client, similar, recipe_store) -> None:
        similar.return_value = SimilarRecipes(distinct=["r1"])

        response = client.post("/publishRecipe", json={"recipe": {"id": "r7", "name": "Soup 2", "related": ["r2"]}})

        assert response.status_code == 200
        assert response.json() == {"status": True, "message": "Recipe published successfully", "id": "r7"}
        stored = recipe_store.get("r7")
        assert stored["published"] is True
        assert stored["related"] == ["r2", "r1"]
        assert stored["publishedAt"]

    def test_queues_recipe_with_duplicates(self, client, similar, recipe_store) -> None:
        similar.return_value = SimilarRecipes(duplicates=["r1"], distinct=["r2"])

        response = client.post("/publishRecipe", json={"recipe": {"id": "r7", "name": "Tomato Soup"}})

        assert response.status_code == 200
        body = response.json()
        assert body["status"] is False
        assert body["queued"] is True
        assert body["id"] == "r7"
        assert body["similarRecipes"] == {"duplicates": ["r1"], "distinct": ["r2"]}
        stored = recipe_store.get("r7")
        assert stored["published"] is False
        assert stored["related"] == ["r2"]

    def test_recipe_without_name_is_rejected(self, client, similar, recipe_store) -> None:
        response = client.post("/publishRecipe", json={"recipe": {"id": "r7", "servings": "many"}})

        assert response.status_code == 400
        assert "name" in response.json()["error"]
        similar.assert_not_awaited()
        assert recipe_store.get("r7") is None

    def test_recipe_without_id_is_rejected(self, client, similar) -> None:
        response = client.post("/publishRecipe", json={"recipe": {"name": "Soup 2"}})

        assert response.status_code == 400
        assert response.json() == {"error": "Recipe id is required"}
        similar.assert_not_awaited()

    def test_similarity_failure_is_a_server_error(self, client, similar) -> None:
        similar.side_effect = RuntimeError("embedding service down")

        response = client.post("/publishRecipe", json={"recipe": {"id": "r7", "name": "Soup 2"}})

        assert response.status_code == 500
        assert response.json() == {"error": "embedding service down"}


class TestJobs:
    def test_compute_vector_without_vector_support(self, client) -> None:
        response = client.post("/computeVector")

        assert response.status_code == 200
        assert response.json() == {"status": "success", "processed": 0}

    def test_tag_recipes(self, client, factory, make_chef, dictionary_store) -> None:
        names = {"garlic": {"word": "garlic", "plural": "garlics", "variations": []}}
        script(factory, make_chef, ModelTurn(text=json.dumps(names)))

        response = client.post("/tagRecipes")

        assert response.json() == {"status": "success", "processed": 3}

    def test_job_failure_is_a_server_error(self, client, factory) -> None:
        factory.get_chef = MagicMock(side_effect=RuntimeError("no chef"))

        response = client.post("/tagRecipes")

        assert response.status_code == 500
        assert response.json() == {"error": "no chef"}
