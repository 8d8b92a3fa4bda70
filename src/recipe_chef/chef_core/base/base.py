"""The provider-agnostic chef: history, personalization and the two recipe tools."""

from abc import ABC, abstractmethod
from typing import Annotated, Any, ClassVar, Dict, Iterable, List, Optional, Sequence, Tuple

from pydantic import Field, ValidationError

from ..collaborators import AuthVerifier, IngredientName, Recipe, RecipeDocument, RecipeStore, SimilarRecipes
from ..exceptions import InvalidTokenError, ModelCallError
from ..logger import get_logger
from ..messages import BaseMessage, SystemMessage, UserMessage
from ..prompts import RECIPE_EXTRACTION_SCHEMA, SystemPromptTemplate, ingredient_names_prompt, parse_recipe_prompt
from ..tools import ProviderAdapter, ToolRegistry
from ..tools.tool_loop import DEFAULT_MAX_TOOL_ROUNDS, ToolExecutionLoop
from .parsing import parse_ingredient_names, parse_json_payload

logger = get_logger(__name__)

DEFAULT_MAX_RECIPES = 10


class Chef(ABC):
    """Abstract base class for the recipe chef.

    A chef owns the canonical history of one conversation turn. The system
    message is always ``history[0]`` and is the only one; incoming history is
    appended after it and never reordered. One instance serves exactly one
    request and is never shared.

    Subclasses provide the tool registry and the provider adapter; the base
    class runs the model/tool loop through them.
    """

    provider: ClassVar[str] = ""

    def __init__(
        self,
        name: str,
        model: str,
        history: Optional[Iterable[BaseMessage]] = None,
        *,
        recipe_store: RecipeStore,
        auth_verifier: Optional[AuthVerifier] = None,
        max_tool_rounds: int = DEFAULT_MAX_TOOL_ROUNDS,
        max_recipes: int = DEFAULT_MAX_RECIPES,
        prompt_template: Optional[SystemPromptTemplate] = None,
    ):
        """
        Initializes the chef.

        Args:
            name: The name the chef introduces itself with.
            model: The vendor model id (without the provider prefix).
            history: Prior conversation messages. System messages in it are discarded.
            recipe_store: Store queried by ``find_recipes``.
            auth_verifier: Optional verifier used to personalize the system prompt.
            max_tool_rounds: Maximum number of model calls per ``get_response``.
            max_recipes: Maximum number of recipes a search returns.
            prompt_template: Template of the system prompt.
        """
        self.name = name
        self.model = model
        self.recipe_store = recipe_store
        self.auth_verifier = auth_verifier
        self.max_recipes = max_recipes
        self.prompt_template = prompt_template or SystemPromptTemplate()

        self.history: List[BaseMessage] = [SystemMessage(content=self.prompt_template.render(chef_name=name))]
        self.history.extend(message for message in history or () if not isinstance(message, SystemMessage))
        self.latest_history: List[BaseMessage] = []

        self.recipe_recommendations: List[Dict[str, Any]] = []
        self.ingredients: List[str] = []
        self.has_recipe_recommendations = False

        self._personalized = False
        self._last_search: Optional[Tuple[Tuple[str, ...], List[RecipeDocument]]] = None

        self.registry = self._create_registry()
        self.registry.register(self.find_recipes)
        self.registry.register(self.display_recipes)
        self.adapter = self._create_adapter()
        self._tool_loop = ToolExecutionLoop(registry=self.registry, max_tool_rounds=max_tool_rounds)

    @abstractmethod
    def _create_registry(self) -> ToolRegistry:
        pass

    @abstractmethod
    def _create_adapter(self) -> ProviderAdapter:
        pass

    @property
    def system_message(self) -> SystemMessage:
        return self.history[0]  # type: ignore[return-value]

    async def get_response(self, prompt: Optional[str] = None, authorization_token: Optional[str] = None) -> str:
        """
        Runs one chat turn.

        Args:
            prompt: Optional new user utterance, appended to the history.
            authorization_token: Optional bearer token used to personalize the
                system prompt. Only the first call on an instance personalizes.

        Returns:
            The final assistant text, or an empty string.
        """
        start = len(self.history)
        await self._personalize(authorization_token)

        if prompt:
            self.history.append(UserMessage(content=prompt))

        text = await self._tool_loop.run(adapter=self.adapter, history=self.history)
        self.latest_history = self.history[start:]
        return text

    async def _personalize(self, authorization_token: Optional[str]) -> None:
        if self._personalized:
            return
        self._personalized = True

        if authorization_token and self.auth_verifier is not None:
            try:
                identity = await self.auth_verifier.verify_token(authorization_token)
            except InvalidTokenError as exc:
                logger.info("Token verification failed, continuing anonymously: %s", exc)
            except Exception as exc:
                logger.warning("Token verifier unavailable, continuing anonymously: %s", exc, exc_info=True)
            else:
                self.history[0] = SystemMessage(
                    content=self.prompt_template.render_for_user(self.name, identity.display_name)
                )
                return

        self.history[0] = SystemMessage(content=self.prompt_template.render_anonymous(self.name))

    async def get_ingredient_names(self, ingredient_strings: Sequence[str]) -> Dict[str, IngredientName]:
        """
        Maps raw ingredient descriptions to canonical names with one tool-less model call.

        Args:
            ingredient_strings: Raw ingredient descriptions, e.g. ``"2 cups of flour"``.

        Returns:
            The parsed names keyed by the original description. Empty when the
            model call fails or its output cannot be decoded.
        """
        items = [item for item in ingredient_strings if item]
        if not items:
            return {}

        try:
            turn = await self.adapter.complete([UserMessage(content=ingredient_names_prompt(items))], use_tools=False)
        except Exception as exc:
            logger.error("Ingredient name extraction failed: %s", exc, exc_info=True)
            return {}

        return parse_ingredient_names(turn.text)

    async def parse_recipe(self, text: str) -> Recipe:
        """
        Extracts a structured recipe from free text with one tool-less model call.

        The model is asked for JSON matching ``RECIPE_EXTRACTION_SCHEMA``; the
        chat history is not touched.

        Raises:
            ModelCallError: If the model output is not a valid recipe. Errors of the
                vendor call itself propagate unchanged.
        """
        turn = await self.adapter.complete(
            [UserMessage(content=parse_recipe_prompt(text))],
            use_tools=False,
            response_schema=RECIPE_EXTRACTION_SCHEMA,
        )

        payload = parse_json_payload(turn.text)
        if not isinstance(payload, dict):
            raise ModelCallError("The model did not return a recipe object.")
        try:
            return Recipe.model_validate(payload)
        except ValidationError as exc:
            raise ModelCallError(f"The model returned an invalid recipe: {exc}") from exc

    async def find_recipes(
        self,
        ingredients: Annotated[List[str], Field(description="List of ingredients")],
    ) -> List[Dict[str, Any]]:
        """Finds recipes based on ingredients. The response is a JSON array of recipes."""
        query = tuple(item.strip() for item in ingredients if item and item.strip())

        if self._last_search is not None and self._last_search[0] == query:
            logger.debug("Reusing the previous result for %s.", list(query))
            recipes = self._last_search[1]
        else:
            recipes = await self.search_for_matching_recipes(list(query))
            self._last_search = (query, recipes)

        self.recipe_recommendations = list(recipes)
        self.ingredients = list(query)
        return recipes

    async def display_recipes(
        self,
        recipes: Annotated[List[Dict[str, Any]], Field(description="List of recipes in JSON array format")],
    ) -> str:
        """Displays recipes to a special display. It returns a response stating the number of recipes actually displayed."""
        self.recipe_recommendations = list(recipes)
        self.has_recipe_recommendations = True
        logger.info("Displaying %d recipe(s).", len(recipes))
        return f"{len(recipes)} recommendations will be displayed."

    async def search_for_matching_recipes(self, ingredients: Sequence[str]) -> List[RecipeDocument]:
        """Recipes whose ingredient list contains any of ``ingredients``."""
        if not ingredients:
            return []
        return await self.recipe_store.query_by_ingredients(ingredients, limit=self.max_recipes)

    @property
    def supports_vectors(self) -> bool:
        """Whether ``store_embeddings`` and ``find_similar_recipes`` are backed by a vector store."""
        return False

    async def store_embeddings(self, recipes: Sequence[RecipeDocument]) -> List[RecipeDocument]:
        """Embeds and stores recipe vectors. Chefs without vector support return the recipes unchanged."""
        logger.warning("The %s chef does not compute embeddings.", self.provider or type(self).__name__)
        return list(recipes)

    async def find_similar_recipes(self, recipe: RecipeDocument) -> SimilarRecipes:
        """Recipes similar to ``recipe``. Chefs without vector support find none."""
        return SimilarRecipes()
