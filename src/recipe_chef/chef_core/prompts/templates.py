"""Prompt templates shared by every chef provider."""

import json
import re
from typing import Any, Dict, Iterable, Optional

CHEF_NAME_SLOT = "[[CHEF_NAME]]"
USER_DESCRIPTION_SLOT = "[[USER_DESCRIPTION]]"
USER_NAME_SLOT = "[[user_name]]"

ANONYMOUS_DESCRIPTION = "The user is anonymous."
ANONYMOUS_NAME = "the user"

CHEF_SYSTEM_PROMPT = """
Your name is Chef [[CHEF_NAME]] and you are a helpful food technologist and chef for a restaurant.
[[USER_DESCRIPTION]]

Introduce yourself only once per conversation, and only after tool results are retrieved unless [[user_name]] asks who you are.
Give short, courteous answers (no more than 2 sentences) unless [[user_name]] asks for more recipe details.

When [[user_name]] provides ingredients, asks for a recipe or mentions a dish:
1. Call the "find_recipes" tool ONCE with the ingredients before answering. Do not skip the tool call even if you believe you know the answer.
2. Pick the recipes that best match the request and call the "display_recipes" tool with them.
3. If the tool returns no results, politely say so and offer any suggestions you know.

When [[user_name]] asks about a recipe that is already displayed, answer from the recipe data you already have instead of searching again.
Always be accurate. If you don't know the answer, say so.
""".strip()

INGREDIENT_NAMES_PROMPT = """
For each of the following ingredient descriptions, identify the ingredient it names.
Respond with only a JSON object keyed by the original description, where each value looks like this:
{"word": "<singular ingredient name>", "plural": "<plural ingredient name>", "variations": ["<other common names>"]}

Use lower case names without quantities, units or preparation notes.

Ingredient descriptions:
[[INGREDIENTS]]
""".strip()

FIND_RECIPE_PROMPT = """
What can I make with these ingredients: [[INGREDIENTS]].
Without introducing yourself, respond with only a JSON array of recipes that looks like this: [<recipe>, <recipe>] where <recipe> is a JSON object like this:
{
  "name": "<recipe name>",
  "image": "<nice image URL>",
  "ingredients": [{"name": "<ingredient name>", "quantity": "<ingredient quantity>"}],
  "instructions": [{"step": 1, "instruction": "<cooking instruction>", "duration": <cooking duration in seconds>}]
}

Make sure the response is a valid JSON array of recipes and nothing else.
""".strip()


def _fill(template: str, slot: str, value: str) -> str:
    return re.sub(re.escape(slot), lambda _: value, template, flags=re.IGNORECASE)


class SystemPromptTemplate:
    """The chef's system prompt with named slots.

    Slots are filled on every ``render`` call from the original template, so a
    value can never be substituted twice. Slots rendered with ``None`` are left
    in place. Slot names match case-insensitively.
    """

    def __init__(self, template: str = CHEF_SYSTEM_PROMPT) -> None:
        self.template = template

    def render(
        self,
        *,
        chef_name: Optional[str] = None,
        user_description: Optional[str] = None,
        user_name: Optional[str] = None,
    ) -> str:
        values: Dict[str, Optional[str]] = {
            CHEF_NAME_SLOT: chef_name,
            USER_DESCRIPTION_SLOT: user_description,
            USER_NAME_SLOT: user_name,
        }
        text = self.template
        for slot, value in values.items():
            if value is not None:
                text = _fill(text, slot, value)
        return text

    def render_anonymous(self, chef_name: str) -> str:
        return self.render(chef_name=chef_name, user_description=ANONYMOUS_DESCRIPTION, user_name=ANONYMOUS_NAME)

    def render_for_user(self, chef_name: str, display_name: str) -> str:
        return self.render(
            chef_name=chef_name,
            user_description=f"The user's name is {display_name}.",
            user_name=display_name,
        )


def ingredient_names_prompt(ingredient_strings: Iterable[str]) -> str:
    """Build the structured-extraction prompt for ``get_ingredient_names``."""
    lines = "\n".join(f"- {item}" for item in ingredient_strings)
    return INGREDIENT_NAMES_PROMPT.replace("[[INGREDIENTS]]", lines)


def find_recipe_prompt(ingredients: Iterable[str]) -> str:
    """Build the prompt asking a chef to invent recipes as a JSON array."""
    return FIND_RECIPE_PROMPT.replace("[[INGREDIENTS]]", ", ".join(ingredients))


RECIPE_EXTRACTION_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "name": {"type": "string", "description": "The name of the recipe"},
        "description": {"type": "string", "description": "A short description of the recipe"},
        "preparationTime": {"type": "integer", "description": "Total preparation time in minutes"},
        "servings": {"type": "integer", "description": "Number of servings"},
        "calories": {"type": "integer", "description": "Calories per serving"},
        "ingredients": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "quantity": {"type": "string"},
                },
                "required": ["name"],
                "additionalProperties": False,
            },
        },
        "instructions": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "instruction": {"type": "string"},
                    "duration": {"type": "integer", "description": "In seconds. Skip if unknown."},
                },
                "required": ["instruction"],
                "additionalProperties": False,
            },
        },
    },
    "required": ["name", "description", "ingredients", "instructions"],
    "additionalProperties": False,
}

PARSE_RECIPE_PROMPT = """
Extract structured recipe data from the following text.
Respond with only a JSON object matching this JSON schema:
[[SCHEMA]]

Text:
[[TEXT]]
""".strip()


def parse_recipe_prompt(text: str) -> str:
    """Build the prompt turning free recipe text into a ``RECIPE_EXTRACTION_SCHEMA`` object."""
    schema = json.dumps(RECIPE_EXTRACTION_SCHEMA)
    return PARSE_RECIPE_PROMPT.replace("[[SCHEMA]]", schema).replace("[[TEXT]]", text)
