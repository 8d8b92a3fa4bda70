from .templates import (
    ANONYMOUS_DESCRIPTION,
    ANONYMOUS_NAME,
    CHEF_SYSTEM_PROMPT,
    RECIPE_EXTRACTION_SCHEMA,
    SystemPromptTemplate,
    find_recipe_prompt,
    ingredient_names_prompt,
    parse_recipe_prompt,
)

__all__ = [
    "ANONYMOUS_DESCRIPTION",
    "ANONYMOUS_NAME",
    "CHEF_SYSTEM_PROMPT",
    "RECIPE_EXTRACTION_SCHEMA",
    "SystemPromptTemplate",
    "find_recipe_prompt",
    "ingredient_names_prompt",
    "parse_recipe_prompt",
]
