"""Public exports for the chef base classes."""

from .base import Chef
from .parsing import parse_ingredient_names, parse_json_payload, parse_recipe_list, strip_code_fences

__all__ = ["Chef", "parse_ingredient_names", "parse_json_payload", "parse_recipe_list", "strip_code_fences"]
