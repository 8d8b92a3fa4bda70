"""Best-effort decoding of structured model output."""

import json
import re
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..collaborators.models import IngredientName
from ..logger import get_logger

logger = get_logger(__name__)

_FENCE = re.compile(r"^\s*```[a-zA-Z]*\s*\n?(.*?)\n?\s*```\s*$", re.DOTALL)


def strip_code_fences(text: str) -> str:
    match = _FENCE.match(text)
    return match.group(1).strip() if match else text.strip()


def parse_json_payload(text: str) -> Optional[Any]:
    """Decode model output as JSON, ignoring a surrounding code fence.

    Returns:
        The decoded value, or None when the output is not valid JSON.
    """
    try:
        return json.loads(strip_code_fences(text))
    except (json.JSONDecodeError, TypeError):
        logger.warning("Model output is not valid JSON: %.200s", text)
        return None


def parse_ingredient_names(text: str) -> Dict[str, IngredientName]:
    """Decode the answer to the ingredient-names prompt.

    Entries that do not have the expected shape are skipped; output that is
    not a JSON object yields an empty result.
    """
    payload = parse_json_payload(text)
    if not isinstance(payload, dict):
        return {}

    names: Dict[str, IngredientName] = {}
    for key, value in payload.items():
        try:
            names[key] = IngredientName.model_validate(value)
        except ValidationError:
            logger.debug("Skipping malformed ingredient entry for %r.", key)
    return names


def parse_recipe_list(text: str) -> Optional[List[Dict[str, Any]]]:
    """Decode a JSON array of recipe objects, or None when the output is not one."""
    payload = parse_json_payload(text)
    if not isinstance(payload, list) or not all(isinstance(item, dict) for item in payload):
        return None
    return payload
