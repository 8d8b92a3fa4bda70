"""
Sanitizing of tool parameter schemas for the Gemini API.

Gemini rejects ``additionalProperties`` and ``required`` entries that name
undefined properties, both of which the generic schema generation may emit.
"""

from typing import Any, Dict, cast


def sanitize(schema: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively adapts a tool parameter schema to Gemini's schema dialect.

    Args:
        schema: The tool parameter schema to sanitize.

    Returns:
        A new schema; the input is left untouched.
    """
    return cast(Dict[str, Any], _sanitize(schema))


def _sanitize(node: Any) -> Any:
    if isinstance(node, list):
        return [_sanitize(item) for item in node]
    if not isinstance(node, dict):
        return node

    cleaned = {key: _sanitize(value) for key, value in node.items() if key != "additionalProperties"}

    if "required" in cleaned and isinstance(cleaned.get("properties"), dict):
        required = [name for name in cleaned["required"] if name in cleaned["properties"]]
        if required:
            cleaned["required"] = required
        else:
            cleaned.pop("required")

    return cleaned
