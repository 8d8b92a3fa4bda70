from typing import Any, Dict, Set

from ...exceptions import ToolValidationError
from ...logger import get_logger

logger = get_logger(__name__)

_METADATA_KEYS = ("$defs", "$schema", "$id", "title", "definitions")


class SchemaValidator:
    """
    Checks and cleans the JSON schemas generated from tool handler signatures.
    """

    @staticmethod
    def assert_no_recursive_refs(schema: Dict[str, Any]) -> None:
        """
        Rejects schemas whose ``$ref`` graph contains a cycle.

        Recipes are passed to tools as plain objects, so a recursive argument model
        is always a programming error in the handler signature.

        Args:
            schema: The JSON schema to check.

        Raises:
            ToolValidationError: If a recursive reference is found.
        """
        defs = schema.get("$defs") or schema.get("definitions") or {}

        def visit(node: Any, trail: Set[str]) -> None:
            if isinstance(node, list):
                for item in node:
                    visit(item, trail)
                return
            if not isinstance(node, dict):
                return

            ref = node.get("$ref")
            if ref is None:
                for value in node.values():
                    visit(value, trail)
                return

            if ref in trail:
                msg = f"Recursive structure detected: {ref}. Tool arguments must not be recursive."
                logger.error(msg)
                raise ToolValidationError(msg)

            target = ref.rsplit("/", 1)[-1]
            if ref.startswith("#") and target in defs:
                visit(defs[target], trail | {ref})

        visit(schema, set())

    @staticmethod
    def sanitize_schema(schema: Any) -> Any:
        """
        Strips pydantic metadata and collapses ``Optional`` unions.

        Object schemas without an explicit ``additionalProperties`` are closed
        (``False``); free-form objects such as a recipe payload keep ``True``.

        Args:
            schema: The JSON schema to sanitize.

        Returns:
            The sanitized schema.
        """
        if not isinstance(schema, dict):
            return schema

        cleaned = {k: v for k, v in schema.items() if k not in _METADATA_KEYS}

        any_of = cleaned.get("anyOf")
        if isinstance(any_of, list):
            non_null = [option for option in any_of if option.get("type") != "null"]
            if len(non_null) == 1 and isinstance(non_null[0], dict):
                collapsed = dict(non_null[0])
                if "description" in cleaned:
                    collapsed["description"] = cleaned["description"]
                return SchemaValidator.sanitize_schema(collapsed)

        if cleaned.get("type") == "object":
            cleaned.setdefault("additionalProperties", False)

        for key, value in cleaned.items():
            if isinstance(value, dict):
                cleaned[key] = SchemaValidator.sanitize_schema(value)
            elif isinstance(value, list):
                cleaned[key] = [SchemaValidator.sanitize_schema(item) for item in value]

        return cleaned
