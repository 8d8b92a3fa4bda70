"""Normalize vendor responses into the canonical tool-call shape.

Each provider adapter declares an ordered tuple of shape matchers. A matcher
inspects a raw vendor payload and returns the list of raw tool-call objects it
recognises, or ``None`` when the payload does not have its shape. The first
matcher that returns a non-empty list wins; no match means "no tool calls".
Payloads may be SDK objects or plain dictionaries, so every lookup goes
through :func:`field`.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..logger import get_logger
from .models import ToolCallRequest

logger = get_logger(__name__)

ShapeMatcher = Callable[[Any], Optional[List[Any]]]
TextMatcher = Callable[[Any], Optional[str]]


def field(obj: Any, *path: Any) -> Any:
    """Walk ``path`` through attributes, mapping keys and sequence indexes.

    Returns None as soon as a step is missing.
    """
    current = obj
    for step in path:
        if current is None:
            return None
        if isinstance(step, int):
            if isinstance(current, (list, tuple)) and -len(current) <= step < len(current):
                current = current[step]
            else:
                return None
        elif isinstance(current, Mapping):
            current = current.get(step)
        else:
            current = getattr(current, step, None)
    return current


def path_matcher(*path: Any, single: bool = False) -> ShapeMatcher:
    """Build a matcher that reads a list (or a single call when ``single``) at ``path``."""

    def match(response: Any) -> Optional[List[Any]]:
        value = field(response, *path)
        if not value:
            return None
        if single:
            return [value]
        if isinstance(value, (list, tuple)):
            return list(value)
        return None

    match.__name__ = "match_" + "_".join(str(p) for p in path)
    return match


def text_matcher(*path: Any) -> TextMatcher:
    """Build a matcher that reads a text value at ``path``."""

    def match(response: Any) -> Optional[str]:
        value = field(response, *path)
        return value if isinstance(value, str) else None

    return match


def first_match(response: Any, matchers: Sequence[ShapeMatcher]) -> List[Any]:
    """Return the raw tool calls of the first matcher that recognises ``response``."""
    for matcher in matchers:
        found = matcher(response)
        if found:
            logger.debug("Tool calls matched by '%s'.", getattr(matcher, "__name__", matcher))
            return found
    return []


def first_text(response: Any, matchers: Sequence[TextMatcher]) -> str:
    """Return the text of the first matcher that finds one, or an empty string."""
    for matcher in matchers:
        text = matcher(response)
        if text is not None:
            return text
    return ""


def normalize_arguments(raw_args: Any) -> Dict[str, Any]:
    """Normalize tool arguments into a dictionary.

    JSON strings are decoded, mappings are used as they are, anything else
    (including JSON that does not decode to an object) becomes ``{}``.

    Args:
        raw_args: The raw arguments (dict, JSON string, or None).

    Returns:
        A dictionary of arguments.
    """
    if raw_args is None or raw_args == "":
        return {}

    if isinstance(raw_args, Mapping):
        return dict(raw_args)

    if isinstance(raw_args, (str, bytes)):
        try:
            parsed = json.loads(raw_args)
        except json.JSONDecodeError as exc:
            logger.warning("Could not decode tool arguments, using an empty object: %s", exc)
            return {}
        if isinstance(parsed, dict):
            return parsed
        logger.warning("Tool arguments decoded to %s, not an object.", type(parsed).__name__)
        return {}

    logger.warning("Unsupported tool argument type %s.", type(raw_args).__name__)
    return {}


def normalize_tool_call(raw: Any, index: int = 0) -> Optional[ToolCallRequest]:
    """Convert one raw vendor tool call into a :class:`ToolCallRequest`.

    Understands the OpenAI/Ollama ``{id, function: {name, arguments}}`` form and
    the flat ``{id, name, args|arguments}`` form used by Gemini payloads.
    Missing call ids fall back to the tool name.
    """
    function = field(raw, "function")
    if function is not None and not isinstance(function, str):
        name = field(function, "name")
        raw_args = field(function, "arguments")
    else:
        name = field(raw, "name") or function or field(raw, "functionName")
        raw_args = field(raw, "arguments")
        if raw_args is None:
            raw_args = field(raw, "args")

    if not isinstance(name, str) or not name:
        logger.warning("Skipping tool call #%d without a name.", index)
        return None

    call_id = field(raw, "id")
    if not isinstance(call_id, str) or not call_id:
        call_id = name

    return ToolCallRequest(name=name, arguments=normalize_arguments(raw_args), call_id=call_id)


def normalize_tool_calls(raw_calls: Sequence[Any]) -> List[ToolCallRequest]:
    requests = []
    for index, raw in enumerate(raw_calls):
        request = normalize_tool_call(raw, index)
        if request is not None:
            requests.append(request)
    return requests
