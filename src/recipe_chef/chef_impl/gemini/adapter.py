"""Translate the canonical history to Gemini ``generate_content`` calls and back."""

import json
from typing import Any, Dict, List, Optional, Sequence

from google.genai import types
from google.genai.client import AsyncClient

from recipe_chef.chef_core import (
    AssistantMessage,
    BaseMessage,
    ModelTurn,
    SystemMessage,
    ToolMessage,
    UserMessage,
    get_logger,
)
from recipe_chef.chef_core.tools.normalizer import (
    field,
    first_match,
    first_text,
    normalize_tool_calls,
    path_matcher,
    text_matcher,
)
from .registry import GeminiToolRegistry

logger = get_logger(__name__)


def candidate_parts_text(response: Any) -> Optional[str]:
    """The joined text parts of the first candidate, skipping thought parts."""
    parts = field(response, "candidates", 0, "content", "parts")
    if parts is None:
        return None
    texts = [field(part, "text") for part in parts if not field(part, "thought")]
    return "".join(text for text in texts if isinstance(text, str))


# Gemini responses come from the SDK, from REST payloads or from chat-style
# wrappers, so several shapes are probed in a fixed order.
TOOL_CALL_MATCHERS = (
    path_matcher("function_calls"),
    path_matcher("functionCalls"),
    path_matcher("output", "function_calls"),
    path_matcher("choices", 0, "message", "function_call", single=True),
    path_matcher("function_call", single=True),
)
TEXT_MATCHERS = (
    text_matcher("choices", 0, "message", "content"),
    candidate_parts_text,
    text_matcher("output_text"),
    text_matcher("text"),
)


class GeminiChefAdapter:
    """Adapter for the Gemini API."""

    def __init__(
        self,
        client: AsyncClient,
        model: str,
        registry: GeminiToolRegistry,
        temperature: float,
        max_tokens: int,
    ):
        """Initialize the Gemini adapter.

        Args:
            client: The async Google GenAI client (``Client(...).aio``).
            model: The vendor model name, e.g. ``gemini-1.5-flash``.
            registry: Registry whose tools are offered to the model.
            temperature: Sampling temperature.
            max_tokens: Maximum number of tokens to generate.
        """
        self.client = client
        self.model = model
        self.registry = registry
        self.temperature = temperature
        self.max_tokens = max_tokens

    def convert_history(self, history: Sequence[BaseMessage]) -> List[types.Content]:
        """
        Converts canonical history to Gemini contents.

        The system message is not part of the contents; it is sent as
        ``system_instruction``. Consecutive tool messages are merged into one
        user turn of function responses.

        Args:
            history: List of BaseMessage objects.

        Returns:
            List of Gemini Content objects.
        """
        contents: List[types.Content] = []
        for msg in history:
            if isinstance(msg, UserMessage):
                contents.append(types.Content(role="user", parts=[types.Part(text=msg.content)]))
            elif isinstance(msg, AssistantMessage):
                parts = [types.Part(text=msg.content)] if msg.content else []
                for call in msg.tool_calls or []:
                    parts.append(types.Part(function_call=types.FunctionCall(name=call.name, args=call.arguments)))
                if parts:
                    contents.append(types.Content(role="model", parts=parts))
            elif isinstance(msg, ToolMessage):
                part = self.build_tool_response_message(msg)
                previous = contents[-1] if contents else None
                if previous is not None and previous.parts and previous.parts[-1].function_response is not None:
                    previous.parts.append(part)
                else:
                    contents.append(types.Content(role="user", parts=[part]))
        return contents

    def build_tool_response_message(self, message: ToolMessage) -> types.Part:
        """Build a function response part. Tool output that is not a JSON object is wrapped as ``result``."""
        try:
            response = json.loads(message.content)
        except json.JSONDecodeError:
            response = None
        if not isinstance(response, dict):
            response = {"result": message.content}
        return types.Part(function_response=types.FunctionResponse(name=message.name, response=response))

    async def complete(
        self,
        history: Sequence[BaseMessage],
        use_tools: bool = True,
        response_schema: Optional[Dict[str, Any]] = None,
    ) -> ModelTurn:
        """Call ``generate_content`` and normalize the response.

        With a ``response_schema`` the model is asked for a JSON response at
        temperature 0. The schema is not set on the config; callers put it in the prompt.
        """
        system_instruction = next((m.content for m in history if isinstance(m, SystemMessage)), None)
        tool_obj = self.registry.tool_object if use_tools else None

        config = types.GenerateContentConfig(
            system_instruction=system_instruction or None,
            temperature=0 if response_schema is not None else self.temperature,
            max_output_tokens=self.max_tokens,
            tools=[tool_obj] if tool_obj else None,
            response_mime_type="application/json" if response_schema is not None else None,
        )

        logger.debug("Sending %d message(s) to Gemini model '%s'.", len(history), self.model)
        response = await self.client.models.generate_content(
            model=self.model,
            contents=self.convert_history(history),  # type: ignore[arg-type]
            config=config,
        )

        return ModelTurn(
            text=first_text(response, TEXT_MATCHERS),
            tool_calls=normalize_tool_calls(first_match(response, TOOL_CALL_MATCHERS)),
            raw=response,
        )

