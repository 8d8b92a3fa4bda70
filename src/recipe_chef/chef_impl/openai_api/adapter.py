"""Translate the canonical history to OpenAI chat completions and back."""

import json
from typing import Any, Dict, List, Optional, Sequence

from openai import AsyncOpenAI

from recipe_chef.chef_core import (
    AssistantMessage,
    BaseMessage,
    ModelCallError,
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
from .registry import OpenAIToolRegistry

logger = get_logger(__name__)

TOOL_CALL_MATCHERS = (path_matcher("choices", 0, "message", "tool_calls"),)
TEXT_MATCHERS = (text_matcher("choices", 0, "message", "content"),)
RESPONSE_SCHEMA_NAME = "structured_response"


class OpenAIChefAdapter:
    """Adapter for the OpenAI chat completions API."""

    def __init__(
        self,
        client: AsyncOpenAI,
        model: str,
        registry: OpenAIToolRegistry,
        temperature: float,
        max_tokens: int,
    ):
        """Initialize the OpenAI adapter.

        Args:
            client: The OpenAI client instance.
            model: The vendor model name, e.g. ``gpt-4o-mini``.
            registry: Registry whose tools are offered to the model.
            temperature: Sampling temperature.
            max_tokens: Maximum number of tokens to generate.
        """
        self.client = client
        self.model = model
        self.registry = registry
        self.temperature = temperature
        self.max_tokens = max_tokens

    def convert_history(self, history: Sequence[BaseMessage]) -> List[Dict[str, Any]]:
        """
        Converts canonical history to OpenAI message dictionaries.

        Args:
            history: List of BaseMessage objects.

        Returns:
            List of OpenAI message dictionaries.
        """
        openai_history: List[Dict[str, Any]] = []
        for msg in history:
            if isinstance(msg, SystemMessage):
                openai_history.append({"role": "system", "content": msg.content})
            elif isinstance(msg, UserMessage):
                openai_history.append({"role": "user", "content": msg.content})
            elif isinstance(msg, AssistantMessage):
                openai_msg: Dict[str, Any] = {"role": "assistant", "content": msg.content}
                if msg.tool_calls:
                    openai_msg["content"] = msg.content or None
                    openai_msg["tool_calls"] = [
                        {
                            "id": call.call_id or call.name,
                            "type": "function",
                            "function": {"name": call.name, "arguments": json.dumps(call.arguments)},
                        }
                        for call in msg.tool_calls
                    ]
                openai_history.append(openai_msg)
            elif isinstance(msg, ToolMessage):
                openai_history.append(self.build_tool_response_message(msg))
        return openai_history

    def build_tool_response_message(self, message: ToolMessage) -> Dict[str, Any]:
        """Build a tool response message correlated by ``tool_call_id``."""
        return {"role": "tool", "tool_call_id": message.tool_call_id, "content": message.content}

    async def complete(
        self,
        history: Sequence[BaseMessage],
        use_tools: bool = True,
        response_schema: Optional[Dict[str, Any]] = None,
    ) -> ModelTurn:
        """Call the chat completions API and normalize the response.

        A ``response_schema`` is sent as a non-strict JSON schema response
        format and the call runs at temperature 0.

        Raises:
            ModelCallError: If the response has no choices.
        """
        request: Dict[str, Any] = {
            "model": self.model,
            "messages": self.convert_history(history),
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }
        tools = self.registry.tool_object if use_tools else None
        if tools:
            request["tools"] = tools
        if response_schema is not None:
            request["temperature"] = 0
            request["response_format"] = {
                "type": "json_schema",
                "json_schema": {"name": RESPONSE_SCHEMA_NAME, "strict": False, "schema": response_schema},
            }

        logger.debug("Sending %d message(s) to OpenAI model '%s'.", len(history), self.model)
        response = await self.client.chat.completions.create(**request)

        if not field(response, "choices"):
            raise ModelCallError("OpenAI returned a response without choices.")

        raw_calls = [
            call for call in first_match(response, TOOL_CALL_MATCHERS) if field(call, "type") in (None, "function")
        ]
        return ModelTurn(
            text=first_text(response, TEXT_MATCHERS),
            tool_calls=normalize_tool_calls(raw_calls),
            raw=response,
        )
