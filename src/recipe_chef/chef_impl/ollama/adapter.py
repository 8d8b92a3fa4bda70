"""Translate the canonical history to Ollama chat calls and back."""

import dataclasses
import uuid
from typing import Any, Dict, List, Optional, Sequence

from ollama import AsyncClient

from recipe_chef.chef_core import (
    AssistantMessage,
    BaseMessage,
    ModelTurn,
    SystemMessage,
    ToolCallRequest,
    ToolMessage,
    UserMessage,
    get_logger,
)
from recipe_chef.chef_core.tools.normalizer import (
    field,
    first_match,
    first_text,
    normalize_tool_call,
    path_matcher,
    text_matcher,
)
from ..openai_api.registry import OpenAIToolRegistry

logger = get_logger(__name__)

TOOL_CALL_MATCHERS = (path_matcher("message", "tool_calls"),)
TEXT_MATCHERS = (text_matcher("message", "content"),)


class OllamaChefAdapter:
    """Adapter for a local Ollama server."""

    def __init__(
        self,
        client: AsyncClient,
        model: str,
        registry: OpenAIToolRegistry,
        temperature: float,
        max_tokens: int,
    ):
        self.client = client
        self.model = model
        self.registry = registry
        self.temperature = temperature
        self.max_tokens = max_tokens

    def convert_history(self, history: Sequence[BaseMessage]) -> List[Dict[str, Any]]:
        messages: List[Dict[str, Any]] = []
        for msg in history:
            if isinstance(msg, SystemMessage):
                messages.append({"role": "system", "content": msg.content})
            elif isinstance(msg, UserMessage):
                messages.append({"role": "user", "content": msg.content})
            elif isinstance(msg, AssistantMessage):
                ollama_msg: Dict[str, Any] = {"role": "assistant", "content": msg.content}
                if msg.tool_calls:
                    ollama_msg["tool_calls"] = [
                        {"function": {"name": call.name, "arguments": call.arguments}} for call in msg.tool_calls
                    ]
                messages.append(ollama_msg)
            elif isinstance(msg, ToolMessage):
                messages.append(self.build_tool_response_message(msg))
        return messages

    def build_tool_response_message(self, message: ToolMessage) -> Dict[str, Any]:
        return {"role": "tool", "content": message.content, "tool_name": message.name}

    async def complete(
        self,
        history: Sequence[BaseMessage],
        use_tools: bool = True,
        response_schema: Optional[Dict[str, Any]] = None,
    ) -> ModelTurn:
        """Call the chat endpoint. A ``response_schema`` is passed as the structured output ``format``."""
        tools = self.registry.tool_object if use_tools else None
        temperature = 0 if response_schema is not None else self.temperature

        logger.debug("Sending %d message(s) to Ollama model '%s'.", len(history), self.model)
        response = await self.client.chat(
            model=self.model,
            messages=self.convert_history(history),
            tools=tools,
            format=response_schema,
            options={"temperature": temperature, "num_predict": self.max_tokens},
        )

        tool_calls = []
        for index, raw in enumerate(first_match(response, TOOL_CALL_MATCHERS)):
            call = normalize_tool_call(raw, index)
            if call is not None:
                tool_calls.append(self._with_call_id(call, raw))
        return ModelTurn(text=first_text(response, TEXT_MATCHERS), tool_calls=tool_calls, raw=response)

    @staticmethod
    def _with_call_id(call: ToolCallRequest, raw: Any) -> ToolCallRequest:
        """Ollama tool calls carry no id; give each one a fresh id for correlation."""
        if field(raw, "id"):
            return call
        return dataclasses.replace(call, call_id=f"call_{uuid.uuid4().hex[:12]}")
