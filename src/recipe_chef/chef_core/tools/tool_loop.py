"""The model/tool round-trip loop shared by every chef."""

from __future__ import annotations

import asyncio
import inspect
import json
from typing import Any, Dict, List

from pydantic import ValidationError

from ..exceptions import ToolExecutionError
from ..logger import get_logger
from ..messages import AssistantMessage, BaseMessage, ToolMessage
from .adapter import ProviderAdapter
from .models import ToolCallRequest, ToolCallResult
from .registry import ToolRegistry

logger = get_logger(__name__)

DEFAULT_MAX_TOOL_ROUNDS = 5


class ToolExecutionLoop:
    """Drives one chat turn: call the model, dispatch requested tools, call again.

    The loop appends every assistant turn and every tool result to the
    canonical history it is given. It stops when the model answers without
    tool calls, when a model call fails, or after ``max_tool_rounds`` model
    calls. Tool calls of one turn are executed one at a time in the order the
    model emitted them, since a later handler may reuse the result of an
    earlier one.
    """

    def __init__(self, *, registry: ToolRegistry, max_tool_rounds: int = DEFAULT_MAX_TOOL_ROUNDS) -> None:
        """Initialize the loop.

        Args:
            registry: Registry resolving tool names to handlers.
            max_tool_rounds: Maximum number of model calls per turn.
        """
        if max_tool_rounds < 1:
            raise ValueError("max_tool_rounds must be at least 1.")
        self._registry = registry
        self._max_tool_rounds = max_tool_rounds

    @property
    def max_tool_rounds(self) -> int:
        return self._max_tool_rounds

    async def run(self, *, adapter: ProviderAdapter, history: List[BaseMessage]) -> str:
        """Run the loop until the model stops requesting tools.

        Args:
            adapter: The provider adapter used for model calls.
            history: Canonical history, extended in place.

        Returns:
            The final assistant text. When the round cap is hit, the text of the
            last model turn, which may be empty. On a failed model call, the
            most recent non-empty text seen during the turn.
        """
        last_text = ""
        turn_text = ""

        for round_index in range(self._max_tool_rounds):
            try:
                turn = await adapter.complete(history)
            except Exception as exc:
                logger.error("Model call failed on round %d: %s", round_index + 1, exc, exc_info=True)
                return last_text

            turn_text = turn.text
            if turn.text:
                last_text = turn.text

            history.append(AssistantMessage(content=turn.text, tool_calls=list(turn.tool_calls) or None))

            if not turn.tool_calls:
                logger.debug("Model answered without tool calls on round %d.", round_index + 1)
                return turn.text

            logger.info(
                "Round %d/%d: dispatching %d tool call(s).",
                round_index + 1,
                self._max_tool_rounds,
                len(turn.tool_calls),
            )
            failures = 0
            for tool_call in turn.tool_calls:
                result = await self._handle_tool_call(tool_call)
                failures += result.failed
                history.append(
                    ToolMessage(
                        content=json.dumps(result.response, default=str),
                        tool_call_id=result.call_id or result.name,
                        name=result.name,
                    )
                )
            if failures:
                logger.warning(
                    "Round %d: %d of %d tool call(s) failed.", round_index + 1, failures, len(turn.tool_calls)
                )

        logger.warning("Max tool rounds (%d) reached. Returning the last model text.", self._max_tool_rounds)
        return turn_text

    async def _handle_tool_call(self, tool_call: ToolCallRequest) -> ToolCallResult:
        """Validate and execute one tool call, turning every failure into an error result."""
        logger.debug("Handling tool call %s (id %s).", tool_call.name, tool_call.call_id)

        tool_def = self._registry.tools.get(tool_call.name)
        if tool_def is None:
            msg = f"The tool {tool_call.name} is not implemented."
            logger.warning(msg)
            return ToolCallResult(name=tool_call.name, response={"error": msg}, call_id=tool_call.call_id)

        function_args: Dict[str, Any] = dict(tool_call.arguments)
        if tool_def.args_model:
            try:
                function_args = dict(tool_def.args_model(**function_args))
            except ValidationError as exc:
                msg = f"Argument validation failed: {exc}"
                logger.warning("Validation error for '%s': %s", tool_call.name, msg)
                return ToolCallResult(name=tool_call.name, response={"error": msg}, call_id=tool_call.call_id)

        try:
            function_result = await self._execute_tool(tool_call.name, tool_def.func, function_args)
        except ToolExecutionError as exc:
            logger.warning(str(exc), exc_info=True)
            return ToolCallResult(name=tool_call.name, response={"error": str(exc)}, call_id=tool_call.call_id)

        logger.info("Tool '%s' executed successfully.", tool_call.name)
        return ToolCallResult(name=tool_call.name, response={"result": function_result}, call_id=tool_call.call_id)

    @staticmethod
    async def _execute_tool(tool_name: str, tool_function: Any, function_args: Dict[str, Any]) -> Any:
        """
        Raises:
            ToolExecutionError: Wrapping whatever the handler raised.
        """
        try:
            if inspect.iscoroutinefunction(tool_function):
                return await tool_function(**function_args)
            return await asyncio.to_thread(tool_function, **function_args)
        except Exception as exc:
            raise ToolExecutionError(f"Error executing {tool_name}: {exc}") from exc
