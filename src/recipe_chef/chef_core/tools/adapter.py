"""Protocol for adapting provider-specific model calls to the generic tool loop."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional, Protocol, Sequence

from .models import ModelTurn

if TYPE_CHECKING:
    from ..messages import BaseMessage, ToolMessage


class ProviderAdapter(Protocol):
    """
    Protocol for translating the canonical history into a vendor call and back.

    The canonical history stays provider-agnostic; every adapter renders it into
    its own wire format on each call.
    """

    def convert_history(self, history: Sequence[BaseMessage]) -> List[Any]:
        """Renders canonical messages into provider-specific messages."""
        ...

    def build_tool_response_message(self, message: ToolMessage) -> Any:
        """Converts a canonical tool message into a provider-specific message."""
        ...

    async def complete(
        self,
        history: Sequence[BaseMessage],
        use_tools: bool = True,
        response_schema: Optional[Dict[str, Any]] = None,
    ) -> ModelTurn:
        """Calls the model with the rendered history and normalizes its response.

        When ``response_schema`` is given the model is asked for JSON matching
        it, at temperature 0.
        """
        ...
