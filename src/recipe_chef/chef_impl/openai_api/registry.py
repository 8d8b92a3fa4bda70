from typing import Any, Dict, List, Optional

from recipe_chef.chef_core import ToolRegistry


class OpenAIToolRegistry(ToolRegistry):
    """
    Tool registry rendering tools in the OpenAI function-calling format.

    Ollama's chat API accepts the same format, so the Ollama chef uses this
    registry as well.
    """

    @property
    def tool_object(self) -> Optional[List[Dict[str, Any]]]:
        """
        The registered tools as ``{"type": "function", "function": {...}}`` entries.

        Returns:
            A list of tool dictionaries, or None if no tools are registered.
        """
        if not self.tools:
            return None

        tools_list = []
        for tool in self.tools.values():
            tools_list.append(
                {
                    "type": "function",
                    "function": {
                        "name": tool.name,
                        "description": tool.description,
                        "parameters": tool.parameters or {"type": "object", "properties": {}},
                    },
                }
            )
        return tools_list
