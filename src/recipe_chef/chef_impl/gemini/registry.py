"""Render registered tools as Gemini function declarations."""

from typing import Optional

from google.genai import types

from recipe_chef.chef_core import ToolRegistry
from .schema_sanitizer import sanitize


class GeminiToolRegistry(ToolRegistry):
    """
    A ToolRegistry for Google Gemini models.

    Gemini takes all function declarations bundled in a single ``types.Tool``.
    """

    @property
    def tool_object(self) -> Optional[types.Tool]:
        """
        Generates a ``types.Tool`` holding every registered function declaration.

        Returns:
            The tool, or None if no tools are registered.
        """
        if not self.tools:
            return None

        declarations = []
        for tool in self.tools.values():
            if tool.parameters:
                declarations.append(
                    types.FunctionDeclaration(
                        name=tool.name, description=tool.description, parameters=sanitize(tool.parameters)
                    )
                )
            else:
                declarations.append(types.FunctionDeclaration(name=tool.name, description=tool.description))

        return types.Tool(function_declarations=declarations)
