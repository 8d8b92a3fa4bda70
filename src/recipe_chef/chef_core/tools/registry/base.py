"""Tool registry abstraction shared by every chef provider."""

import inspect
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, Union, cast

import jsonref  # type: ignore
from pydantic import create_model

from ..models import ToolDefinition
from ..schema import SchemaValidator, ToolParameterFactory
from ...exceptions import ToolNotFoundError, ToolRegistrationError, ToolValidationError
from ...logger import get_logger

logger = get_logger(__name__)


class ToolRegistry(ABC):
    """
    Holds the tools a chef offers to its model.

    Each entry maps a tool name to its handler and to the JSON schema generated
    from the handler's signature. Providers subclass this to render the
    registered tools into their own wire format through ``tool_object``.
    """

    def __init__(self) -> None:
        self.tools: Dict[str, ToolDefinition] = {}

    def register(
        self,
        tool: Union[ToolDefinition, Callable],
        name: Optional[str] = None,
        description: Optional[str] = None,
    ) -> ToolDefinition:
        """
        Register a tool handler.

        Args:
            tool: A ready ``ToolDefinition`` or a callable whose signature and
                docstring describe the tool.
            name: Optional name override; defaults to the callable's ``__name__``.
            description: Optional description override; defaults to the docstring.

        Returns:
            The registered definition.

        Raises:
            ToolRegistrationError: If a tool with the same name is already registered.
            ToolValidationError: If the handler lacks a docstring or parameter descriptions.
        """
        if isinstance(tool, ToolDefinition):
            definition = tool
        elif callable(tool):
            definition = self._generate_tool_definition(tool, name=name, description=description)
        else:
            raise ToolRegistrationError(f"Cannot register {type(tool).__name__} as a tool.")

        if definition.name in self.tools:
            msg = f"Tool '{definition.name}' is already registered."
            logger.error(msg)
            raise ToolRegistrationError(msg)

        self.tools[definition.name] = definition
        logger.debug("Registered tool '%s'.", definition.name)
        return definition

    def get(self, tool_name: str) -> ToolDefinition:
        """Look up a registered tool.

        Raises:
            ToolNotFoundError: If no tool with that name is registered.
        """
        try:
            return self.tools[tool_name]
        except KeyError:
            raise ToolNotFoundError(f"The tool {tool_name} is not implemented.") from None

    def __contains__(self, tool_name: object) -> bool:
        return tool_name in self.tools

    @property
    @abstractmethod
    def tool_object(self) -> Any:
        """The registered tools in the provider's wire format."""

    @property
    def implementations(self) -> Dict[str, Callable]:
        """Tool names mapped to their handlers."""
        return {name: tool.func for name, tool in self.tools.items()}

    def _generate_tool_definition(
        self, func: Callable, name: Optional[str] = None, description: Optional[str] = None
    ) -> ToolDefinition:
        """Build a ``ToolDefinition`` from a handler.

        Bound methods are inspected without ``self``. Every parameter must be
        annotated as ``Annotated[T, Field(description=...)]``.

        Args:
            func: The handler to describe.
            name: Optional name override.
            description: Optional description override.

        Returns:
            The definition with its sanitized, ref-free parameter schema and the
            pydantic model used to validate incoming arguments.
        """
        tool_name = name or func.__name__
        if description is None:
            description = self._get_docstring_from_func(func, tool_name)

        fields = self._build_fields(inspect.signature(func), tool_name)
        args_model = create_model(f"{tool_name}Params", **cast(Dict[str, Any], fields))
        raw_schema = args_model.model_json_schema()

        SchemaValidator.assert_no_recursive_refs(raw_schema)
        parameters = jsonref.replace_refs(raw_schema, proxies=False)
        parameters = SchemaValidator.sanitize_schema(parameters)

        return ToolDefinition(
            name=tool_name,
            description=description,
            func=func,
            parameters=parameters,
            args_model=args_model,
        )

    @staticmethod
    def _get_docstring_from_func(func: Callable, tool_name: str) -> str:
        doc = inspect.getdoc(func)
        if not doc:
            msg = f"Tool '{tool_name}' missing docstring. The model needs a description of what the tool does."
            logger.error(msg)
            raise ToolValidationError(msg)
        return doc

    @staticmethod
    def _build_fields(signature: inspect.Signature, tool_name: str) -> Dict[str, Any]:
        fields: Dict[str, Any] = {}
        for param_name, param in signature.parameters.items():
            if param_name == "self":
                continue
            ft = ToolParameterFactory.build_field_tuple(param_name=param_name, param=param, tool_name=tool_name)
            fields[param_name] = (ft.annotation, ft.field)
        return fields
