import inspect
from typing import Annotated, Any, NamedTuple, Optional, get_args, get_origin

from pydantic import Field
from pydantic.fields import FieldInfo

from ...exceptions import ToolValidationError
from ...logger import get_logger

logger = get_logger(__name__)


class FieldTuple(NamedTuple):
    """An ``(annotation, FieldInfo)`` pair as accepted by pydantic's ``create_model``."""

    annotation: Any
    field: FieldInfo


class ToolParameterFactory:
    """Turns one tool handler parameter into a pydantic field definition.

    Every parameter the model fills in must say what it is for, so handlers
    declare them as ``Annotated[T, Field(description=...)]``.
    """

    @classmethod
    def build_field_tuple(cls, param_name: str, param: inspect.Parameter, tool_name: str) -> FieldTuple:
        """Creates the field definition for a single handler parameter.

        Args:
            param_name: The name of the parameter.
            param: The parameter as reported by ``inspect.signature``.
            tool_name: The tool being registered, for error reporting.

        Returns:
            The annotation and a Field carrying the default and description.

        Raises:
            ToolValidationError: If the parameter has no described Field.
        """
        description = cls.find_description(param.annotation)
        if description is None:
            msg = (
                f"Tool '{tool_name}' parameter '{param_name}' needs a description: "
                f"declare it as {param_name}: Annotated[<type>, Field(description='...')]"
            )
            logger.error(msg)
            raise ToolValidationError(msg)

        default = ... if param.default is inspect.Parameter.empty else param.default
        return FieldTuple(param.annotation, Field(default=default, description=description))

    @staticmethod
    def find_description(annotation: Any) -> Optional[str]:
        """The first non-empty ``Field`` description in ``Annotated`` metadata, if any."""
        if get_origin(annotation) is not Annotated:
            return None
        return next(
            (item.description for item in get_args(annotation)[1:] if isinstance(item, FieldInfo) and item.description),
            None,
        )
