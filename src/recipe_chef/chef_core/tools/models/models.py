from typing import Optional, Any, Callable, Type
from pydantic import BaseModel


class ToolDefinition(BaseModel):
    """
    Represents the definition of a tool that can be offered to a chef's model.

    Attributes:
        name: The unique name of the tool.
        description: A brief description of what the tool does.
        func: The callable (usually a bound chef method) that implements the tool's logic.
        parameters: A JSON schema defining the input parameters for the tool's function.
        args_model: Optional Pydantic model used for validating and coercing arguments.
    """

    name: str
    description: str
    func: Callable
    parameters: Optional[Any] = None
    args_model: Optional[Type[BaseModel]] = None
