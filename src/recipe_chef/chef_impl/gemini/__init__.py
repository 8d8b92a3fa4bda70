from .core import GeminiChef
from .adapter import GeminiChefAdapter
from .registry import GeminiToolRegistry

__all__ = ["GeminiChef", "GeminiChefAdapter", "GeminiToolRegistry"]
