from .core import OllamaChef
from .adapter import OllamaChefAdapter

__all__ = ["OllamaChef", "OllamaChefAdapter"]
