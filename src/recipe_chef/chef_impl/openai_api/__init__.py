"""Expose the OpenAI-backed chef, its adapter and its tool registry."""

from .core import GPTChef
from .adapter import OpenAIChefAdapter
from .registry import OpenAIToolRegistry

__all__ = ["GPTChef", "OpenAIChefAdapter", "OpenAIToolRegistry"]
