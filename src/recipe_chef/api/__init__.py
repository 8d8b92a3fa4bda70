"""HTTP surface of the recipe chef service."""

from .app import create_app, get_app, main
from .routes import router

__all__ = ["create_app", "get_app", "main", "router"]
