"""Background jobs over the recipe collection."""

from .compute_vectors import run_computation
from .tag_recipes import extend_dictionary, tag

__all__ = ["run_computation", "extend_dictionary", "tag"]
