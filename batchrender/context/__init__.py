"""Context loading and merging."""

from .loader import load_context, parse_context
from .merge import merge

__all__ = ["load_context", "merge", "parse_context"]
