"""Template discovery, rendering and output generation."""

from .discovery import discover_templates
from .engine import Renderer, TemplateRenderer
from .io import write_output
from .orchestrator import generate_all, generate_template
from .splitter import split_multi_output

__all__ = [
    "Renderer",
    "TemplateRenderer",
    "discover_templates",
    "generate_all",
    "generate_template",
    "split_multi_output",
    "write_output",
]
