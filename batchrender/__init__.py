"""Batchrender - batch template renderer with multi-file outputs.

Renders every template of a directory tree against a merged JSON/YAML
context, writing one file per template or several files per multi-output
template.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Re-export main CLI entry point
from .cli import main

__all__ = ["main"]
