"""Core models and errors."""

from .errors import (
    BatchGenerationError,
    BatchRenderError,
    ContextError,
    DiscoveryError,
    DuplicateTemplateKeyError,
    InvalidInputError,
    MalformedMultiOutputError,
    NoInputError,
    ParseError,
    ReadError,
    UnsupportedFormatError,
    WriteError,
)
from .models import (
    Context,
    ContextValue,
    FailureRecord,
    GenerateConfig,
    GenerationResult,
    MultiFileEntry,
    TemplateRef,
)

__all__ = [
    "BatchGenerationError",
    "BatchRenderError",
    "Context",
    "ContextError",
    "ContextValue",
    "DiscoveryError",
    "DuplicateTemplateKeyError",
    "FailureRecord",
    "GenerateConfig",
    "GenerationResult",
    "InvalidInputError",
    "MalformedMultiOutputError",
    "MultiFileEntry",
    "NoInputError",
    "ParseError",
    "ReadError",
    "TemplateRef",
    "UnsupportedFormatError",
    "WriteError",
]
