"""Exception hierarchy for batch rendering."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from .models import FailureRecord


class BatchRenderError(Exception):
    """Base class for all errors raised by batchrender."""


class ContextError(BatchRenderError):
    """Raised when a context file cannot be loaded."""


class ReadError(ContextError):
    """Raised when a context file cannot be read."""


class ParseError(ContextError):
    """Raised when a context file cannot be parsed."""


class UnsupportedFormatError(ContextError):
    """Raised when a context file has an unknown extension."""


class DiscoveryError(BatchRenderError):
    """Raised when templates cannot be discovered."""


class InvalidInputError(DiscoveryError):
    """Raised when the input path is neither a file nor a directory."""


class DuplicateTemplateKeyError(InvalidInputError):
    """Raised when two template files resolve to the same key."""


class NoInputError(DiscoveryError):
    """Raised when no templates could be found."""


class MalformedMultiOutputError(BatchRenderError):
    """Raised when rendered multi-output text is not in the expected format."""


class WriteError(BatchRenderError):
    """Raised when an output file cannot be written."""


class BatchGenerationError(BatchRenderError):
    """Raised after a run in which at least one template failed."""

    def __init__(self, failures: Sequence[FailureRecord]) -> None:
        self.failures = list(failures)
        super().__init__(f"Failed to generate: {', '.join(self.failed_keys)}")

    @property
    def failed_keys(self) -> list[str]:
        return [failure.template_key for failure in self.failures]
