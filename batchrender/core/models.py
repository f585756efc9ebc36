"""Domain models for template discovery, rendering and generation results."""

from __future__ import annotations

from pathlib import Path
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Recursive value type of a rendering context.
ContextValue = Union[
    None, bool, int, float, str, list["ContextValue"], dict[str, "ContextValue"]
]
Context = dict[str, ContextValue]


class TemplateRef(BaseModel):
    """A discovered template."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="Extension-less, root-relative template key")
    source_path: Path = Field(..., description="Template file path")
    is_multi: bool = Field(default=False, description="Renders to several files")


class MultiFileEntry(BaseModel):
    """One output file extracted from a multi-output template."""

    model_config = ConfigDict(frozen=True)

    output_path: str = Field(..., description="Output path relative to the root")
    content: str = Field(default="", description="Post-processed file content")
    dedent: bool = False
    trim: bool = False


class FailureRecord(BaseModel):
    """A template that could not be generated."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    template_key: str
    cause: Exception


class GenerationResult(BaseModel):
    """Outcome of generating a single template."""

    template_key: str
    outputs: list[Path] = Field(default_factory=list)
    failure: FailureRecord | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None


class GenerateConfig(BaseModel):
    """Configuration for a generation run."""

    input_path: Path = Field(
        default_factory=Path.cwd, description="Template file or directory"
    )
    output_path: Path = Field(
        default_factory=Path.cwd, description="Base output directory"
    )
    context_path: Path | None = Field(default=None, description="Base context file")
    relative_context_path: str | None = Field(
        default=None, description="Local context file name, relative to each template"
    )
    input_extension: str = Field(default="edge", min_length=1)
    output_extension: str = Field(default="html", min_length=1)
    skip_output_extension: bool = False
    escape_output: bool = True
    concurrency: int = Field(default=5, gt=0, description="In-flight template limit")

    @field_validator("input_extension", "output_extension")
    @classmethod
    def _strip_leading_dot(cls, value: str) -> str:
        stripped = value.lstrip(".")
        if not stripped:
            raise ValueError("extension must not be empty")
        return stripped
