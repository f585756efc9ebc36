"""End-to-end generation run."""

from __future__ import annotations

import logging

from .context.loader import load_context
from .core.models import GenerateConfig, GenerationResult
from .rendering.discovery import discover_templates
from .rendering.engine import TemplateRenderer
from .rendering.orchestrator import generate_all

logger = logging.getLogger(__name__)


async def generate(config: GenerateConfig) -> list[GenerationResult]:
    """Discover, render and write every template described by the configuration.

    Discovery and base context errors abort the run before anything is
    rendered. Per-template errors are collected and raised at the end as a
    BatchGenerationError.

    Args:
        config: Generation configuration

    Returns:
        One result per template
    """
    renderer = TemplateRenderer(
        escape_output=config.escape_output,
        template_extension=config.input_extension,
    )
    templates = discover_templates(
        config.input_path, config.input_extension, renderer=renderer
    )
    base_context = await load_context(config.context_path)
    logger.debug(f"Base context keys: {sorted(base_context)}")

    return await generate_all(
        templates, base_context, renderer=renderer, config=config
    )
