"""Batch generation of all discovered templates."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import anyio

from ..context.loader import load_context
from ..context.merge import merge
from ..core.errors import BatchGenerationError, WriteError
from ..core.models import (
    Context,
    FailureRecord,
    GenerateConfig,
    GenerationResult,
    TemplateRef,
)
from .engine import Renderer
from .io import write_output
from .splitter import split_multi_output

logger = logging.getLogger(__name__)


def single_output_path(template: TemplateRef, config: GenerateConfig) -> str:
    """Output path of a single-output template, relative to the output root."""
    if config.skip_output_extension:
        return template.key
    return f"{template.key}.{config.output_extension}"


async def resolve_context(
    template: TemplateRef, base_context: Context, config: GenerateConfig
) -> Context:
    """Build the effective context for a template.

    Args:
        template: Template being generated
        base_context: Run-wide context
        config: Generation configuration

    Returns:
        Base context, with the template's local context merged on top when
        ``relative_context_path`` is configured and present
    """
    if not config.relative_context_path:
        return base_context

    local_path = template.source_path.parent / config.relative_context_path
    if not await anyio.Path(local_path).exists():
        logger.debug(f"No local context for {template.key} at {local_path}")
        return merge(base_context, {})

    local_context = await load_context(local_path)
    return merge(base_context, local_context)


async def _write_multi(
    template: TemplateRef, rendered: str, config: GenerateConfig
) -> list[Path]:
    entries = split_multi_output(rendered, source=str(template.source_path))
    outputs: list[Path] = []
    errors: list[WriteError] = []

    for entry in entries:
        try:
            outputs.append(
                await write_output(
                    config.output_path,
                    entry.output_path,
                    entry.content,
                    source=template.source_path,
                )
            )
        except WriteError as e:
            logger.error(str(e))
            errors.append(e)

    if errors:
        raise WriteError(
            f"Failed to write {len(errors)} of {len(entries)} file(s) "
            f"for {template.key}"
        ) from errors[0]
    return outputs


async def generate_template(
    template: TemplateRef,
    base_context: Context,
    *,
    renderer: Renderer,
    config: GenerateConfig,
) -> GenerationResult:
    """Generate the output file(s) of one template.

    Errors are captured in the returned result rather than raised.
    """
    try:
        context = await resolve_context(template, base_context, config)
        rendered = await renderer.render(template.key, context)
        if template.is_multi:
            outputs = await _write_multi(template, rendered, config)
        else:
            outputs = [
                await write_output(
                    config.output_path,
                    single_output_path(template, config),
                    rendered,
                    source=template.source_path,
                )
            ]
    except Exception as e:
        logger.error(f"Failure generating {template.key}: {e}", exc_info=e)
        return GenerationResult(
            template_key=template.key,
            failure=FailureRecord(template_key=template.key, cause=e),
        )

    return GenerationResult(template_key=template.key, outputs=outputs)


async def generate_all(
    templates: Sequence[TemplateRef],
    base_context: Context,
    *,
    renderer: Renderer,
    config: GenerateConfig,
) -> list[GenerationResult]:
    """Generate all templates with bounded concurrency.

    A failing template never stops the others. Once every template has been
    processed, failures are raised together.

    Args:
        templates: Templates to generate
        base_context: Run-wide context
        renderer: Template renderer
        config: Generation configuration

    Returns:
        One result per template, in input order

    Raises:
        BatchGenerationError: If any template failed
    """
    logger.info(f"Generating {len(templates)} template(s)")

    limiter = anyio.CapacityLimiter(config.concurrency)
    results: list[GenerationResult | None] = [None] * len(templates)

    async def _run(index: int, template: TemplateRef) -> None:
        async with limiter:
            results[index] = await generate_template(
                template, base_context, renderer=renderer, config=config
            )

    async with anyio.create_task_group() as tg:
        for index, template in enumerate(templates):
            tg.start_soon(_run, index, template)

    completed = [result for result in results if result is not None]
    failures = [result.failure for result in completed if result.failure is not None]
    if failures:
        raise BatchGenerationError(failures)

    written = sum(len(result.outputs) for result in completed)
    logger.info(f"Successfully generated {written} file(s)")
    return completed
