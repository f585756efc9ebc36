"""Template rendering engine."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

import anyio.to_thread
from jinja2 import ChoiceLoader, DictLoader, Environment, FileSystemLoader, StrictUndefined

from ..core.models import Context

logger = logging.getLogger(__name__)


class Renderer(Protocol):
    """Anything that can render a template key against a context."""

    async def render(self, key: str, context: Context) -> str: ...


def create_environment(*, escape_output: bool = True) -> Environment:
    """Create the Jinja2 environment used for rendering.

    Args:
        escape_output: Whether rendered expressions are HTML-escaped

    Returns:
        Async-enabled Jinja2 environment without a loader
    """
    return Environment(
        undefined=StrictUndefined,
        autoescape=escape_output,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        enable_async=True,
    )


class TemplateRenderer:
    """Jinja2-backed renderer resolving templates by key.

    Templates are looked up among explicitly registered sources first, then
    as ``<key>.<template_extension>`` under the mounted directories.
    """

    def __init__(
        self, *, escape_output: bool = True, template_extension: str = "edge"
    ) -> None:
        self.template_extension = template_extension.lstrip(".")
        self.environment = create_environment(escape_output=escape_output)
        self._registered = DictLoader({})
        self._roots: list[str] = []
        self._update_loader()

    @property
    def escape_output(self) -> bool:
        return bool(self.environment.autoescape)

    def _update_loader(self) -> None:
        self.environment.loader = ChoiceLoader(
            [self._registered, FileSystemLoader(self._roots)]
        )

    def mount(self, root: Path) -> None:
        """Register a directory as a template lookup root."""
        resolved = str(root.resolve())
        if resolved not in self._roots:
            self._roots.append(resolved)
            self._update_loader()
        logger.debug(f"Mounted template root: {resolved}")

    def register_template(self, key: str, source: str) -> None:
        """Register in-memory template source under a key."""
        self._registered.mapping[key] = source
        logger.debug(f"Registered template: {key}")

    def template_name(self, key: str) -> str:
        if key in self._registered.mapping:
            return key
        return f"{key}.{self.template_extension}"

    async def render(self, key: str, context: Context) -> str:
        """Render the template identified by key.

        Args:
            key: Template key
            context: Effective context for this template

        Returns:
            Rendered text
        """
        # Loading reads and compiles the source file
        template = await anyio.to_thread.run_sync(
            self.environment.get_template, self.template_name(key)
        )
        return await template.render_async(context)
