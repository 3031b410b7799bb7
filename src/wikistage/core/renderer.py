"""Page rendering.

Handlers only depend on the ``Renderer`` protocol, so any object with a
matching ``render`` method can stand in for the Jinja2 implementation.
"""

import logging
from pathlib import Path
from typing import Protocol

from jinja2 import Environment, FileSystemLoader, Template, TemplateError, select_autoescape

from wikistage.core.types import Action, Page
from wikistage.errors import RenderError

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = ".html"
REQUIRED_TEMPLATES = (Action.VIEW.value, Action.EDIT.value)


class Renderer(Protocol):
    """Turns a page and a named template into response bytes."""

    def render(self, template_name: str, page: Page) -> bytes: ...


class TemplateRenderer:
    """Renders pages with Jinja2 templates from a directory.

    Templates are looked up as ``<templates_dir>/<name>.html`` and receive the
    page as ``page``. The view and edit templates are parsed at construction
    so a missing or broken template fails at startup rather than per request.
    """

    def __init__(self, templates_dir: Path) -> None:
        """Initialize renderer.

        Args:
            templates_dir: Directory containing view.html and edit.html

        Raises:
            RenderError: If a required template is missing or invalid
        """
        self._templates_dir = templates_dir
        self._env = Environment(
            loader=FileSystemLoader(templates_dir),
            autoescape=select_autoescape(["html"]),
        )
        self._templates: dict[str, Template] = {}
        for name in REQUIRED_TEMPLATES:
            self._templates[name] = self._load(name)

    @property
    def templates_dir(self) -> Path:
        """Directory templates are loaded from."""
        return self._templates_dir

    def render(self, template_name: str, page: Page) -> bytes:
        """Render a page with the named template.

        Raises:
            RenderError: If the template is unknown or fails to render
        """
        template = self._templates.get(template_name)
        if template is None:
            template = self._load(template_name)
            self._templates[template_name] = template
        try:
            return template.render(page=page).encode("utf-8")
        except Exception as e:
            raise RenderError(f"Failed to render {template_name}: {e}") from e

    def _load(self, name: str) -> Template:
        try:
            return self._env.get_template(f"{name}{TEMPLATE_SUFFIX}")
        except TemplateError as e:
            raise RenderError(f"Failed to load template {name}: {e}") from e
