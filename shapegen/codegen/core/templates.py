"""
Jinja2 rendering for generated client modules.

Every section of a generated module comes from a `.py.j2` template in
`shapegen/codegen/templates`.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateNotFound

from .naming import escape_doc, to_snake_case

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


class TemplateError(Exception):
    """A template is missing or failed to render."""

    pass


class TemplateEngine:
    """Renders module sections with naming filters installed."""

    def __init__(self, template_dir: Optional[Path] = None):
        self.template_dir = template_dir or TEMPLATE_DIR
        self._env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        self._env.filters.update(
            snake_case=to_snake_case,
            doc=escape_doc,
        )

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render one of the bundled templates.

        Args:
            template_name: File name under the template directory
            context: Names visible to the template

        Returns:
            Rendered source text

        Raises:
            TemplateError: If the template is missing or rendering fails
        """
        try:
            return self._env.get_template(template_name).render(**context)
        except TemplateNotFound as e:
            raise TemplateError(f"Template not found: {template_name}") from e
        except Exception as e:
            raise TemplateError(f"Failed to render {template_name}: {e}") from e


def create_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    """Create a template engine, defaulting to the bundled templates."""
    return TemplateEngine(template_dir)
