"""Jinja2 skeleton rendering for CRUD scaffolding.

Provides the TemplateRenderer class which loads ``.j2`` skeletons from the
packaged ``crudgen/scaffolder/skeleton/`` directory (or a user supplied one)
and writes the rendered result to a destination path.  Every failure, from a
missing skeleton to an unwritable destination, surfaces as ``RenderError``.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError,
    TemplateNotFound,
    select_autoescape,
)
from pydantic import BaseModel

from .errors import RenderError


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

DEFAULT_SKELETON_DIR = Path(__file__).parent / "skeleton"

TEMPLATE_SUFFIX = ".j2"

# Skeleton catalog: the only template names the generator ever asks for.
CONTROLLER_TEMPLATE = "controller"
TEST_TEMPLATE = "tests/test"
INDEX_VIEW_TEMPLATE = "views/index"
SHOW_VIEW_TEMPLATE = "views/show"
NEW_VIEW_TEMPLATE = "views/new"
EDIT_VIEW_TEMPLATE = "views/edit"
FORM_VIEW_TEMPLATE = "views/form"


def routing_template(fmt: str) -> str:
    """Catalog name of the routing skeleton for *fmt* (``config/routing.yaml``)."""
    return f"config/routing.{fmt}"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 skeletons into files of the target bundle.

    Skeletons are addressed by catalog name without the ``.j2`` suffix, so
    ``views/index`` loads ``<skeleton_dir>/views/index.j2``.  Undefined
    variables are errors rather than blank output.
    """

    def __init__(self, skeleton_dir: str | Path | None = None) -> None:
        if skeleton_dir is None:
            skeleton_dir = DEFAULT_SKELETON_DIR
        self.skeleton_dir = Path(skeleton_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.skeleton_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        # Register custom filters
        self.env.filters["humanize"] = _humanize_filter
        self.env.filters["twig_var"] = _twig_var_filter
        self.env.filters["twig_tag"] = _twig_tag_filter

    # -- Single template rendering -----------------------------------------

    def render(self, template_name: str, context: BaseModel | Mapping[str, Any]) -> str:
        """Render the skeleton *template_name* with *context*.

        Args:
            template_name: Catalog name, e.g. ``"views/index"``.
            context: A typed template context model or a plain mapping.

        Returns:
            The rendered content.

        Raises:
            RenderError: The skeleton is missing, malformed, or references a
                variable the context does not provide.
        """
        variables = _context_vars(context)
        try:
            template = self.env.get_template(f"{template_name}{TEMPLATE_SUFFIX}")
            return template.render(**variables)
        except TemplateNotFound:
            raise RenderError(
                template_name, None, f"skeleton not found in {self.skeleton_dir}"
            ) from None
        except TemplateError as exc:
            raise RenderError(template_name, None, str(exc)) from exc

    # -- File-based rendering ----------------------------------------------

    def render_to_file(
        self,
        template_name: str,
        output_path: str | Path,
        context: BaseModel | Mapping[str, Any],
    ) -> Path:
        """Render a skeleton and write the result to *output_path*.

        Parent directories are created automatically and an existing file is
        overwritten.  Returns the output path.
        """
        out = Path(output_path)
        try:
            content = self.render(template_name, context)
        except RenderError as exc:
            raise RenderError(template_name, out, exc.reason) from exc.__cause__

        try:
            _write_file(out, content)
        except OSError as exc:
            raise RenderError(template_name, out, exc.strerror or str(exc)) from exc
        return out


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def _snake_case(value: str) -> str:
    """Convert ``SomeThing`` or ``some-thing`` to ``some_thing``."""
    s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", value)
    s2 = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1)
    return re.sub(r"[-.\s]+", "_", s2).lower()


def _humanize_filter(value: str) -> str:
    """Convert ``created_at`` or ``createdAt`` to ``Created at``."""
    words = _snake_case(value).replace("_", " ").strip()
    return words[:1].upper() + words[1:]


def _twig_var_filter(value: str) -> str:
    """Emit a Twig print statement: ``entity.id`` -> ``{{ entity.id }}``."""
    return "{{ " + value + " }}"


def _twig_tag_filter(value: str) -> str:
    """Emit a Twig tag: ``endblock`` -> ``{% endblock %}``."""
    return "{% " + value + " %}"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _context_vars(context: BaseModel | Mapping[str, Any]) -> dict[str, Any]:
    if isinstance(context, BaseModel):
        return context.model_dump(mode="json")
    return dict(context)


def _write_file(path: Path, content: str) -> None:
    """Create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
