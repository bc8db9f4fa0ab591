"""Shared pytest fixtures for the crudgen test suite.

Provides reusable fixtures for:
- Temporary bundle directories
- Sample entity metadata (valid and invalid identifiers)
- A mock TemplateRenderer that records render calls
- A sample metadata file on disk
"""

from __future__ import annotations

import textwrap
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from crudgen.scaffolder.models import Bundle, EntityMetadata
from crudgen.scaffolder.templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Bundles
# ---------------------------------------------------------------------------

@pytest.fixture
def bundle_dir(tmp_path: Path) -> Path:
    """Empty bundle root directory under ``tmp_path``."""
    root = tmp_path / "src" / "Acme" / "BlogBundle"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def bundle(bundle_dir: Path) -> Bundle:
    """A bundle rooted at ``bundle_dir``."""
    return Bundle(name="AcmeBlogBundle", namespace="Acme.BlogBundle", path=bundle_dir)


# ---------------------------------------------------------------------------
# Entity metadata
# ---------------------------------------------------------------------------

@pytest.fixture
def post_metadata() -> EntityMetadata:
    """Metadata of a ``Blog.Post`` entity with a single ``id`` identifier."""
    return EntityMetadata(
        fields={
            "id": "integer",
            "title": "string",
            "body": "text",
            "published_at": "datetime",
        },
        identifier=["id"],
    )


@pytest.fixture
def composite_key_metadata() -> EntityMetadata:
    """Metadata with a two-column identifier."""
    return EntityMetadata(
        fields={"post_id": "integer", "tag_id": "integer"},
        identifier=["post_id", "tag_id"],
    )


@pytest.fixture
def uuid_key_metadata() -> EntityMetadata:
    """Metadata whose single identifier is not named ``id``."""
    return EntityMetadata(fields={"uuid": "guid", "name": "string"}, identifier=["uuid"])


@pytest.fixture
def metadata_file(tmp_path: Path) -> Path:
    """A YAML metadata file for ``Blog.Post``."""
    path = tmp_path / "post.yaml"
    path.write_text(
        textwrap.dedent(
            """\
            identifier: id
            fields:
              id: integer
              title: string
              body: text
              published_at: datetime
            """
        ),
        encoding="utf-8",
    )
    return path


# ---------------------------------------------------------------------------
# Renderer doubles
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_renderer() -> MagicMock:
    """A mock TemplateRenderer that writes a stub file per render_to_file call."""
    renderer = MagicMock(spec=TemplateRenderer)

    def mock_render_to_file(template_name: str, output_path, context):
        out = Path(output_path)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(f"# Rendered from {template_name}\n", encoding="utf-8")
        return out

    renderer.render_to_file = MagicMock(side_effect=mock_render_to_file)
    return renderer

