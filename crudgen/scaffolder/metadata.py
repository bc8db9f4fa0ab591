"""File-based entity metadata provider.

Reads an entity description from a YAML or JSON file::

    # post.yaml
    identifier: id
    fields:
      id: integer
      title: string
      body: text
      published_at: datetime

``fields`` may also be a list of ``{name, type}`` mappings, which keeps the
declared order in formats without ordered mappings.  ``identifier`` may be a
single name or a list and defaults to ``["id"]``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .errors import MetadataError
from .models import EntityMetadata

_YAML_SUFFIXES = {".yaml", ".yml"}


def load_metadata(path: str | Path) -> EntityMetadata:
    """Load an ``EntityMetadata`` from a YAML or JSON file.

    Raises:
        MetadataError: The file is missing, unparsable, or has the wrong shape.
    """
    source = Path(path)
    try:
        raw = source.read_text(encoding="utf-8")
    except OSError as exc:
        raise MetadataError(source, exc.strerror or str(exc)) from exc

    try:
        if source.suffix.lower() in _YAML_SUFFIXES:
            data = yaml.safe_load(raw)
        else:
            data = json.loads(raw)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise MetadataError(source, f"cannot parse file: {exc}") from exc

    return metadata_from_dict(data, source)


def metadata_from_dict(data: Any, source: str | Path = "<dict>") -> EntityMetadata:
    """Build an ``EntityMetadata`` from already-parsed data."""
    source = Path(source)
    if not isinstance(data, dict):
        raise MetadataError(source, "top-level value must be a mapping")

    identifier = data.get("identifier", ["id"])
    if isinstance(identifier, str):
        identifier = [identifier]

    try:
        return EntityMetadata(
            fields=_normalize_fields(data.get("fields") or {}, source),
            identifier=identifier,
        )
    except ValidationError as exc:
        raise MetadataError(source, str(exc)) from exc


def _normalize_fields(fields: Any, source: Path) -> dict[str, str]:
    if isinstance(fields, dict):
        return {str(name): str(ftype) for name, ftype in fields.items()}

    if isinstance(fields, list):
        normalized: dict[str, str] = {}
        for item in fields:
            if not isinstance(item, dict) or "name" not in item:
                raise MetadataError(source, f"field entry without a name: {item!r}")
            normalized[str(item["name"])] = str(item.get("type", "string"))
        return normalized

    raise MetadataError(source, "'fields' must be a mapping or a list")
