"""crudgen configuration.

Centralised, typed settings for the CLI.  Uses a Pydantic v2 model so values
are validated at construction time and can be serialised to/from JSON or read
from environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from crudgen.scaffolder.formats import normalize_format
from crudgen.scaffolder.models import TOP_LEVEL_CONTROLLER_DIR, ConfigFormat
from crudgen.scaffolder.paths import DEFAULT_SOURCE_EXTENSION, DEFAULT_VIEW_EXTENSION


class Config(BaseModel):
    """Settings shared by every generation run of one invocation."""

    skeleton_dir: Optional[Path] = Field(
        default=None, description="Custom skeleton directory (defaults to the packaged one)"
    )
    source_extension: str = Field(default=DEFAULT_SOURCE_EXTENSION)
    view_extension: str = Field(default=DEFAULT_VIEW_EXTENSION)
    default_format: ConfigFormat = Field(default=ConfigFormat.YAML)
    controller_dir: str = Field(default=TOP_LEVEL_CONTROLLER_DIR)

    @field_validator("source_extension", "view_extension")
    @classmethod
    def _leading_dot(cls, value: str) -> str:
        if value and not value.startswith("."):
            return f".{value}"
        return value

    @field_validator("default_format", mode="before")
    @classmethod
    def _negotiate_format(cls, value: Any) -> ConfigFormat:
        return normalize_format(value)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            CRUDGEN_SKELETON_DIR, CRUDGEN_SOURCE_EXTENSION,
            CRUDGEN_VIEW_EXTENSION, CRUDGEN_FORMAT, CRUDGEN_CONTROLLER_DIR.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("CRUDGEN_SKELETON_DIR"):
            kwargs["skeleton_dir"] = Path(os.environ["CRUDGEN_SKELETON_DIR"])
        if os.environ.get("CRUDGEN_SOURCE_EXTENSION"):
            kwargs["source_extension"] = os.environ["CRUDGEN_SOURCE_EXTENSION"]
        if os.environ.get("CRUDGEN_VIEW_EXTENSION"):
            kwargs["view_extension"] = os.environ["CRUDGEN_VIEW_EXTENSION"]
        if os.environ.get("CRUDGEN_FORMAT"):
            kwargs["default_format"] = os.environ["CRUDGEN_FORMAT"]
        if os.environ.get("CRUDGEN_CONTROLLER_DIR"):
            kwargs["controller_dir"] = os.environ["CRUDGEN_CONTROLLER_DIR"]
        return cls(**kwargs)
