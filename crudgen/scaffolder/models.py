"""Pydantic v2 models for the CRUD scaffolder.

Defines the inputs of a generation run (bundle, entity metadata, request),
the values derived from them (action plan, output paths) and one typed
context model per skeleton template.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


TOP_LEVEL_CONTROLLER_DIR = "Controller"


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ConfigFormat(str, Enum):
    """Format of the generated routing configuration."""
    YAML = "yaml"
    XML = "xml"
    PHP = "php"
    ANNOTATION = "annotation"

    @property
    def has_routing_file(self) -> bool:
        """Annotation routes live in the controller, every other format gets a file."""
        return self is not ConfigFormat.ANNOTATION


class Action(str, Enum):
    """A CRUD action exposed by the generated controller."""
    INDEX = "index"
    SHOW = "show"
    NEW = "new"
    EDIT = "edit"
    DELETE = "delete"


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------

class Bundle(BaseModel):
    """The project root that owns the generated files."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Display name, e.g. 'BlogBundle'")
    namespace: str = Field(..., description="Root namespace, e.g. 'Acme.BlogBundle'")
    path: Path = Field(..., description="Root directory of the bundle")


class EntityMetadata(BaseModel):
    """Structural metadata of an entity: its field mappings and identifier."""
    model_config = ConfigDict(frozen=True)

    fields: dict[str, str] = Field(
        default_factory=dict,
        description="Ordered mapping of field name to scalar type (display only)",
    )
    identifier: list[str] = Field(
        default_factory=list, description="Identifier (primary key) field names"
    )


class GenerationRequest(BaseModel):
    """Everything a single generation run needs."""
    model_config = ConfigDict(frozen=True)

    bundle: Bundle
    entity: str = Field(..., description="Dotted entity name, e.g. 'Blog.Post'")
    metadata: EntityMetadata
    format: str = Field(default="yaml", description="Requested routing format")
    route_prefix: str = Field(default="", description="URL prefix, e.g. 'blog/post'")
    with_write: bool = Field(default=False, description="Generate new/edit/delete actions")
    controller_dir: str = Field(
        default=TOP_LEVEL_CONTROLLER_DIR,
        description="Controller sub-directory relative to the bundle root",
    )

    @property
    def route_name_prefix(self) -> str:
        """Identifier form of the route prefix (``blog/post`` -> ``blog_post``)."""
        return self.route_prefix.replace("/", "_")


# ---------------------------------------------------------------------------
# Derived values
# ---------------------------------------------------------------------------

class ActionPlan(BaseModel):
    """Ordered actions for a run plus the per-row subset used by the index view."""
    model_config = ConfigDict(frozen=True)

    actions: tuple[Action, ...]
    record_actions: tuple[Action, ...]

    def __contains__(self, action: object) -> bool:
        return action in self.actions


class OutputPaths(BaseModel):
    """Every path a run may write, resolved once up front."""
    model_config = ConfigDict(frozen=True)

    entity_class: str
    entity_namespace: str
    controller_namespace: str
    sub_dir: str
    controller: Path
    test: Path
    view_dir: Path
    views: dict[str, Path]
    routing: Optional[Path] = None
    form_dir: str


class GenerationResult(BaseModel):
    """Outcome of a successful run."""
    entity: str
    format: ConfigFormat
    plan: ActionPlan
    paths: OutputPaths
    written: list[Path] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Per-template render contexts
# ---------------------------------------------------------------------------

class _TemplateContext(BaseModel):
    """Base for render contexts; dumped in JSON mode so enums reach Jinja2 as strings."""
    model_config = ConfigDict(frozen=True)


class ControllerContext(_TemplateContext):
    actions: list[Action]
    route_prefix: str
    route_name_prefix: str
    bundle: str
    namespace: str
    entity: str
    entity_class: str
    entity_namespace: str
    controller_namespace: str
    format: ConfigFormat


class FunctionalTestContext(_TemplateContext):
    actions: list[Action]
    fields: dict[str, str]
    route_prefix: str
    route_name_prefix: str
    namespace: str
    entity: str
    entity_class: str
    entity_namespace: str
    controller_namespace: str


class IndexViewContext(_TemplateContext):
    entity: str
    fields: dict[str, str]
    actions: list[Action]
    record_actions: list[Action]
    route_prefix: str
    route_name_prefix: str


class ShowViewContext(_TemplateContext):
    entity: str
    fields: dict[str, str]
    actions: list[Action]
    route_prefix: str
    route_name_prefix: str


class FormViewContext(_TemplateContext):
    """Shared by the ``form``, ``new`` and ``edit`` views."""
    entity: str
    fields: dict[str, str]
    actions: list[Action]
    route_prefix: str
    route_name_prefix: str
    bundle: str
    form_dir: str


class RoutingContext(_TemplateContext):
    actions: list[Action]
    route_prefix: str
    route_name_prefix: str
    bundle: str
    entity: str
    entity_class: str
    controller_namespace: str
