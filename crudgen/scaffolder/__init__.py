"""crudgen scaffolder -- generates the CRUD scaffold of a single entity.

Given a bundle, a dotted entity name and the entity's metadata, renders a
controller, a functional test, the index/show/new/edit/form views and a
routing file into the bundle.

Quick usage::

    from crudgen.scaffolder import Bundle, CrudGenerator, EntityMetadata

    bundle = Bundle(name="AcmeBlogBundle", namespace="Acme.BlogBundle", path="src/BlogBundle")
    metadata = EntityMetadata(fields={"id": "integer", "title": "string"}, identifier=["id"])
    result = CrudGenerator().generate(
        bundle, "Blog.Post", metadata, "yaml", "blog/post", with_write=True
    )
"""

from crudgen.scaffolder.actions import plan_actions
from crudgen.scaffolder.errors import (
    ControllerAlreadyExistsError,
    CrudGeneratorError,
    InvalidEntityNameError,
    MetadataError,
    MissingIdPrimaryKeyError,
    MultiplePrimaryKeysError,
    RenderError,
)
from crudgen.scaffolder.formats import normalize_format
from crudgen.scaffolder.generator import CrudGenerator
from crudgen.scaffolder.metadata import load_metadata
from crudgen.scaffolder.models import (
    Action,
    ActionPlan,
    Bundle,
    ConfigFormat,
    EntityMetadata,
    GenerationRequest,
    GenerationResult,
    OutputPaths,
)
from crudgen.scaffolder.paths import resolve_paths
from crudgen.scaffolder.templates import TemplateRenderer
from crudgen.scaffolder.validator import validate_metadata

__all__ = [
    "Action",
    "ActionPlan",
    "Bundle",
    "ConfigFormat",
    "ControllerAlreadyExistsError",
    "CrudGenerator",
    "CrudGeneratorError",
    "EntityMetadata",
    "GenerationRequest",
    "GenerationResult",
    "InvalidEntityNameError",
    "MetadataError",
    "MissingIdPrimaryKeyError",
    "MultiplePrimaryKeysError",
    "OutputPaths",
    "RenderError",
    "TemplateRenderer",
    "load_metadata",
    "normalize_format",
    "plan_actions",
    "resolve_paths",
    "validate_metadata",
]
