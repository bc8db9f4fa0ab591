"""Output path resolution for a CRUD scaffold.

All paths are derived from three inputs: the bundle root, the dotted entity
name and the controller sub-directory.  For ``Blog.Post`` in the top-level
``Controller`` directory of ``/src/BlogBundle`` this yields::

    /src/BlogBundle/Controller/Blog/PostController.php
    /src/BlogBundle/Tests/Controller/Blog/PostControllerTest.php
    /src/BlogBundle/Resources/views/Blog/Post/{index,show,new,edit,form}.html.twig
    /src/BlogBundle/Resources/config/routing/blog_post.yaml
"""

from __future__ import annotations

import re
from pathlib import Path

from .errors import InvalidEntityNameError
from .models import TOP_LEVEL_CONTROLLER_DIR, ConfigFormat, OutputPaths

ENTITY_SEPARATOR = "."

VIEW_NAMES: tuple[str, ...] = ("index", "show", "new", "edit", "form")

DEFAULT_SOURCE_EXTENSION = ".php"
DEFAULT_VIEW_EXTENSION = ".html.twig"

_CONTROLLER_PREFIX = f"{TOP_LEVEL_CONTROLLER_DIR}/"


def split_entity(entity: str) -> tuple[str, str]:
    """Split ``Blog.Post`` into ``("Blog", "Post")``.

    The namespace part is empty for an entity without a namespace.

    Raises:
        InvalidEntityNameError: The class segment is empty.
    """
    namespace, _, entity_class = entity.rpartition(ENTITY_SEPARATOR)
    if not entity_class:
        raise InvalidEntityNameError(entity)
    return namespace, entity_class


def normalize_controller_dir(controller_dir: str) -> str:
    """Return *controller_dir* with ``/`` separators and no stray slashes.

    ``Controller\\Admin``, ``Controller.Admin`` and ``Controller/Admin/`` all
    become ``Controller/Admin``.  An empty value means the top-level
    ``Controller`` directory.
    """
    normalized = re.sub(r"[\\.]+", "/", controller_dir or "")
    normalized = re.sub(r"/+", "/", normalized).strip("/")
    return normalized or TOP_LEVEL_CONTROLLER_DIR


def view_sub_dir(controller_dir: str) -> str:
    """Views sub-directory for a controller directory.

    Empty for the top-level controller directory, otherwise the directory with
    its leading ``Controller/`` removed and a trailing ``/``
    (``Controller/Admin`` -> ``Admin/``).
    """
    controller_dir = normalize_controller_dir(controller_dir)
    if controller_dir == TOP_LEVEL_CONTROLLER_DIR:
        return ""
    if controller_dir.startswith(_CONTROLLER_PREFIX):
        controller_dir = controller_dir[len(_CONTROLLER_PREFIX):]
    return f"{controller_dir}/"


def routing_file_stem(entity: str) -> str:
    """``Blog.Post`` -> ``blog_post``."""
    return entity.replace(ENTITY_SEPARATOR, "_").lower()


def _as_path(dotted: str) -> str:
    return dotted.replace(ENTITY_SEPARATOR, "/")


def resolve_paths(
    bundle_root: str | Path,
    entity: str,
    controller_dir: str = TOP_LEVEL_CONTROLLER_DIR,
    fmt: ConfigFormat = ConfigFormat.YAML,
    *,
    source_extension: str = DEFAULT_SOURCE_EXTENSION,
    view_extension: str = DEFAULT_VIEW_EXTENSION,
) -> OutputPaths:
    """Resolve every output path of a run.

    Args:
        bundle_root: Root directory of the target bundle.
        entity: Dotted entity name (``Blog.Post``).
        controller_dir: Controller sub-directory, ``Controller`` for the
            top level.
        fmt: Effective routing format; ``annotation`` produces no routing
            file path.
        source_extension: Extension of the controller and test files.
        view_extension: Extension of the view templates.

    Returns:
        The resolved ``OutputPaths``.  Nothing is created on disk.
    """
    root = Path(bundle_root)
    entity_namespace, entity_class = split_entity(entity)
    controller_dir = normalize_controller_dir(controller_dir)
    sub_dir = view_sub_dir(controller_dir)

    # Empty path segments are dropped by pathlib
    namespace_dir = _as_path(entity_namespace)

    controller = (
        root / controller_dir / namespace_dir
        / f"{entity_class}Controller{source_extension}"
    )
    test = (
        root / "Tests" / controller_dir / namespace_dir
        / f"{entity_class}ControllerTest{source_extension}"
    )

    view_dir = root / "Resources" / "views" / f"{sub_dir}{_as_path(entity)}"
    views = {name: view_dir / f"{name}{view_extension}" for name in VIEW_NAMES}

    routing = None
    if fmt.has_routing_file:
        routing = (
            root / "Resources" / "config" / "routing"
            / f"{routing_file_stem(entity)}.{fmt.value}"
        )

    return OutputPaths(
        entity_class=entity_class,
        entity_namespace=entity_namespace,
        controller_namespace=controller_dir.replace("/", ENTITY_SEPARATOR),
        sub_dir=sub_dir,
        controller=controller,
        test=test,
        view_dir=view_dir,
        views=views,
        routing=routing,
        form_dir=f"{sub_dir}{view_dir.name}",
    )
