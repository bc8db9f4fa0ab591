"""Exceptions raised by the CRUD scaffolder.

Every failure is surfaced synchronously to the caller of
``CrudGenerator.generate``.  Nothing is retried and nothing is rolled back:
``written`` lists the files that were completed before the failing step so a
caller can clean up or retry.
"""

from __future__ import annotations

from pathlib import Path


class CrudGeneratorError(Exception):
    """Base class for all scaffolder failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.written: list[Path] = []


class MultiplePrimaryKeysError(CrudGeneratorError):
    """The entity declares more than one identifier field."""

    def __init__(self, identifier: list[str]) -> None:
        self.identifier = list(identifier)
        super().__init__(
            "The CRUD generator does not support entity classes with multiple "
            f"primary keys ({', '.join(self.identifier)})."
        )


class MissingIdPrimaryKeyError(CrudGeneratorError):
    """The entity's identifier field is not named ``id``."""

    def __init__(self, identifier: list[str]) -> None:
        self.identifier = list(identifier)
        super().__init__(
            'The CRUD generator expects the entity to have a primary key field named "id".'
        )


class ControllerAlreadyExistsError(CrudGeneratorError):
    """The target controller file is already present on disk."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(
            f"Unable to generate the controller as it already exists: {self.path}"
        )


class InvalidEntityNameError(CrudGeneratorError):
    """The dotted entity name has no class segment (``Blog.`` or an empty name)."""

    def __init__(self, entity: str) -> None:
        self.entity = entity
        super().__init__(
            f'The entity name "{entity}" must end with a class name, e.g. "Blog.Post".'
        )


class RenderError(CrudGeneratorError):
    """A skeleton could not be rendered or its output could not be written."""

    def __init__(self, template: str, path: Path | None, reason: str) -> None:
        self.template = template
        self.path = Path(path) if path is not None else None
        self.reason = reason
        target = f" -> {self.path}" if self.path is not None else ""
        super().__init__(f"Failed to render '{template}'{target}: {reason}")


class MetadataError(CrudGeneratorError):
    """An entity metadata file is missing or malformed."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Invalid entity metadata in {self.path}: {reason}")
