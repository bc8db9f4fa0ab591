"""Pre-flight checks on entity metadata.

Runs before any path is resolved or any file is touched, so a rejected entity
leaves the bundle exactly as it was.
"""

from __future__ import annotations

from .errors import MissingIdPrimaryKeyError, MultiplePrimaryKeysError
from .models import EntityMetadata


def validate_metadata(metadata: EntityMetadata) -> None:
    """Ensure the entity has exactly one identifier field, named ``id``.

    Raises:
        MultiplePrimaryKeysError: More than one identifier field is declared.
        MissingIdPrimaryKeyError: No identifier field is named ``id``.
    """
    if len(metadata.identifier) > 1:
        raise MultiplePrimaryKeysError(metadata.identifier)

    if "id" not in metadata.identifier:
        raise MissingIdPrimaryKeyError(metadata.identifier)
