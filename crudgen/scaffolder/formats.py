"""Routing configuration format negotiation."""

from __future__ import annotations

from typing import Optional

from .models import ConfigFormat

DEFAULT_FORMAT = ConfigFormat.YAML

_FORMATS: dict[str, ConfigFormat] = {fmt.value: fmt for fmt in ConfigFormat}


def normalize_format(value: Optional[str]) -> ConfigFormat:
    """Map a requested format token onto a supported ``ConfigFormat``.

    Only the exact tokens ``yaml``, ``xml``, ``php`` and ``annotation`` are
    recognised.  Anything else falls back to :data:`DEFAULT_FORMAT` without
    raising.
    """
    if isinstance(value, ConfigFormat):
        return value
    return _FORMATS.get(value or "", DEFAULT_FORMAT)
