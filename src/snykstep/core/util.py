"""Small string helpers used by form binding and validation."""

from __future__ import annotations

from typing import Optional


def fix_empty_and_trim(value: Optional[str]) -> Optional[str]:
    """Trim a form value, mapping ``None`` and blank strings to ``None``."""
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    return value
