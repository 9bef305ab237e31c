"""Phone tag normalization."""

from typing import Optional

_PHONE_CHARS = frozenset("0123456789+")


def normalize_phone(raw: Optional[str]) -> str:
    """Keep only ASCII digits and '+' from a raw phone tag, preserving order."""
    if not raw:
        return ""
    return "".join(c for c in raw if c in _PHONE_CHARS)
