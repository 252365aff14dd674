"""Whitespace and casing helpers shared by every cleaning step."""

import re
from typing import Any

# A stray byte-order mark counts as whitespace
_WHITESPACE_RE = re.compile(r"[\s\ufeff]+")


def normalize_spaces(value: Any) -> str:
    """
    Collapse runs of whitespace to a single space and trim the ends.

    ``None`` (and any other falsy value) becomes an empty string, so the
    function is safe to call on raw CSV cells.

    Args:
        value: Value to normalize

    Returns:
        Normalized string
    """
    if not value:
        return ""
    return _WHITESPACE_RE.sub(" ", str(value)).strip()


def normalize_lookup_key(value: Any) -> str:
    """Return the case-insensitive comparison key for a value."""
    return normalize_spaces(value).lower()


def word_count(value: Any) -> int:
    """Count whitespace-separated words."""
    return len(normalize_spaces(value).split())
