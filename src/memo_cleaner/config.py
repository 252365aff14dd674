"""Storage for user name mappings."""

import json
import logging
import os
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from memo_cleaner.models import MappingEntry
from memo_cleaner.utils.text import normalize_lookup_key, normalize_spaces

logger = logging.getLogger(__name__)

# Default mappings filename
MAPPINGS_FILENAME = "mappings.json"


def get_config_dir() -> Path:
    """Get the config directory path (XDG compliant)."""
    xdg_config_home = os.getenv("XDG_CONFIG_HOME", str(Path.home() / ".config"))
    return Path(xdg_config_home) / "memo-cleaner"


def get_mappings_path() -> Path:
    """Get the default mappings file path."""
    return get_config_dir() / MAPPINGS_FILENAME


def find_mappings_file() -> Path | None:
    """Find the mappings file in standard locations.

    Searches in the following order:
    1. mappings.json in current directory
    2. XDG config: ~/.config/memo-cleaner/mappings.json
    """
    for path in [Path(MAPPINGS_FILENAME), get_mappings_path()]:
        if path.exists():
            return path

    return None


def parse_mappings(data: Any) -> list[MappingEntry]:
    """Turn decoded JSON into mapping entries, dropping incomplete ones.

    Args:
        data: Decoded JSON document (expected: list of {"from", "to"} objects)

    Returns:
        List of MappingEntry objects with normalized values
    """
    if not isinstance(data, list):
        return []

    entries = []
    for item in data:
        if not isinstance(item, dict):
            continue
        entry = MappingEntry.from_dict(item)
        if entry.is_valid:
            entries.append(entry)
    return entries


def load_mappings(mappings_path: Path | None = None) -> list[MappingEntry]:
    """Load user mappings.

    A missing or unreadable file is treated as an empty mapping list.

    Args:
        mappings_path: Explicit path to the mappings file

    Returns:
        List of MappingEntry objects
    """
    path = mappings_path or find_mappings_file()
    if path is None or not path.exists():
        return []

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable mappings file %s: %s", path, e)
        return []

    return parse_mappings(data)


def save_mappings(
    mappings: Sequence[MappingEntry],
    mappings_path: Path | None = None,
) -> Path:
    """Save user mappings to a JSON file.

    Args:
        mappings: Entries to save
        mappings_path: Path to save to (defaults to XDG config location)

    Returns:
        Path where mappings were saved
    """
    if mappings_path is None:
        mappings_path = get_mappings_path()

    # Ensure directory exists
    mappings_path.parent.mkdir(parents=True, exist_ok=True)

    with open(mappings_path, "w", encoding="utf-8") as f:
        json.dump([entry.to_dict() for entry in mappings], f, indent=2)
        f.write("\n")

    return mappings_path


def upsert_mapping(
    mappings: Sequence[MappingEntry],
    source: str,
    target: str,
) -> list[MappingEntry]:
    """Add a mapping, replacing any entry with the same source.

    Sources are compared case-insensitively, so the list never holds two
    entries for the same name.

    Args:
        mappings: Current entries (not modified)
        source: Cleaned memo to match
        target: Replacement name

    Returns:
        New list of entries
    """
    entry = MappingEntry(source=normalize_spaces(source), target=normalize_spaces(target))
    if not entry.is_valid:
        return list(mappings)

    updated = list(mappings)
    for i, existing in enumerate(updated):
        if existing.key == entry.key:
            updated[i] = entry
            return updated

    updated.append(entry)
    return updated


def remove_mapping(mappings: Sequence[MappingEntry], index: int) -> list[MappingEntry]:
    """Return the entries without the one at ``index`` (ignored if out of range)."""
    if not 0 <= index < len(mappings):
        return list(mappings)
    return [entry for i, entry in enumerate(mappings) if i != index]


def remove_mapping_by_source(
    mappings: Sequence[MappingEntry],
    source: str,
) -> list[MappingEntry]:
    """Return the entries without the one whose source matches ``source``."""
    key = normalize_lookup_key(source)
    return [entry for entry in mappings if entry.key != key]
