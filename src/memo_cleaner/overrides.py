"""Name rewriting applied after rule extraction.

Two layers run in order: a fixed table of known memo spellings, then the
caller's mapping list. The first mapping whose ``from`` side matches
(case-insensitively) wins.
"""

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Any

from memo_cleaner.models import MappingEntry
from memo_cleaner.utils.text import normalize_lookup_key, normalize_spaces

# Exact (case-sensitive) whitespace-normalized memo -> replacement
BUILT_IN_NORMALIZATION: Mapping[str, str] = MappingProxyType({
    "Motorcycle Spare Parts Max Import": "Motorcycle Spare Parts Max Import LLC",
    "Motorcycle Spare Parts Max Import L": "Motorcycle Spare Parts Max Import LLC",
    "CHARCO UTILITIES": "Charlotte County Utilities",
    "CHARLOTTE UTILTY": "Charlotte County Utilities",
    "LEE COUNTY": "LEE COUNTY TAX COLLECTOR",
    "ATT* BILL": "AT&T",
    "ATT* BILL PAYMENT": "AT&T",
    "APPLE.COM/BILL": "APPLE.COM",
    "AMAZON MKTPL": "Amazon",
    "yrr service": "YRR SERVICE LLC",
    "AIR-VAC CONNECTIO TAMPA": "AIR-VAC CONNECTION",
    "Hotel at Booking.": "Hotel",
    "NST THE HOME D": "THE HOME DEPOT",
    "FPL DIRECT DEBIT": "FPL DIRECT",
    "CULVERS PUNTA GOR PUNTA GORDA": "CULVERS",
    "TEDS MARATHON PORT CHARLOTTFL": "MARATHON",
    "MICCOSUKEE SER FORT LAUDERDAFL": "MICCOSUKEE",
    "MISSION BBQ CAPE CAPE CORAL": "MISSION BBQ",
    "SHELL SERVICE PUNTA GORDA": "SHELL SERVICE",
})

Mappings = Iterable[MappingEntry | Mapping[str, Any]] | Mapping[str, str] | None


def iter_mappings(mappings: Mappings) -> Iterator[tuple[Any, Any]]:
    """
    Yield ``(from, to)`` pairs from any supported mapping shape.

    Accepts a sequence of :class:`MappingEntry` objects or ``{"from", "to"}``
    dicts, or a plain ``{from: to}`` dictionary. Entries of any other shape
    are skipped.
    """
    if not mappings:
        return

    if isinstance(mappings, Mapping):
        yield from mappings.items()
        return

    for entry in mappings:
        if isinstance(entry, MappingEntry):
            yield entry.source, entry.target
        elif isinstance(entry, Mapping):
            yield entry.get("from"), entry.get("to")


def lookup_mapping(name: str, mappings: Mappings) -> str:
    """Return the target of the first mapping matching ``name``, or ``""``."""
    target_key = normalize_lookup_key(name)
    for source, target in iter_mappings(mappings):
        if normalize_lookup_key(source) == target_key:
            return normalize_spaces(target)
    return ""


def apply_name_normalization(name: Any, mappings: Mappings = None) -> str:
    """
    Rewrite an extracted name through the built-in table and user mappings.

    Args:
        name: Candidate name produced by rule extraction
        mappings: User mapping list (read, never modified)

    Returns:
        Final display name, or ``""`` for an empty candidate
    """
    normalized = normalize_spaces(name)
    if not normalized:
        return ""

    normalized = BUILT_IN_NORMALIZATION.get(normalized, normalized)
    return lookup_mapping(normalized, mappings) or normalized
