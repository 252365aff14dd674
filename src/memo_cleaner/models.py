"""Data models for statement rows and user name mappings."""

from dataclasses import dataclass
from typing import Any

from memo_cleaner.utils.text import normalize_lookup_key, normalize_spaces

EXPORT_HEADERS = ["Date", "clean transactions", "amount", "original transactions"]


@dataclass(frozen=True)
class MappingEntry:
    """Maps a cleaned memo (matched case-insensitively) to a display name."""

    source: str
    target: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MappingEntry":
        """Build an entry from its ``{"from": ..., "to": ...}`` form."""
        return cls(
            source=normalize_spaces(data.get("from")),
            target=normalize_spaces(data.get("to")),
        )

    @property
    def key(self) -> str:
        """Case-insensitive lookup key for ``source``."""
        return normalize_lookup_key(self.source)

    @property
    def is_valid(self) -> bool:
        """Return True if both sides are non-empty after normalization."""
        return bool(normalize_spaces(self.source) and normalize_spaces(self.target))

    def to_dict(self) -> dict[str, str]:
        """Convert to the ``{"from": ..., "to": ...}`` storage form."""
        return {"from": self.source, "to": self.target}


@dataclass
class TransactionRow:
    """One imported statement row and its cleaned memo."""

    row_id: int
    date: str
    memo: str
    amount_raw: str
    amount: float | None = None
    auto_clean: str = ""
    manual_clean: str = ""
    has_manual_override: bool = False

    @property
    def final_clean(self) -> str:
        """Manual override when set, otherwise the automatic clean value."""
        if self.has_manual_override:
            return normalize_spaces(self.manual_clean)
        return self.auto_clean

    @property
    def has_amount(self) -> bool:
        """Return True if the raw amount parsed to a number."""
        return self.amount is not None

    def set_manual_clean(self, value: str) -> None:
        """
        Record a hand-edited clean value.

        Setting the value back to the automatic result clears the override,
        so later mapping changes flow through to this row again.
        """
        value = normalize_spaces(value)
        if value == self.auto_clean:
            self.clear_manual_clean()
            return

        self.has_manual_override = True
        self.manual_clean = value

    def clear_manual_clean(self) -> None:
        """Drop any manual override."""
        self.has_manual_override = False
        self.manual_clean = ""

    def to_export_row(self) -> list[Any]:
        """Values for the four export columns, in order."""
        return [
            self.date,
            self.final_clean,
            self.amount if self.has_amount else self.amount_raw,
            self.memo,
        ]
