"""Utility functions for memo-cleaner."""

from memo_cleaner.utils.parsing import (
    extract_transaction_columns,
    format_amount,
    has_required_headers,
    normalize_header,
    parse_amount,
    read_file,
)
from memo_cleaner.utils.text import normalize_lookup_key, normalize_spaces, word_count

__all__ = [
    "extract_transaction_columns",
    "format_amount",
    "has_required_headers",
    "normalize_header",
    "normalize_lookup_key",
    "normalize_spaces",
    "parse_amount",
    "read_file",
    "word_count",
]
