"""Parsing utilities for statement files, rows and amounts."""

import csv
import math
import re
from collections.abc import Iterable, Mapping
from decimal import ROUND_HALF_UP, Decimal
from io import StringIO
from pathlib import Path
from typing import Any

import xlrd  # type: ignore[import-untyped]

from memo_cleaner.utils.text import normalize_lookup_key, normalize_spaces

REQUIRED_COLUMNS = ("date", "amount", "memo")

_PARENTHESIZED_RE = re.compile(r"^\((.+)\)$")
_LEADING_NUMBER_RE = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_amount(amount_str: Any) -> float | None:
    """
    Parse amount string to a signed float.

    Handles:
    - Dollar signs and thousands separators anywhere in the value
    - Negative values in parentheses ((123.45))
    - Trailing text after the number (12.50 USD)

    Args:
        amount_str: Raw amount value

    Returns:
        float if successful, None otherwise
    """
    if amount_str is None:
        return None

    raw = str(amount_str).strip()
    if not raw:
        return None

    # Check for parentheses (negative)
    is_negative = False
    match = _PARENTHESIZED_RE.match(raw)
    if match:
        is_negative = True
        raw = match.group(1)

    raw = raw.replace("$", "").replace(",", "")

    number = _LEADING_NUMBER_RE.match(raw)
    if not number:
        return None

    try:
        value = float(number.group(0))
    except (ValueError, OverflowError):
        return None

    if not math.isfinite(value):
        return None

    return -value if is_negative else value


def format_amount(value: Any, raw_fallback: Any = "") -> str:
    """
    Format a parsed amount for display.

    Finite numbers are rendered with thousands separators and exactly two
    decimals, rounding halves away from zero. Anything else falls back to
    the raw value so a row always has something to show.

    Args:
        value: Parsed amount (or None)
        raw_fallback: Raw amount string from the source file

    Returns:
        Display string
    """
    if (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    ):
        rounded = Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        return f"{rounded:,.2f}"
    return normalize_spaces(raw_fallback)


def normalize_header(header: Any) -> str:
    """Normalize a CSV header for comparison (BOM, whitespace, case)."""
    return normalize_lookup_key(str(header or "").lstrip("\ufeff"))


def has_required_headers(headers: Iterable[Any] | None) -> bool:
    """Check that a header row carries the date, amount and memo columns."""
    normalized = {normalize_header(header) for header in headers or []}
    return all(column in normalized for column in REQUIRED_COLUMNS)


def extract_transaction_columns(raw_row: Mapping[Any, Any] | None) -> dict[str, str]:
    """
    Pull the date, amount and memo fields out of a CSV row.

    Header matching is case-insensitive and ignores a leading byte-order
    mark. Missing columns come back as empty strings.

    Args:
        raw_row: Mapping of header name to raw cell value

    Returns:
        Dictionary with ``date``, ``amount_raw`` and ``memo`` keys
    """
    by_header: dict[str, Any] = {}
    for key, value in (raw_row or {}).items():
        by_header[normalize_header(key)] = value

    amount_raw = by_header.get("amount")
    return {
        "date": normalize_spaces(by_header.get("date")),
        "amount_raw": "" if amount_raw is None else str(amount_raw).strip(),
        "memo": normalize_spaces(by_header.get("memo")),
    }


def read_file(filepath: Path) -> str:
    """
    Read file content, handling both text and legacy Excel files.

    Args:
        filepath: Path to the file

    Returns:
        File content as string (Excel files converted to CSV format)

    Raises:
        ValueError: If file cannot be read
    """
    if not filepath.exists():
        raise ValueError(f"File not found: {filepath}")

    # Check if it's an Excel file by magic bytes
    is_xls = filepath.suffix.lower() == ".xls"
    try:
        with open(filepath, "rb") as f:
            # OLE2 magic bytes (used by .xls)
            if f.read(4) == b"\xd0\xcf\x11\xe0":
                is_xls = True
    except OSError as e:
        raise ValueError(f"Could not read file {filepath}: {e}") from e

    if is_xls:
        return _read_excel(filepath)
    return _read_text(filepath)


def _read_text(filepath: Path) -> str:
    """Read text file with encoding detection."""
    encodings = ["utf-8-sig", "utf-8", "latin-1", "cp1252"]

    for encoding in encodings:
        try:
            with open(filepath, encoding=encoding, newline="") as f:
                return f.read()
        except UnicodeDecodeError:
            continue

    raise ValueError(f"Could not decode file {filepath} with any known encoding")


def _read_excel(filepath: Path) -> str:
    """Read a legacy Excel file and convert its first sheet to CSV text."""
    try:
        wb = xlrd.open_workbook(str(filepath))
        sheet = wb.sheet_by_index(0)

        buffer = StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        for row in range(sheet.nrows):
            row_data = []
            for col in range(sheet.ncols):
                cell = sheet.cell(row, col)
                if cell.ctype == xlrd.XL_CELL_DATE:
                    dt = xlrd.xldate_as_datetime(cell.value, wb.datemode)
                    row_data.append(dt.strftime("%m/%d/%Y"))
                elif cell.ctype == xlrd.XL_CELL_NUMBER and float(cell.value).is_integer():
                    row_data.append(str(int(cell.value)))
                else:
                    row_data.append(str(cell.value))
            writer.writerow(row_data)

        return buffer.getvalue()

    except Exception as e:
        raise ValueError(f"Could not read Excel file {filepath}: {e}") from e
