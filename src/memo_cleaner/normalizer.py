"""Main normalizer class that turns statement files into cleaned rows."""

import csv
import logging
from collections.abc import Sequence
from datetime import datetime
from io import StringIO
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Font

from memo_cleaner.cleaner import clean_memo
from memo_cleaner.models import EXPORT_HEADERS, MappingEntry, TransactionRow
from memo_cleaner.utils import (
    extract_transaction_columns,
    has_required_headers,
    parse_amount,
    read_file,
)

logger = logging.getLogger(__name__)

# Column widths for the xlsx export, in EXPORT_HEADERS order
EXPORT_COLUMN_WIDTHS = [14, 45, 14, 90]


def default_export_filename(now: datetime | None = None) -> str:
    """Timestamped filename for an export, e.g. cleaned-transactions-2025-01-31-09-05.xlsx."""
    now = now or datetime.now()
    return f"cleaned-transactions-{now:%Y-%m-%d-%H-%M}.xlsx"


class StatementNormalizer:
    """
    Main class for cleaning bank statement exports.

    Usage:
        normalizer = StatementNormalizer(mappings=load_mappings())
        rows = normalizer.process_files([Path("march.csv"), Path("april.csv")])
        normalizer.write_xlsx(rows, Path("cleaned.xlsx"))
    """

    def __init__(self, mappings: Sequence[MappingEntry] | None = None) -> None:
        """
        Initialize normalizer.

        Args:
            mappings: User name mappings applied to every cleaned memo
        """
        self._mappings: tuple[MappingEntry, ...] = tuple(mappings or ())
        self._errors: list[tuple[Path, str]] = []
        self._next_row_id = 0

    @property
    def errors(self) -> list[tuple[Path, str]]:
        """Get list of (filepath, error_message) for failed files."""
        return self._errors.copy()

    @property
    def mappings(self) -> tuple[MappingEntry, ...]:
        """Mappings currently applied to cleaned memos."""
        return self._mappings

    def set_mappings(
        self,
        mappings: Sequence[MappingEntry],
        rows: list[TransactionRow] | None = None,
    ) -> None:
        """
        Replace the mapping list, re-cleaning ``rows`` if given.

        Args:
            mappings: New mapping list
            rows: Previously processed rows to update in place
        """
        self._mappings = tuple(mappings)
        if rows:
            self.recalculate(rows)

    def recalculate(self, rows: list[TransactionRow]) -> None:
        """Recompute the automatic clean value of each row; manual overrides stay."""
        for row in rows:
            row.auto_clean = clean_memo(row.memo, self._mappings)

    def build_row(self, date: str, amount_raw: str, memo: str) -> TransactionRow:
        """Create a cleaned row with the next row id."""
        self._next_row_id += 1
        return TransactionRow(
            row_id=self._next_row_id,
            date=date,
            memo=memo,
            amount_raw=amount_raw,
            amount=parse_amount(amount_raw),
            auto_clean=clean_memo(memo, self._mappings),
        )

    def parse_content(self, content: str) -> list[TransactionRow]:
        """
        Parse CSV text into cleaned rows.

        Args:
            content: CSV text with a header row

        Returns:
            List of TransactionRow objects

        Raises:
            ValueError: If the required columns are missing
        """
        reader = csv.DictReader(StringIO(content))
        if not has_required_headers(reader.fieldnames):
            raise ValueError("Missing required headers (Date, amount, memo)")

        rows: list[TransactionRow] = []
        for raw_row in reader:
            fields = extract_transaction_columns(raw_row)
            if not (fields["date"] or fields["amount_raw"] or fields["memo"]):
                continue
            rows.append(self.build_row(fields["date"], fields["amount_raw"], fields["memo"]))

        return rows

    def process_file(self, filepath: Path) -> list[TransactionRow]:
        """
        Process a single file and return cleaned rows.

        Args:
            filepath: Path to the file

        Returns:
            List of TransactionRow objects (empty if the file was rejected)
        """
        try:
            content = read_file(filepath)
            rows = self.parse_content(content)
        except (ValueError, csv.Error) as e:
            self._record_error(filepath, str(e))
            return []

        if not rows:
            self._record_error(filepath, "No usable rows found")
            return []

        logger.debug("Loaded %d row(s) from %s", len(rows), filepath)
        return rows

    def process_files(self, filepaths: list[Path]) -> list[TransactionRow]:
        """
        Process multiple files and return combined rows in file order.

        Args:
            filepaths: List of file paths

        Returns:
            List of TransactionRow objects
        """
        self._errors = []
        all_rows: list[TransactionRow] = []

        for filepath in filepaths:
            all_rows.extend(self.process_file(filepath))

        return all_rows

    def process_directory(
        self, directory: Path, extensions: list[str] | None = None
    ) -> list[TransactionRow]:
        """
        Process all matching files in a directory.

        Args:
            directory: Directory path
            extensions: File extensions to include (default: csv, xls)

        Returns:
            List of TransactionRow objects
        """
        return self.process_files(find_statement_files(directory, extensions))

    def _record_error(self, filepath: Path, message: str) -> None:
        logger.warning("%s: %s", filepath.name, message)
        self._errors.append((filepath, message))

    @staticmethod
    def write_csv(
        rows: list[TransactionRow],
        output_path: Path,
        delimiter: str = ",",
    ) -> None:
        """
        Write cleaned rows to CSV file.

        Args:
            rows: Rows to export
            output_path: Output file path
            delimiter: CSV delimiter (default comma)
        """
        with open(output_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f, delimiter=delimiter)
            writer.writerow(EXPORT_HEADERS)
            for row in rows:
                writer.writerow(row.to_export_row())

    @staticmethod
    def write_xlsx(rows: list[TransactionRow], output_path: Path) -> None:
        """
        Write cleaned rows to an Excel workbook.

        The header row is frozen and filterable, amounts are stored as
        numbers with a thousands format, and unparseable amounts keep their
        raw text.

        Args:
            rows: Rows to export
            output_path: Output file path
        """
        wb = Workbook()
        ws = wb.active
        ws.title = "Transactions"
        ws.append(EXPORT_HEADERS)
        for row in rows:
            ws.append(row.to_export_row())

        for column, width in zip("ABCD", EXPORT_COLUMN_WIDTHS):
            ws.column_dimensions[column].width = width

        for (cell,) in ws.iter_rows(min_row=2, min_col=3, max_col=3):
            cell.number_format = "#,##0.00"

        for excel_row in ws.iter_rows():
            for cell in excel_row:
                cell.font = Font(name="Arial", size=10, bold=cell.row == 1)

        ws.freeze_panes = "A2"
        ws.auto_filter.ref = "A1:D1"
        wb.save(output_path)


def find_statement_files(directory: Path, extensions: list[str] | None = None) -> list[Path]:
    """List statement files in a directory, sorted by name."""
    if extensions is None:
        extensions = [".csv", ".xls"]

    files: set[Path] = set()
    for ext in extensions:
        files.update(directory.glob(f"*{ext}"))
        files.update(directory.glob(f"*{ext.upper()}"))

    return sorted(files)
