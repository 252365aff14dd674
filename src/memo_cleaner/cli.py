#!/usr/bin/env python3
"""Command-line interface for memo-cleaner."""

import argparse
import logging
import sys
from pathlib import Path

from memo_cleaner.cleaner import clean_memo
from memo_cleaner.config import (
    find_mappings_file,
    get_mappings_path,
    load_mappings,
    remove_mapping,
    remove_mapping_by_source,
    save_mappings,
    upsert_mapping,
)
from memo_cleaner.models import MappingEntry
from memo_cleaner.normalizer import (
    StatementNormalizer,
    default_export_filename,
    find_statement_files,
)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Clean bank statement memos into consistent payee names",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  memo-cleaner ~/Downloads/statements/
  memo-cleaner march.csv april.csv -o cleaned.xlsx
  memo-cleaner march.csv --format csv -o cleaned.csv
  memo-cleaner --add-mapping "AMAZON MKTPL" "Amazon"
  memo-cleaner --remove-mapping-at 2
  memo-cleaner --clean "Zelle to John Smith on 3/4 Ref#12345"

Input files must be CSV (or legacy .xls) with Date, amount and memo columns.
        """,
    )

    parser.add_argument(
        "inputs",
        nargs="*",
        help="Input files or directories",
    )
    parser.add_argument(
        "-o",
        "--output",
        help="Output file (default: cleaned-transactions-<timestamp>.xlsx)",
    )
    parser.add_argument(
        "--format",
        choices=["xlsx", "csv", "tsv"],
        default="xlsx",
        help="Output format (default: xlsx)",
    )
    parser.add_argument(
        "--mappings",
        type=Path,
        help="Path to mappings.json file",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )

    # Mapping management
    parser.add_argument(
        "--add-mapping",
        nargs=2,
        metavar=("FROM", "TO"),
        help="Add or replace a name mapping",
    )
    parser.add_argument(
        "--remove-mapping",
        metavar="FROM",
        help="Remove the name mapping for FROM",
    )
    parser.add_argument(
        "--remove-mapping-at",
        type=int,
        metavar="N",
        help="Remove mapping number N as shown by --list-mappings",
    )
    parser.add_argument(
        "--list-mappings",
        action="store_true",
        help="Show saved name mappings",
    )

    parser.add_argument(
        "--clean",
        metavar="MEMO",
        help="Print the cleaned name for a single memo",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    mappings_path: Path | None = args.mappings or find_mappings_file()
    mappings = load_mappings(mappings_path)

    # Mapping management first; these never process files
    if args.add_mapping or args.remove_mapping or args.remove_mapping_at is not None:
        if args.add_mapping:
            entry = MappingEntry(*args.add_mapping)
            if not entry.is_valid:
                print("Error: mapping needs a non-empty FROM and TO", file=sys.stderr)
                return 1
            updated = upsert_mapping(mappings, entry.source, entry.target)
        elif args.remove_mapping_at is not None:
            updated = remove_mapping(mappings, args.remove_mapping_at - 1)
            if len(updated) == len(mappings):
                print(f"No mapping number {args.remove_mapping_at}", file=sys.stderr)
                return 1
        else:
            updated = remove_mapping_by_source(mappings, args.remove_mapping)
            if len(updated) == len(mappings):
                print(f"No mapping found for \"{args.remove_mapping}\"", file=sys.stderr)
                return 1

        saved_path = save_mappings(updated, mappings_path or get_mappings_path())
        print(f"Saved {len(updated)} mapping(s) to {saved_path}", file=sys.stderr)
        return 0

    if args.list_mappings:
        if not mappings:
            print("No mappings saved.")
            return 0
        for number, entry in enumerate(mappings, start=1):
            print(f"{number}. {entry.source} -> {entry.target}")
        return 0

    if args.clean is not None:
        print(clean_memo(args.clean, mappings))
        return 0

    if not args.inputs:
        parser.print_help()
        return 1

    # Collect files
    files: list[Path] = []
    for inp in args.inputs:
        path = Path(inp)
        if path.is_dir():
            files.extend(find_statement_files(path))
        elif path.exists():
            files.append(path)
        else:
            print(f"Warning: {inp} not found", file=sys.stderr)

    if not files:
        print("Error: No valid input files found", file=sys.stderr)
        return 1

    normalizer = StatementNormalizer(mappings=mappings)
    rows = normalizer.process_files(files)

    print(f"Processed {len(files)} files", file=sys.stderr)
    print(f"Loaded {len(rows)} rows", file=sys.stderr)
    for filepath, error in normalizer.errors:
        print(f"Warning: {filepath.name}: {error}", file=sys.stderr)

    if not rows:
        print("Error: No rows were imported", file=sys.stderr)
        return 1

    # Write output
    if args.output:
        output_path = Path(args.output)
    elif args.format == "xlsx":
        output_path = Path(default_export_filename())
    else:
        output_path = Path(f"cleaned-transactions.{args.format}")

    if args.format == "xlsx":
        normalizer.write_xlsx(rows, output_path)
    else:
        delimiter = "\t" if args.format == "tsv" else ","
        normalizer.write_csv(rows, output_path, delimiter)

    print(f"Wrote {len(rows)} rows to {output_path}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
