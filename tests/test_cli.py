"""Tests for the command-line interface."""

import json
from pathlib import Path

import pytest
from openpyxl import load_workbook

from memo_cleaner.cli import main
from memo_cleaner.config import get_mappings_path


class TestMappingCommands:
    """Tests for mapping management options."""

    def test_add_and_list_mapping(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test adding a mapping saves it to the XDG location."""
        assert main(["--add-mapping", "amazon mktpl", "Amazon"]) == 0
        assert json.loads(get_mappings_path().read_text()) == [
            {"from": "amazon mktpl", "to": "Amazon"}
        ]

        capsys.readouterr()
        assert main(["--list-mappings"]) == 0
        assert capsys.readouterr().out.strip() == "1. amazon mktpl -> Amazon"

    def test_add_mapping_to_explicit_file(self, tmp_path: Path) -> None:
        """Test --mappings selects the file to edit."""
        path = tmp_path / "custom.json"

        assert main(["--mappings", str(path), "--add-mapping", "a", "b"]) == 0
        assert main(["--mappings", str(path), "--add-mapping", "A", "c"]) == 0

        assert json.loads(path.read_text()) == [{"from": "A", "to": "c"}]

    def test_add_blank_mapping_fails(self) -> None:
        """Test blank mappings are rejected."""
        assert main(["--add-mapping", " ", "b"]) == 1

    def test_remove_mapping(self, tmp_path: Path) -> None:
        """Test removing a mapping by source."""
        path = tmp_path / "mappings.json"
        path.write_text(json.dumps([{"from": "a", "to": "b"}, {"from": "c", "to": "d"}]))

        assert main(["--remove-mapping", "A"]) == 0
        assert json.loads(path.read_text()) == [{"from": "c", "to": "d"}]
        assert main(["--remove-mapping", "missing"]) == 1

    def test_remove_mapping_by_number(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test removing a mapping by its listed number."""
        path = tmp_path / "mappings.json"
        path.write_text(json.dumps([{"from": "a", "to": "b"}, {"from": "c", "to": "d"}]))

        assert main(["--list-mappings"]) == 0
        assert capsys.readouterr().out.splitlines() == ["1. a -> b", "2. c -> d"]

        assert main(["--remove-mapping-at", "2"]) == 0
        assert json.loads(path.read_text()) == [{"from": "a", "to": "b"}]
        assert main(["--remove-mapping-at", "0"]) == 1
        assert main(["--remove-mapping-at", "5"]) == 1

    def test_list_empty(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test listing with no saved mappings."""
        assert main(["--list-mappings"]) == 0
        assert "No mappings saved." in capsys.readouterr().out


class TestCleanCommand:
    """Tests for single-memo cleaning."""

    def test_clean_memo(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test --clean prints the cleaned name."""
        assert main(["--clean", "Zelle to John Smith on 3/4 Ref#12345"]) == 0
        assert capsys.readouterr().out.strip() == "John Smith"

    def test_clean_uses_saved_mappings(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test saved mappings apply to --clean."""
        (tmp_path / "mappings.json").write_text(json.dumps([{"from": "john smith", "to": "JS"}]))

        assert main(["--clean", "Zelle to John Smith"]) == 0
        assert capsys.readouterr().out.strip() == "JS"


class TestExportCommand:
    """Tests for processing statement files."""

    def test_no_inputs_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test running without inputs shows usage."""
        assert main([]) == 1
        assert "usage:" in capsys.readouterr().out

    def test_missing_inputs(self, tmp_path: Path) -> None:
        """Test nonexistent inputs fail."""
        assert main([str(tmp_path / "nope.csv")]) == 1

    def test_export_xlsx(self, tmp_path: Path, statement_file: Path) -> None:
        """Test exporting a file to xlsx."""
        output = tmp_path / "out.xlsx"

        assert main([str(statement_file), "-o", str(output)]) == 0

        ws = load_workbook(output).active
        assert ws.max_row == 4
        assert ws["B2"].value == "John Smith"

    def test_export_default_name(self, tmp_path: Path, statement_file: Path) -> None:
        """Test the default output name is timestamped."""
        assert main([str(statement_file)]) == 0
        assert len(list(tmp_path.glob("cleaned-transactions-*.xlsx"))) == 1

    def test_export_csv_from_directory(self, tmp_path: Path, statement_file: Path) -> None:
        """Test exporting a directory of statements to CSV."""
        output = tmp_path / "out" / "cleaned.csv"
        output.parent.mkdir()

        assert main([str(tmp_path), "--format", "csv", "-o", str(output)]) == 0

        lines = output.read_text().strip().splitlines()
        assert len(lines) == 4
        assert lines[0] == "Date,clean transactions,amount,original transactions"

    def test_no_rows_imported(self, tmp_path: Path) -> None:
        """Test files without usable rows fail."""
        path = tmp_path / "bad.csv"
        path.write_text("Foo,Bar\n1,2\n")

        assert main([str(path)]) == 1
