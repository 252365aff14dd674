"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from memo_cleaner.models import MappingEntry

STATEMENT_CSV = (
    "\ufeffDate,Amount,Memo\n"
    '03/01/2025,"(1,234.50)",Zelle to John Smith on 3/4 Ref#12345\n'
    "03/02/2025,$45.00,Domestic Incoming Wire Fee\n"
    ",,\n"
    "03/03/2025,-,AMAZON   MKTPL\n"
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep mapping lookups away from the real user config."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg_config"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def statement_file(tmp_path: Path) -> Path:
    """Return path to a small statement CSV with a BOM header."""
    path = tmp_path / "statement.csv"
    path.write_text(STATEMENT_CSV, encoding="utf-8")
    return path


@pytest.fixture
def second_statement_file(tmp_path: Path) -> Path:
    """Return path to a second statement with differently cased headers."""
    path = tmp_path / "second.csv"
    path.write_text(
        " DATE , AMOUNT , MEMO \n"
        "04/01/2025,12.00,WT 123456 /Bnf=G ACME CORP CO Srf#998877\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def sample_mappings() -> list[MappingEntry]:
    """Return a small mapping list."""
    return [
        MappingEntry(source="John Smith", target="Johnny"),
        MappingEntry(source="amazon", target="Amazon.com"),
    ]
