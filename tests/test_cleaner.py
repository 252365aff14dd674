"""Tests for the memo cleaning pipeline and name overrides."""

from types import MappingProxyType

import pytest

from memo_cleaner import MappingEntry, clean_memo, clean_memos
from memo_cleaner.overrides import (
    BUILT_IN_NORMALIZATION,
    apply_name_normalization,
    iter_mappings,
    lookup_mapping,
)


class TestApplyNameNormalization:
    """Tests for apply_name_normalization function."""

    def test_empty_candidate(self) -> None:
        """Test blank candidates stay empty."""
        assert apply_name_normalization("   ", [MappingEntry("", "x")]) == ""
        assert apply_name_normalization(None) == ""

    def test_built_in_is_exact(self) -> None:
        """Test the built-in table matches exactly, case included."""
        assert apply_name_normalization("AMAZON  MKTPL") == "Amazon"
        assert apply_name_normalization("amazon mktpl") == "amazon mktpl"

    def test_custom_mapping_is_case_insensitive(self) -> None:
        """Test user mappings ignore case and whitespace."""
        mappings = [MappingEntry(source="  john   SMITH ", target=" Johnny  S ")]
        assert apply_name_normalization("John Smith", mappings) == "Johnny S"

    def test_custom_mapping_applies_after_built_in(self) -> None:
        """Test a mapping keyed on the built-in result wins."""
        mappings = [MappingEntry(source="charlotte county utilities", target="CCU")]
        assert apply_name_normalization("CHARCO UTILITIES", mappings) == "CCU"

    def test_first_mapping_wins(self) -> None:
        """Test duplicate sources resolve to the first entry."""
        mappings = [
            MappingEntry(source="Acme", target="First"),
            MappingEntry(source="ACME", target="Second"),
        ]
        assert apply_name_normalization("acme", mappings) == "First"

    def test_no_match_returns_candidate(self) -> None:
        """Test unmatched candidates are returned normalized."""
        assert apply_name_normalization(" Local  Diner ", [MappingEntry("x", "y")]) == "Local Diner"

    def test_accepts_dict_shapes(self) -> None:
        """Test plain dict entries and from->to dicts are accepted."""
        assert apply_name_normalization("acme", [{"from": "ACME", "to": "Acme Inc"}]) == "Acme Inc"
        assert apply_name_normalization("acme", {"Acme": "Acme Co"}) == "Acme Co"

    def test_skips_unusable_entries(self) -> None:
        """Test entries of unknown shape are ignored."""
        mappings = [None, "acme", 42, {"from": "acme", "to": "Acme"}]
        assert list(iter_mappings(mappings)) == [("acme", "Acme")]
        assert apply_name_normalization("ACME", mappings) == "Acme"

    def test_lookup_mapping_miss(self) -> None:
        """Test lookup returns an empty string on a miss."""
        assert lookup_mapping("nothing", []) == ""
        assert lookup_mapping("nothing", None) == ""

    def test_built_in_table_is_read_only(self) -> None:
        """Test the built-in table cannot be modified."""
        assert isinstance(BUILT_IN_NORMALIZATION, MappingProxyType)
        with pytest.raises(TypeError):
            BUILT_IN_NORMALIZATION["NEW"] = "value"  # type: ignore[index]


class TestCleanMemo:
    """End-to-end tests for clean_memo."""

    def test_outgoing_wire(self) -> None:
        """Test WT wire beneficiary extraction."""
        assert clean_memo("WT 123456 /Bnf=G ACME CORP CO Srf#998877", []) == "ACME CORP"

    def test_outgoing_wire_then_mapping(self) -> None:
        """Test the extracted name goes through user mappings."""
        mappings = [MappingEntry(source="acme corp", target="Acme Corporation")]
        memo = "WT 123456 /Bnf=G ACME CORP CO Srf#998877"
        assert clean_memo(memo, mappings) == "Acme Corporation"

    def test_zelle(self) -> None:
        """Test Zelle recipient extraction."""
        assert clean_memo("Zelle to John Smith on 3/4 Ref#12345", []) == "John Smith"

    def test_card_purchase(self) -> None:
        """Test card clutter and state code are removed."""
        memo = "Purchase authorized on 03/04 STARBUCKS 123 MIAMI FL S1234567890123 Card 4321"
        assert clean_memo(memo, []) == "STARBUCKS 123 MIAMI"

    def test_fee(self) -> None:
        """Test fee relabeling."""
        assert clean_memo("Domestic Incoming Wire Fee", []) == "Domestic Wire Fee"

    def test_built_in_and_custom_converge(self) -> None:
        """Test built-in and custom paths both reach the same name."""
        mappings = [MappingEntry(source="amazon mktpl", target="Amazon")]
        assert clean_memo("AMAZON MKTPL", mappings) == "Amazon"
        assert clean_memo("amazon mktpl", mappings) == "Amazon"
        assert clean_memo("AMAZON MKTPL", []) == "Amazon"

    def test_built_in_then_custom_precedence(self) -> None:
        """Test A->B built-in plus B->C custom yields C."""
        mappings = [MappingEntry(source="AMAZON", target="Amazon.com")]
        assert clean_memo("AMAZON MKTPL", mappings) == "Amazon.com"

    def test_des_memo_then_built_in(self) -> None:
        """Test built-in table applies to extracted names."""
        assert clean_memo("ATT* BILL PAYMENT DES:ATT ID:1", []) == "AT&T"

    def test_unmatched_memo_equals_override_of_normalized(self) -> None:
        """Test memos outside every rule only get normalized and renamed."""
        for memo in ["  Local   Diner ", "CHARCO UTILITIES", "yrr  service"]:
            assert clean_memo(memo, []) == apply_name_normalization(" ".join(memo.split()), [])

    def test_never_empty_for_non_blank(self) -> None:
        """Test a non-blank memo never cleans to an empty string."""
        for memo in ["WT 1", "Business to Business ACH Debit", "Zelle to  x", "-"]:
            assert clean_memo(memo, [])

    def test_blank_memo(self) -> None:
        """Test blank memos clean to an empty string."""
        assert clean_memo(None, []) == ""
        assert clean_memo(" ", []) == ""

    def test_leading_byte_order_mark(self) -> None:
        """Test a memo cell starting with a BOM still matches its rule."""
        assert clean_memo("\ufeffZelle to Ann Lee Ref#1", []) == "Ann Lee"

    def test_deterministic(self) -> None:
        """Test repeated calls give the same result."""
        mappings = [MappingEntry(source="john smith", target="JS")]
        memo = "Zelle to John Smith on 3/4 Ref#12345"
        assert {clean_memo(memo, mappings) for _ in range(5)} == {"JS"}


class TestCleanMemos:
    """Tests for batch cleaning."""

    def test_preserves_order(self) -> None:
        """Test sequential and threaded batches keep input order."""
        memos = [
            "Zelle to John Smith on 3/4 Ref#12345",
            "Domestic Incoming Wire Fee",
            "AMAZON MKTPL",
            "Some Store",
        ] * 25
        expected = [clean_memo(memo, []) for memo in memos]

        assert clean_memos(memos) == expected
        assert clean_memos(memos, workers=4) == expected

    def test_accepts_generator_mappings(self) -> None:
        """Test a one-shot mapping iterable is read once for the batch."""
        entries = (entry for entry in [MappingEntry(source="some store", target="Store")])
        assert clean_memos(["Some Store", "some store"], entries) == ["Store", "Store"]
