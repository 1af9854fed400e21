#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_references.py
"""Unit tests for the per-compile reference and footnote tables."""

import pytest

from markast.references import FootnoteTable, ReferenceTable, normalize_reference_id


@pytest.mark.unit
class TestNormalizeReferenceId:
    """Tests for reference id normalization."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("foo", "foo"),
            ("FOO", "foo"),
            ("  Foo  Bar ", "foo bar"),
            ("a\nb", "a b"),
            ("", ""),
        ],
    )
    def test_normalize(self, raw, expected):
        """Test case folding and whitespace collapsing."""
        assert normalize_reference_id(raw) == expected


@pytest.mark.unit
class TestReferenceTable:
    """Tests for ReferenceTable."""

    def test_define_and_lookup(self):
        """Test that a defined reference can be looked up."""
        table = ReferenceTable()
        table.define("x", "http://x.com", "X")

        definition = table.lookup("x")
        assert definition.url == "http://x.com"
        assert definition.title == "X"
        assert "x" in table
        assert len(table) == 1

    def test_lookup_missing(self):
        """Test that a missing reference yields None."""
        assert ReferenceTable().lookup("nope") is None

    def test_first_definition_wins(self):
        """Test that duplicate definitions are ignored."""
        table = ReferenceTable()
        table.define("x", "http://first.com")
        table.define("X", "http://second.com")

        assert table.lookup("x").url == "http://first.com"
        assert len(table) == 1

    def test_undefined_in_citation_order(self):
        """Test that undefined citations are reported once each, in order."""
        table = ReferenceTable()
        for ref in ("b", "a", "B", "defined", "a"):
            table.cite(ref)
        table.define("defined", "http://d.com")

        assert table.undefined() == ["b", "a"]

    def test_contains_non_string(self):
        """Test membership with a non-string key."""
        assert 1 not in ReferenceTable()


@pytest.mark.unit
class TestFootnoteTable:
    """Tests for FootnoteTable."""

    def test_entries_in_definition_order(self):
        """Test that entries keep document order."""
        table = FootnoteTable()
        table.define("b", "second")
        table.define("a", "first")

        assert [entry.identifier for entry in table.entries] == ["b", "a"]
        assert table.lookup("a").body == "first"
        assert len(table) == 2

    def test_empty_is_falsy(self):
        """Test truthiness follows the number of definitions."""
        table = FootnoteTable()
        assert not table
        table.define("1", "note")
        assert table

    def test_entries_is_a_copy(self):
        """Test that mutating the returned list does not affect the table."""
        table = FootnoteTable()
        table.define("1", "note")
        table.entries.clear()
        assert len(table) == 1

    def test_undefined(self):
        """Test reporting of cited but undefined footnotes."""
        table = FootnoteTable()
        table.cite("1")
        table.cite("2")
        table.cite("2")
        table.define("1", "note")

        assert table.undefined() == ["2"]
        assert table.lookup("2") is None
