"""Identifier extraction from filenames under each match rule."""

import pytest

from luhmann.vault.ids import file_to_id, is_zettel_file


def test_strict_accepts_bare_identifier():
    assert file_to_id("1a2", "strict") == "1a2"


def test_strict_rejects_trailing_text():
    assert file_to_id("1a2 note", "strict") == ""
    assert file_to_id("1a2_note", "strict") == ""


def test_separator_extracts_identifier_before_separator():
    assert file_to_id("1a2 - My Note", "separator", " - ") == "1a2"


def test_separator_requires_separator():
    assert file_to_id("1a2note", "separator", " - ") == ""
    assert file_to_id("1a2", "separator", " - ") == ""


def test_separator_is_matched_literally():
    assert file_to_id("1a2.title", "separator", ".") == "1a2"
    assert file_to_id("1a2xtitle", "separator", ".") == ""


def test_fuzzy_ignores_trailing_text():
    assert file_to_id("1a2_note", "fuzzy") == "1a2"
    assert file_to_id("1a2 - My Note", "fuzzy") == "1a2"


def test_no_leading_identifier():
    for rule in ("strict", "separator", "fuzzy"):
        assert file_to_id("Note 1a2", rule, " - ") == ""
        assert file_to_id("", rule, " - ") == ""


def test_unknown_match_rule_is_rejected():
    with pytest.raises(ValueError, match="Unknown match rule"):
        file_to_id("1a2", "loose")


def test_is_zettel_file():
    assert is_zettel_file("1a2.md")
    assert is_zettel_file("1a2 - Title.md", "separator", " - ")
    assert not is_zettel_file("1a2.txt")
    assert not is_zettel_file("README.md")
    assert not is_zettel_file("1a2 - Title.md", "strict")


def test_strict_rejects_trailing_newline():
    assert file_to_id("1a2\n", "strict") == ""
    assert not is_zettel_file("1a2\n.md")
