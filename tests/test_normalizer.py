"""Tests for text normalization."""

import pytest

from profile_analyzer.extraction.normalizer import clean_text, normalize_inline, strip_markup, to_lines

MESSY_INPUTS = [
    "Jane\r\nDoe\r\n\r\n\r\n\r\nEngineer",
    "Name:\t\tJane   Doe\n\tSkills:  Python,\t Go",
    "a \n \n \n \n b",
    "\r\r\n  lead  \n\n\n\n\n\n trail \t",
]


class TestCleanText:
    def test_normalizes_line_endings(self):
        assert clean_text("a\r\nb\rc") == "a\nb\nc"

    def test_collapses_spaces_and_tabs(self):
        assert clean_text("John\t  Smith") == "John Smith"

    def test_caps_blank_lines(self):
        assert clean_text("a\n\n\n\n\nb") == "a\n\nb"

    def test_empty(self):
        assert clean_text("") == ""
        assert clean_text(None) == ""


class TestToLines:
    def test_drops_blank_lines_and_trims(self):
        assert to_lines("  one \n\n   \n two\n") == ["one", "two"]

    def test_whitespace_only_input(self):
        assert to_lines(" \n\t\n ") == []


class TestInlineHelpers:
    def test_normalize_inline(self):
        assert normalize_inline("  Senior\n   Engineer  ") == "Senior Engineer"

    def test_strip_markup(self):
        assert strip_markup("<b>Acme</b> Corp") == "Acme Corp"
        assert strip_markup("") == ""


class TestIdempotence:
    @pytest.mark.parametrize("raw", MESSY_INPUTS)
    def test_clean_text_is_stable(self, raw):
        once = clean_text(raw)
        assert clean_text(once) == once

    @pytest.mark.parametrize("raw", MESSY_INPUTS)
    def test_to_lines_is_stable(self, raw):
        lines = to_lines(raw)
        assert to_lines("\n".join(lines)) == lines
