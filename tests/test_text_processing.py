"""Tests for text processing utilities."""

from profile_analyzer.utils.text_processing import capitalize_first, dedupe_preserve_order, slugify, truncate_text


class TestDedupePreserveOrder:
    def test_keeps_first_occurrence(self):
        assert dedupe_preserve_order(["Python", "Go", "Python", "", "Go", "Rust"]) == ["Python", "Go", "Rust"]

    def test_case_sensitive(self):
        assert dedupe_preserve_order(["Go", "go"]) == ["Go", "go"]

    def test_empty(self):
        assert dedupe_preserve_order([]) == []


class TestTruncateText:
    def test_short_text_unchanged(self):
        assert truncate_text("short", 10) == "short"

    def test_long_text_gets_ellipsis(self):
        assert truncate_text("abcdefghij", 4) == "abcd..."

    def test_none(self):
        assert truncate_text(None, 4) == ""


class TestSmallHelpers:
    def test_capitalize_first(self):
        assert capitalize_first("impact") == "Impact"
        assert capitalize_first("") == ""

    def test_slugify(self):
        assert slugify("Jane  O'Doe, PhD") == "jane-o-doe-phd"
        assert slugify("!!!") == "profile"
