"""Raw text cleanup into the canonical line sequence."""

import re

_MULTI_SPACE = re.compile(r" {2,}")
_MULTI_NEWLINE = re.compile(r"\n{3,}")
_ANY_WHITESPACE = re.compile(r"\s+")
_MARKUP_TAG = re.compile(r"<[^>]+>")


def clean_text(text: str) -> str:
    """Normalize line endings and spacing while keeping single line breaks."""
    if not text:
        return ""
    text = text.replace("\r\n", "\n").replace("\r", "\n").replace("\t", " ")
    text = _MULTI_SPACE.sub(" ", text)
    text = _MULTI_NEWLINE.sub("\n\n", text)
    return text.strip()


def to_lines(text: str) -> list[str]:
    """Split cleaned text into trimmed, non-empty lines."""
    return [line.strip() for line in clean_text(text).split("\n") if line.strip()]


def normalize_inline(text: str) -> str:
    """Collapse all whitespace (DOM text nodes often carry newlines and indentation)."""
    if not text:
        return ""
    return _ANY_WHITESPACE.sub(" ", text).strip()


def strip_markup(text: str) -> str:
    return _MARKUP_TAG.sub("", text) if text else ""
