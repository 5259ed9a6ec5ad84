"""Small text utilities shared by extractors and the report renderer."""

import re
from typing import Iterable

_NON_SLUG = re.compile(r"[^a-z0-9]+")


def dedupe_preserve_order(items: Iterable[str]) -> list[str]:
    """Drop empty strings and exact duplicates, keeping first occurrences."""
    seen = set()
    unique = []
    for item in items:
        if item and item not in seen:
            seen.add(item)
            unique.append(item)
    return unique


def truncate_text(text: str, max_length: int) -> str:
    if not text or len(text) <= max_length:
        return text or ""
    return text[:max_length] + "..."


def capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:] if text else ""


def slugify(text: str, fallback: str = "profile") -> str:
    """Lowercase, hyphen-separated form of text for use in file names."""
    slug = _NON_SLUG.sub("-", (text or "").lower()).strip("-")
    return slug or fallback
