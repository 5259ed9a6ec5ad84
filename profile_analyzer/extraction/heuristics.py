"""Rule tables used to segment experience sections.

Each classifier is an ordered list of named rules evaluated top to bottom,
so a rule can be inspected, reordered or tested on its own.
"""

import re
from typing import Callable, Optional

JOB_TITLE_KEYWORDS = (
    "manager", "engineer", "analyst", "director", "specialist", "coordinator",
    "developer", "designer", "architect", "lead", "senior", "junior",
    "associate", "assistant", "executive", "officer", "supervisor",
    "consultant", "administrator", "technician", "intern",
)

TITLE_COMPANY_COMMA = re.compile(r"^[A-Z][^,]+,\s*[A-Z][^,]+")
TITLE_KEYWORD = re.compile(
    r"\b(manager|engineer|analyst|director|specialist|coordinator|developer|designer)\b",
    re.IGNORECASE,
)
AT_COMPANY = re.compile(r"\b(at|@)\s+[A-Z]")
HEADER_COMPANY_SUFFIX = re.compile(r"\b(inc|llc|corp|ltd|company|group|organization)\b", re.IGNORECASE)
COMPANY_SUFFIX = re.compile(r"\b(inc|llc|corp|ltd|company|group|organization|firm)\b", re.IGNORECASE)
CAPITALIZED_WORDS = re.compile(r"^[A-Z][A-Za-z\s&]+$")

DATE_RANGE_PATTERNS = (
    re.compile(r"\b\d{4}\s*[-–]\s*\d{4}\b"),
    re.compile(r"\b\d{4}\s*[-–]\s*present\b", re.IGNORECASE),
    re.compile(r"\b(jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*\s+\d{4}", re.IGNORECASE),
    re.compile(r"\b\d{1,2}/\d{4}\s*[-–]\s*\d{1,2}/\d{4}\b"),
)

# "X at Y", "X, Y", "X | Y", "X – Y", tried in this order.
JOB_LINE_SPLITS = (
    re.compile(r"^(.+?)\s+at\s+(.+)$", re.IGNORECASE),
    re.compile(r"^([^,]+),\s*(.+)$"),
    re.compile(r"^([^|]+)\|\s*(.+)$"),
    re.compile(r"^([^–]+)–\s*(.+)$"),
)


def _has_title_keyword(line: str) -> bool:
    lower = line.lower()
    return (
        any(keyword in lower for keyword in JOB_TITLE_KEYWORDS)
        and len(line) < 80
        and "@" not in line
        and ".com" not in line
    )


def _has_header_shape(line: str) -> bool:
    indicators = (TITLE_COMPANY_COMMA, TITLE_KEYWORD, AT_COMPANY, HEADER_COMPANY_SUFFIX)
    return any(pattern.search(line) for pattern in indicators) and len(line) < 100


HEADER_RULES: tuple[tuple[str, Callable[[str], bool]], ...] = (
    ("title_keyword", _has_title_keyword),
    ("header_shape", _has_header_shape),
)


def header_rule(line: str) -> Optional[str]:
    """Name of the first header rule that fires for this line, if any."""
    for name, predicate in HEADER_RULES:
        if predicate(line):
            return name
    return None


def is_job_header(line: str) -> bool:
    return header_rule(line) is not None


def looks_like_date_range(line: str) -> bool:
    return len(line) < 50 and any(pattern.search(line) for pattern in DATE_RANGE_PATTERNS)


def looks_like_company(line: str) -> bool:
    return (
        bool(COMPANY_SUFFIX.search(line) or CAPITALIZED_WORDS.match(line))
        and 2 < len(line) < 80
        and not looks_like_date_range(line)
    )


def parse_job_line(line: str) -> tuple[str, str]:
    """Split a header line into (title, company); unsplittable lines are all title."""
    line = line.strip()
    for pattern in JOB_LINE_SPLITS:
        match = pattern.match(line)
        if match:
            return match.group(1).strip(), match.group(2).strip()
    return line, ""


# Follow-up line rules: (predicate(draft, line), field to fill). First match wins.
FOLLOW_UP_RULES: tuple[tuple[Callable[[dict, str], bool], str], ...] = (
    (lambda draft, line: looks_like_date_range(line) and not draft["duration"], "duration"),
    (lambda draft, line: looks_like_company(line) and not draft["company"], "company"),
)


def apply_follow_up(draft: dict, line: str) -> bool:
    """Fill one empty field of the draft from the line after a header.

    Returns True when the line was consumed.
    """
    for predicate, field_name in FOLLOW_UP_RULES:
        if predicate(draft, line):
            draft[field_name] = line
            return True
    return False
