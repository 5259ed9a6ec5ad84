"""Per-section entry parsers for document text."""

import logging
import re

from profile_analyzer.extraction.heuristics import apply_follow_up, is_job_header, parse_job_line
from profile_analyzer.extraction.sections import section_lines
from profile_analyzer.profile.models import (
    CertificationEntry,
    EducationEntry,
    ExperienceEntry,
    LanguageEntry,
)

logger = logging.getLogger("profile_analyzer.extraction.entries")

EDUCATION_KEYWORDS = ("university", "college", "institute", "school", "bachelor", "master", "phd", "degree")

SKILL_DELIMITERS = re.compile(r"[,•·\n]")


def _new_draft(line: str) -> dict:
    title, company = parse_job_line(line)
    return {"title": title, "company": company, "duration": "", "description": ""}


def _freeze(draft: dict) -> ExperienceEntry:
    return ExperienceEntry(
        title=draft["title"],
        company=draft["company"],
        duration=draft["duration"],
        description=draft["description"],
    )


def parse_experience_lines(lines: list[str]) -> list[ExperienceEntry]:
    """Segment an experience section into entries.

    Header lines open a new entry; the line right after a header may supply
    the duration or company; remaining lines become the description.
    """
    entries: list[ExperienceEntry] = []
    current = None
    buffer: list[str] = []

    def flush_buffer():
        nonlocal buffer
        if current is not None and buffer:
            current["description"] = " ".join(buffer).strip()
        buffer = []

    def emit():
        if current is not None and (current["title"] or current["company"]):
            entries.append(_freeze(current))

    i = 0
    while i < len(lines):
        line = lines[i].strip()

        if not line:
            flush_buffer()
        elif is_job_header(line):
            flush_buffer()
            emit()
            current = _new_draft(line)
            if i + 1 < len(lines) and apply_follow_up(current, lines[i + 1].strip()):
                i += 1
        elif current is not None:
            buffer.append(line)
        i += 1

    flush_buffer()
    emit()

    logger.debug("Parsed %d experience entries from %d lines", len(entries), len(lines))
    return entries


def extract_experience(lines: list[str], sections: dict[str, int]) -> list[ExperienceEntry]:
    return parse_experience_lines(section_lines(lines, sections, "experience"))


def extract_education(lines: list[str], sections: dict[str, int]) -> list[EducationEntry]:
    entries = []
    for line in section_lines(lines, sections, "education"):
        line = line.strip()
        if line and any(keyword in line.lower() for keyword in EDUCATION_KEYWORDS):
            entries.append(EducationEntry(school=line))
    return entries


def extract_skills(lines: list[str], sections: dict[str, int]) -> list[str]:
    """Split the skills section on commas and bullets. Duplicates are kept here."""
    text = " ".join(section_lines(lines, sections, "skills"))
    return [skill.strip() for skill in SKILL_DELIMITERS.split(text) if skill.strip()]


def extract_languages(lines: list[str], sections: dict[str, int]) -> list[LanguageEntry]:
    return [
        LanguageEntry(language=line.strip())
        for line in section_lines(lines, sections, "languages")
        if line.strip()
    ]


def extract_certifications(lines: list[str], sections: dict[str, int]) -> list[CertificationEntry]:
    return [
        CertificationEntry(name=line.strip())
        for line in section_lines(lines, sections, "certifications")
        if line.strip()
    ]


def extract_summary(lines: list[str], sections: dict[str, int]) -> str:
    return " ".join(section_lines(lines, sections, "summary")).strip()
