"""Heading detection: map each known section to the line that opens it."""

import logging
from typing import Optional

logger = logging.getLogger("profile_analyzer.extraction.sections")

# Order matters: a line matching several sections is claimed by the first one listed.
SECTION_KEYWORDS: dict[str, tuple[str, ...]] = {
    "experience": ("experience", "work history", "employment", "professional experience", "career history"),
    "education": ("education", "academic background", "qualifications", "degrees"),
    "skills": ("skills", "technical skills", "competencies", "expertise"),
    "summary": ("summary", "objective", "profile", "about"),
    "certifications": ("certifications", "certificates", "licenses"),
    "languages": ("languages", "language skills"),
}


def _matching_section(line: str) -> Optional[str]:
    lower = line.lower().strip()
    for section, keywords in SECTION_KEYWORDS.items():
        if any(keyword in lower for keyword in keywords):
            return section
    return None


def locate_sections(lines: list[str]) -> dict[str, int]:
    """Return section name -> index of its first heading line.

    A located section keeps its first index; a line claimed by an already
    located section is not offered to the others.
    """
    sections: dict[str, int] = {}
    for index, line in enumerate(lines):
        section = _matching_section(line)
        if section is not None and section not in sections:
            sections[section] = index

    logger.debug("Located sections: %s", sections)
    return sections


def section_range(sections: dict[str, int], name: str, total: int) -> Optional[range]:
    """Content range of a section: from the line after its heading to the next heading."""
    start = sections.get(name)
    if start is None:
        return None
    following = [index for index in sections.values() if index > start]
    end = min(following) if following else total
    return range(start + 1, end)


def section_lines(lines: list[str], sections: dict[str, int], name: str) -> list[str]:
    bounds = section_range(sections, name, len(lines))
    if bounds is None:
        return []
    return lines[bounds.start:bounds.stop]
