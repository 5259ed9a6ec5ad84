"""Common interface of the document-text and DOM profile extractors."""

from typing import Protocol

from profile_analyzer.errors import ExtractionWarning
from profile_analyzer.profile.assembler import assemble_profile
from profile_analyzer.profile.models import AssembledProfile, ProfileDraft


class ProfileExtractor(Protocol):
    """Turns acquired raw content into a draft profile.

    Implementations never raise on malformed content: each field failure is
    recorded as an ExtractionWarning and the field stays empty. The two
    implementations keep their own heuristics (for example only the DOM
    variant dedupes skills itself); the assembler normalizes the result.
    """

    source_type: str

    def extract(self, raw: str) -> tuple[ProfileDraft, list[ExtractionWarning]]:
        ...


def extract_profile(
    extractor: ProfileExtractor,
    raw: str,
    source: str = "",
    target_role: str = "",
    analysis_type: str = "basic",
) -> AssembledProfile:
    """Run an extractor over raw content and assemble the result."""
    draft, warnings = extractor.extract(raw)
    return assemble_profile(
        draft,
        source_type=extractor.source_type,
        source=source,
        target_role=target_role,
        analysis_type=analysis_type,
        warnings=warnings,
    )
