"""Profile assembly, completeness scoring and the extraction fallback policy."""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Optional

from profile_analyzer.errors import ExtractionWarning, InsufficientDataError
from profile_analyzer.extraction.normalizer import normalize_inline, strip_markup
from profile_analyzer.profile.models import (
    AssembledProfile,
    CertificationEntry,
    ContactInfo,
    EducationEntry,
    ExperienceEntry,
    ExtractionMetadata,
    LanguageEntry,
    Profile,
    ProfileDraft,
)
from profile_analyzer.utils.text_processing import dedupe_preserve_order

logger = logging.getLogger("profile_analyzer.profile.assembler")

COMPLETENESS_FIELDS = ("name", "headline", "summary", "experience", "education", "skills")


def guarded(
    warnings: list[ExtractionWarning],
    label: str,
    func: Callable[..., Any],
    *args,
    default: Any = "",
) -> Any:
    """Run one extractor; on failure log it, record a warning and return the default.

    A callable default (``list``, ``dict``) is called to build a fresh value.
    """
    try:
        return func(*args)
    except Exception as e:
        warning = ExtractionWarning(f"{label}: {type(e).__name__}: {e}")
        logger.warning("Extraction of %s failed, using empty value: %s", label, e, exc_info=True)
        warnings.append(warning)
        return default() if callable(default) else default


def calculate_completeness(profile: Profile) -> int:
    """Percentage (0-100) of the core fields that are present."""
    present = 0
    for name in COMPLETENESS_FIELDS:
        value = getattr(profile, name, None)
        if isinstance(value, str):
            if value.strip():
                present += 1
        elif value:
            present += 1
    return int(round(present / len(COMPLETENESS_FIELDS) * 100))


def _clean(value: Optional[str]) -> str:
    return normalize_inline(strip_markup(value or ""))


def _clean_experience(entries: Iterable[ExperienceEntry]) -> tuple[ExperienceEntry, ...]:
    cleaned = []
    for entry in entries:
        item = ExperienceEntry(
            title=_clean(entry.title),
            company=_clean(entry.company),
            duration=_clean(entry.duration),
            description=_clean(entry.description),
        )
        if item.title or item.company:
            cleaned.append(item)
    return tuple(cleaned)


def _clean_education(entries: Iterable[EducationEntry]) -> tuple[EducationEntry, ...]:
    cleaned = (
        EducationEntry(school=_clean(e.school), degree=_clean(e.degree), year=_clean(e.year))
        for e in entries
    )
    return tuple(e for e in cleaned if e.school)


def _clean_languages(entries: Iterable[LanguageEntry]) -> tuple[LanguageEntry, ...]:
    cleaned = (LanguageEntry(language=_clean(e.language), proficiency=_clean(e.proficiency)) for e in entries)
    return tuple(e for e in cleaned if e.language)


def _clean_certifications(entries: Iterable[CertificationEntry]) -> tuple[CertificationEntry, ...]:
    cleaned = (
        CertificationEntry(name=_clean(e.name), issuer=_clean(e.issuer), date=_clean(e.date))
        for e in entries
    )
    return tuple(e for e in cleaned if e.name)


def assemble_profile(
    draft: ProfileDraft,
    *,
    source_type: str,
    source: str = "",
    target_role: str = "",
    analysis_type: str = "basic",
    warnings: Iterable[ExtractionWarning] = (),
    now: Optional[datetime] = None,
) -> AssembledProfile:
    """Freeze a draft into the canonical Profile and attach extraction metadata."""
    contact = None
    if draft.has_contact:
        contact = ContactInfo(email=_clean(draft.email), phone=_clean(draft.phone))

    profile = Profile(
        name=_clean(draft.name),
        headline=_clean(draft.headline),
        summary=_clean(draft.summary),
        location=_clean(draft.location),
        experience=_clean_experience(draft.experience),
        education=_clean_education(draft.education),
        skills=tuple(dedupe_preserve_order(_clean(s) for s in draft.skills)),
        languages=_clean_languages(draft.languages),
        certifications=_clean_certifications(draft.certifications),
        contact=contact,
    )

    completeness = calculate_completeness(profile)
    metadata = ExtractionMetadata(
        source_type=source_type,
        source=source,
        analyzed_at=now or datetime.now(timezone.utc),
        target_role=target_role,
        analysis_type=analysis_type,
        completeness=completeness,
        warnings=tuple(str(w) for w in warnings),
    )

    logger.info(
        "Assembled %s profile '%s': %d experience, %d education, %d skills, %d%% complete",
        source_type,
        profile.name or "Unknown",
        len(profile.experience),
        len(profile.education),
        len(profile.skills),
        completeness,
    )

    return AssembledProfile(profile=profile, metadata=metadata)


def require_identity(assembled: AssembledProfile) -> AssembledProfile:
    """Escalate a profile with neither name nor headline as a hard failure."""
    profile = assembled.profile
    if not profile.name and not profile.headline:
        source = assembled.metadata.source
        raise InsufficientDataError(
            f"Unable to interpret profile from {source or 'input'}: no name or headline could be extracted",
            reason=InsufficientDataError.UNINTERPRETABLE,
            source=source,
        )
    return assembled
