"""PDF and text resume parsing."""

import logging
import time
from pathlib import Path
from typing import Callable, Optional

from profile_analyzer.config import AcquisitionConfig
from profile_analyzer.errors import AcquisitionError, ExtractionWarning, InsufficientDataError
from profile_analyzer.extraction.entries import (
    extract_certifications,
    extract_education,
    extract_experience,
    extract_languages,
    extract_skills,
    extract_summary,
)
from profile_analyzer.extraction.fields import extract_email, extract_location, extract_name, extract_phone
from profile_analyzer.extraction.normalizer import clean_text, to_lines
from profile_analyzer.extraction.sections import locate_sections
from profile_analyzer.profile.assembler import guarded
from profile_analyzer.profile.extractor import extract_profile
from profile_analyzer.profile.models import AssembledProfile, ProfileDraft
from profile_analyzer.utils.retry import retry_with_backoff

logger = logging.getLogger("profile_analyzer.profile.resume")

PDF_SUFFIXES = (".pdf",)
TEXT_SUFFIXES = (".txt", ".md", ".markdown")


class DocumentTextExtractor:
    """Heuristic extraction over document body text."""

    source_type = "document"

    def extract(self, raw: str) -> tuple[ProfileDraft, list[ExtractionWarning]]:
        warnings: list[ExtractionWarning] = []
        draft = ProfileDraft(has_contact=True)

        text = clean_text(raw)
        lines = to_lines(text)

        draft.email = guarded(warnings, "email", extract_email, text)
        draft.phone = guarded(warnings, "phone", extract_phone, text)
        draft.name = guarded(warnings, "name", extract_name, lines)
        draft.location = guarded(warnings, "location", extract_location, text)

        sections = guarded(warnings, "sections", locate_sections, lines, default=dict)

        draft.summary = guarded(warnings, "summary", extract_summary, lines, sections)
        draft.experience = guarded(warnings, "experience", extract_experience, lines, sections, default=list)
        draft.education = guarded(warnings, "education", extract_education, lines, sections, default=list)
        draft.skills = guarded(warnings, "skills", extract_skills, lines, sections, default=list)
        draft.certifications = guarded(
            warnings, "certifications", extract_certifications, lines, sections, default=list
        )
        draft.languages = guarded(warnings, "languages", extract_languages, lines, sections, default=list)

        if not draft.name and not draft.email and not draft.experience:
            logger.warning("Minimal data extracted from document text (sample: %r)", text[:300])

        return draft, warnings


def read_document(path: Path, max_pdf_pages: int = 10) -> str:
    """Read the text body of a resume file, raising AcquisitionError on failure."""
    if not path.exists():
        raise AcquisitionError(f"Resume file not found: {path}", source=str(path))

    suffix = path.suffix.lower()
    if suffix in PDF_SUFFIXES:
        return _extract_pdf_text(path, max_pdf_pages)

    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise AcquisitionError(f"Failed to read resume file {path}: {e}", source=str(path)) from e


def _extract_pdf_text(path: Path, max_pages: int) -> str:
    """Extract text from the first pages of a PDF file using PyPDF2."""
    try:
        from PyPDF2 import PdfReader
        from PyPDF2.errors import PdfReadError
    except ImportError:
        raise ImportError("PyPDF2 is required for PDF parsing. Install with: pip install PyPDF2")

    try:
        reader = PdfReader(str(path))
        if reader.is_encrypted:
            raise AcquisitionError("The PDF is password protected and cannot be processed", source=str(path))

        pages = []
        for index, page in enumerate(reader.pages):
            if index >= max_pages:
                break
            text = page.extract_text()
            if text:
                pages.append(text)
    except AcquisitionError:
        raise
    except PdfReadError as e:
        raise AcquisitionError(f"The file is not a valid PDF document: {e}", source=str(path)) from e
    except Exception as e:
        raise AcquisitionError(f"Failed to parse PDF: {e}", source=str(path)) from e

    logger.info("Extracted %d page(s) of text from %s", len(pages), path.name)
    return "\n".join(pages)


def parse_resume_text(
    text: str,
    source: str = "",
    target_role: str = "",
    analysis_type: str = "basic",
) -> AssembledProfile:
    """Extract and assemble a profile from document text. Never raises on malformed text."""
    return extract_profile(DocumentTextExtractor(), text, source, target_role, analysis_type)


def parse_resume(
    file_path: str,
    config: Optional[AcquisitionConfig] = None,
    target_role: str = "",
    analysis_type: str = "basic",
    sleep: Callable[[float], None] = time.sleep,
) -> AssembledProfile:
    """Parse a resume file (PDF, TXT, or MD) into an assembled profile."""
    config = config or AcquisitionConfig()
    path = Path(file_path)

    suffix = path.suffix.lower()
    if suffix not in PDF_SUFFIXES + TEXT_SUFFIXES:
        raise ValueError(f"Unsupported resume format: {suffix} (supported: .pdf, .txt, .md)")

    text = retry_with_backoff(
        lambda: read_document(path, config.max_pdf_pages),
        max_attempts=config.document_max_attempts,
        base_delay=config.document_base_delay,
        sleep=sleep,
    )

    if not text.strip():
        raise InsufficientDataError(
            f"Resume file is empty or has no extractable text: {file_path}",
            reason=InsufficientDataError.NOTHING_TO_READ,
            source=str(path),
        )

    logger.info("Read %d characters from %s", len(text), path.name)
    return parse_resume_text(text, source=str(path), target_role=target_role, analysis_type=analysis_type)
