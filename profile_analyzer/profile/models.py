"""Profile data model."""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class ExperienceEntry:
    title: str = ""
    company: str = ""
    duration: str = ""  # free text, not parsed into dates
    description: str = ""


@dataclass(frozen=True)
class EducationEntry:
    school: str = ""
    degree: str = ""
    year: str = ""


@dataclass(frozen=True)
class LanguageEntry:
    language: str = ""
    proficiency: str = ""


@dataclass(frozen=True)
class CertificationEntry:
    name: str = ""
    issuer: str = ""
    date: str = ""


@dataclass(frozen=True)
class ContactInfo:
    email: str = ""
    phone: str = ""


@dataclass(frozen=True)
class Profile:
    """Canonical profile record, identical in shape for every acquisition source."""

    name: str = ""
    headline: str = ""
    summary: str = ""
    location: str = ""
    experience: tuple[ExperienceEntry, ...] = ()
    education: tuple[EducationEntry, ...] = ()
    skills: tuple[str, ...] = ()
    languages: tuple[LanguageEntry, ...] = ()
    certifications: tuple[CertificationEntry, ...] = ()
    contact: Optional[ContactInfo] = None  # document source only

    def to_dict(self) -> dict:
        """Convert to a JSON-compatible dictionary."""
        data = {
            "name": self.name,
            "headline": self.headline,
            "summary": self.summary,
            "location": self.location,
            "experience": [asdict(e) for e in self.experience],
            "education": [asdict(e) for e in self.education],
            "skills": list(self.skills),
            "languages": [asdict(e) for e in self.languages],
            "certifications": [asdict(e) for e in self.certifications],
        }
        if self.contact is not None:
            data["contact"] = asdict(self.contact)
        return data


@dataclass(frozen=True)
class ExtractionMetadata:
    source_type: str  # "document" or "web"
    source: str
    analyzed_at: datetime
    target_role: str = ""
    analysis_type: str = "basic"
    completeness: int = 0
    warnings: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "sourceType": self.source_type,
            "source": self.source,
            "analyzedAt": self.analyzed_at.isoformat(),
            "targetRole": self.target_role,
            "analysisType": self.analysis_type,
            "completeness": self.completeness,
            "warnings": list(self.warnings),
        }


@dataclass(frozen=True)
class AssembledProfile:
    """A profile plus the metadata handed to analysis and report rendering."""

    profile: Profile
    metadata: ExtractionMetadata

    @property
    def completeness(self) -> int:
        return self.metadata.completeness

    def to_dict(self) -> dict:
        return {"profile": self.profile.to_dict(), "metadata": self.metadata.to_dict()}


@dataclass
class ProfileDraft:
    """Mutable working copy filled in by an extractor, frozen by the assembler."""

    name: str = ""
    headline: str = ""
    summary: str = ""
    location: str = ""
    experience: list[ExperienceEntry] = field(default_factory=list)
    education: list[EducationEntry] = field(default_factory=list)
    skills: list[str] = field(default_factory=list)
    languages: list[LanguageEntry] = field(default_factory=list)
    certifications: list[CertificationEntry] = field(default_factory=list)
    email: str = ""
    phone: str = ""
    has_contact: bool = False
