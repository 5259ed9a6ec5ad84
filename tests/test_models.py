"""Tests for data models."""

from dataclasses import FrozenInstanceError
from datetime import datetime, timezone

import pytest

from profile_analyzer.profile.models import (
    AssembledProfile,
    ContactInfo,
    ExtractionMetadata,
    Profile,
)


class TestProfile:
    def test_is_immutable(self):
        profile = Profile(name="Jane Doe")
        with pytest.raises(FrozenInstanceError):
            profile.name = "Other"

    def test_to_dict_omits_missing_contact(self):
        d = Profile(name="Jane Doe", skills=("Python",)).to_dict()
        assert d["name"] == "Jane Doe"
        assert d["skills"] == ["Python"]
        assert "contact" not in d

    def test_to_dict_includes_contact(self):
        profile = Profile(contact=ContactInfo(email="jane@doe.com", phone=""))
        assert profile.to_dict()["contact"] == {"email": "jane@doe.com", "phone": ""}


class TestExtractionMetadata:
    def test_to_dict_keys(self):
        metadata = ExtractionMetadata(
            source_type="document",
            source="resume.txt",
            analyzed_at=datetime(2024, 5, 1, tzinfo=timezone.utc),
            completeness=50,
            warnings=("name: boom",),
        )
        d = metadata.to_dict()
        assert d["sourceType"] == "document"
        assert d["analyzedAt"] == "2024-05-01T00:00:00+00:00"
        assert d["analysisType"] == "basic"
        assert d["warnings"] == ["name: boom"]

    def test_assembled_profile_exposes_completeness(self):
        metadata = ExtractionMetadata(source_type="web", source="", analyzed_at=datetime.now(), completeness=83)
        assembled = AssembledProfile(profile=Profile(), metadata=metadata)
        assert assembled.completeness == 83
        assert set(assembled.to_dict()) == {"profile", "metadata"}
