"""Tests for report building and rendering."""

from datetime import datetime

from profile_analyzer.profile.assembler import assemble_profile
from profile_analyzer.profile.models import ExperienceEntry, ProfileDraft
from profile_analyzer.report.report import (
    assessment_label,
    build_report_sections,
    format_experience,
    generate_key_insights,
    render_report_html,
    render_report_json,
    render_report_text,
    report_filename,
    score_bar,
)

ANALYSIS = {
    "scores": {
        "tone": 82,
        "clarity": 71,
        "relevance": 60,
        "impact": 40,
        "keywords": 55,
        "overall": 66,
        "completeness": 67,
    },
    "suggestions": {"headline": ["Name your stack"], "summary": [], "general": ["Add metrics"]},
    "keywords": {"present": ["Python"], "missing": ["Kubernetes"], "suggested": [], "score": 45},
    "rewritten": {
        "headline": "Staff Backend Engineer",
        "experience": [{"title": "Engineer", "company": "Acme", "description": "Rewritten duty."}],
    },
    "metadata": {"analyzedAt": "2024-01-01T00:00:00+00:00", "targetRole": "", "analysisType": "detailed"},
}


def _assembled(**overrides):
    fields = dict(
        name="Jane Doe",
        headline="R&D Engineer",
        summary="x" * 250,
        experience=[ExperienceEntry(title="Engineer", company="Acme", duration="2020 - 2023")],
        skills=["Python", "Go"],
        email="jane@doe.com",
        has_contact=True,
    )
    fields.update(overrides)
    return assemble_profile(ProfileDraft(**fields), source_type="document", source="cv.txt")


class TestHelpers:
    def test_assessment_label_thresholds(self):
        assert assessment_label(80) == "Excellent"
        assert assessment_label(79) == "Good"
        assert assessment_label(65) == "Good"
        assert assessment_label(50) == "Fair"
        assert assessment_label(49) == "Needs Improvement"

    def test_score_bar(self):
        assert score_bar(100) == "█" * 20
        assert score_bar(0) == "░" * 20
        assert score_bar(47) == "█" * 9 + "░" * 11

    def test_format_experience(self):
        entries = [ExperienceEntry(title="Engineer", company="Acme"), ExperienceEntry(company="Hooli")]
        assert format_experience(entries) == "Engineer at Acme; Unknown Title at Hooli"


class TestKeyInsights:
    def test_insights(self):
        assert generate_key_insights(ANALYSIS) == [
            "Impact needs the most improvement (40/100)",
            "Strong performance in tone (82/100)",
            "Profile is 67% complete - consider adding missing sections",
            "Keyword optimization can be improved to increase visibility",
        ]

    def test_no_strong_area_and_complete_profile(self):
        analysis = {"scores": {"tone": 60, "clarity": 50, "overall": 55, "completeness": 100}, "keywords": {}}
        assert generate_key_insights(analysis) == ["Clarity needs the most improvement (50/100)"]

    def test_empty_analysis(self):
        assert generate_key_insights({}) == ["Profile is 0% complete - consider adding missing sections"]


class TestBuildReportSections:
    def test_extraction_only(self):
        sections = build_report_sections(_assembled(), generated_at=datetime(2024, 3, 5))
        titles = [s.title for s in sections]
        assert titles == ["Profile Analysis Report", "Extracted Profile", ""]
        assert "Generated on: March 05, 2024" in sections[0].lines
        profile_lines = sections[1].lines
        assert "Email: jane@doe.com" in profile_lines
        assert "Experience: Engineer at Acme (2020 - 2023)" in profile_lines
        assert f"Summary: {'x' * 200}..." in profile_lines

    def test_full_analysis(self):
        titles = [s.title for s in build_report_sections(_assembled(), ANALYSIS)]
        assert titles == [
            "Profile Analysis Report",
            "Executive Summary",
            "Profile Scorecard",
            "Detailed Analysis",
            "Improvement Suggestions",
            "Headline",
            "General",
            "Enhanced Content Suggestions",
            "Enhanced Headline",
            "Engineer at Acme",
            "Keyword Analysis",
            "Extracted Profile",
            "",
        ]

    def test_optional_sections_can_be_dropped(self):
        sections = build_report_sections(_assembled(), ANALYSIS, include_scorecard=False, include_rewritten=False)
        titles = [s.title for s in sections]
        assert "Profile Scorecard" not in titles
        assert "Enhanced Content Suggestions" not in titles

    def test_executive_summary(self):
        summary = build_report_sections(_assembled(), ANALYSIS)[1]
        assert summary.lines[0] == "Overall Profile Score: 66/100 (Good)"
        assert summary.lines[1] == "Profile Completeness: 67%"
        assert summary.lines[3].startswith("1. Impact")

    def test_scorecard_skips_overall_and_completeness(self):
        scorecard = build_report_sections(_assembled(), ANALYSIS)[2]
        assert len(scorecard.lines) == 5
        assert scorecard.lines[0].startswith("Tone:")
        assert "82/100" in scorecard.lines[0]

    def test_extraction_warnings_are_listed(self):
        assembled = assemble_profile(ProfileDraft(name="Jane"), source_type="web", warnings=["skills: boom"])
        sections = build_report_sections(assembled)
        assert sections[-2].title == "Extraction Warnings"
        assert sections[-2].lines == ["skills: boom"]


class TestRendering:
    def test_text(self):
        text = render_report_text(build_report_sections(_assembled(), ANALYSIS))
        assert "Profile Analysis Report\n" + "=" * 23 in text
        assert "• Name your stack" in text
        assert "Keyword Optimization Score: 45/100" in text
        assert "Recommended Keywords to Add: Kubernetes" in text

    def test_html_escapes_content(self):
        html = render_report_html(build_report_sections(_assembled(), ANALYSIS))
        assert html.startswith("<!DOCTYPE html>")
        assert "R&amp;D Engineer" in html
        assert "R&D Engineer" not in html
        assert "<h2>Executive Summary</h2>" in html
        assert '<pre class="scorecard">' in html
        assert "<li>Name your stack</li>" in html

    def test_json(self):
        import json

        data = json.loads(render_report_json(_assembled(), ANALYSIS))
        assert data["profile"]["skills"] == ["Python", "Go"]
        assert data["metadata"]["sourceType"] == "document"
        assert data["analysis"]["keywords"]["score"] == 45


class TestReportFilename:
    def test_filename(self):
        name = report_filename("Jane Doe", "html", now=datetime(2024, 3, 5, 14, 30, 0))
        assert name == "profile-analysis-jane-doe-20240305-143000.html"

    def test_text_extension_and_missing_name(self):
        name = report_filename("", "text", now=datetime(2024, 3, 5, 14, 30, 0))
        assert name == "profile-analysis-profile-20240305-143000.txt"
