"""Tests for AI profile analysis with a fake text generator."""

from datetime import datetime, timezone

from profile_analyzer.analysis.analyzer import (
    DEFAULT_KEYWORDS,
    DEFAULT_SCORES,
    DEFAULT_SUGGESTIONS,
    ProfileAnalyzer,
    build_scoring_prompt,
    clamp_score,
)
from profile_analyzer.profile.assembler import assemble_profile
from profile_analyzer.profile.models import ExperienceEntry, ProfileDraft


class ScriptedGenerator:
    """Answers prompts by matching a marker in the prompt text."""

    def __init__(self, replies, fail_on=()):
        self.replies = replies
        self.fail_on = fail_on
        self.prompts = []

    def submit(self, prompt):
        self.prompts.append(prompt)
        for marker in self.fail_on:
            if marker in prompt:
                raise RuntimeError("quota exceeded")
        for marker, reply in self.replies.items():
            if marker in prompt:
                return reply
        return ""


SCORES_REPLY = '{"tone": 82, "clarity": "71", "relevance": 140, "impact": -5, "keywords": 55.6, "overall": 66}'
SUGGESTIONS_REPLY = '{"headline": ["Name your stack"], "summary": [], "experience": ["Quantify"], "general": "oops"}'
KEYWORDS_REPLY = '{"present": ["Python"], "missing": ["Kubernetes"], "suggested": [], "score": 45}'

REPLIES = {
    "assign a score": SCORES_REPLY,
    "provide concise": SUGGESTIONS_REPLY,
    "provide detailed": SUGGESTIONS_REPLY,
    "Analyze the keywords": KEYWORDS_REPLY,
    "Rewrite this professional headline": "Staff Backend Engineer | Python",
    "Rewrite this professional summary": "Rewritten summary.",
    "Rewrite this professional experience": "Rewritten duty.",
}


def _assembled():
    draft = ProfileDraft(
        name="Jane Doe",
        headline="Backend Engineer",
        summary="I build APIs.",
        experience=[ExperienceEntry(title=f"Engineer {i}", company="Acme", description=f"Duty {i}") for i in range(4)],
        skills=["Python"],
    )
    return assemble_profile(draft, source_type="web")


class TestClampScore:
    def test_coerces_and_clamps(self):
        assert clamp_score("71", 0) == 71
        assert clamp_score(140, 0) == 100
        assert clamp_score(-5, 0) == 0
        assert clamp_score(55.6, 0) == 56
        assert clamp_score(None, 60) == 60
        assert clamp_score("high", 60) == 60


class TestProfileAnalyzer:
    def test_basic_analysis(self):
        generator = ScriptedGenerator(REPLIES)
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)
        analysis = ProfileAnalyzer(generator).analyze(_assembled(), target_role="Staff Engineer", now=now)

        assert analysis["scores"] == {
            "tone": 82,
            "clarity": 71,
            "relevance": 100,
            "impact": 0,
            "keywords": 56,
            "overall": 66,
            "completeness": 83,
        }
        assert analysis["suggestions"] == {
            "headline": ["Name your stack"],
            "summary": [],
            "experience": ["Quantify"],
            "skills": [],
            "general": [],
        }
        assert analysis["keywords"] == {"present": ["Python"], "missing": ["Kubernetes"], "suggested": [], "score": 45}
        assert analysis["rewritten"] == {}
        assert analysis["metadata"] == {
            "analyzedAt": "2024-01-01T00:00:00+00:00",
            "targetRole": "Staff Engineer",
            "analysisType": "basic",
        }
        assert len(generator.prompts) == 3
        assert "Staff Engineer" in generator.prompts[0]

    def test_detailed_analysis_rewrites_first_three_experiences(self):
        generator = ScriptedGenerator(REPLIES)
        analysis = ProfileAnalyzer(generator).analyze(_assembled(), analysis_type="detailed")
        rewritten = analysis["rewritten"]
        assert rewritten["headline"] == "Staff Backend Engineer | Python"
        assert rewritten["summary"] == "Rewritten summary."
        assert [e["title"] for e in rewritten["experience"]] == ["Engineer 0", "Engineer 1", "Engineer 2"]
        assert all(e["description"] == "Rewritten duty." for e in rewritten["experience"])

    def test_failed_rewrite_keeps_original(self):
        generator = ScriptedGenerator(REPLIES, fail_on=("Rewrite this professional summary",))
        analysis = ProfileAnalyzer(generator).analyze(_assembled(), analysis_type="detailed")
        assert analysis["rewritten"]["summary"] == "I build APIs."

    def test_generator_failure_falls_back_to_defaults(self):
        generator = ScriptedGenerator({}, fail_on=("",))
        analysis = ProfileAnalyzer(generator).analyze(_assembled())
        expected_scores = dict(DEFAULT_SCORES, completeness=83)
        assert analysis["scores"] == expected_scores
        assert analysis["suggestions"] == DEFAULT_SUGGESTIONS
        assert analysis["keywords"] == DEFAULT_KEYWORDS

    def test_unparseable_reply_falls_back_to_defaults(self):
        generator = ScriptedGenerator({"assign a score": "I cannot score this."})
        scores = ProfileAnalyzer(generator).calculate_scores(_assembled())
        assert scores["tone"] == DEFAULT_SCORES["tone"]
        assert scores["completeness"] == 83

    def test_defaults_are_not_shared(self):
        generator = ScriptedGenerator({}, fail_on=("",))
        analysis = ProfileAnalyzer(generator).analyze(_assembled())
        analysis["suggestions"]["general"].append("mutated")
        assert DEFAULT_SUGGESTIONS["general"] == ["Ensure all sections are complete and up-to-date"]


class TestPrompts:
    def test_scoring_prompt_without_role(self):
        prompt = build_scoring_prompt(_assembled().profile)
        assert "in general" in prompt
        assert "Jane Doe" in prompt
        assert "Not provided" not in prompt.split("Skills:")[1]
