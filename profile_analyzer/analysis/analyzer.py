"""AI quality assessment of an assembled profile.

Each task (scores, suggestions, keywords, rewrites) is a separate generative
call. A failed call never fails the analysis: the task falls back to its
default record and the failure is logged.
"""

import copy
import json
import logging
from datetime import datetime, timezone
from typing import Optional

from profile_analyzer.analysis.llm_client import TextGenerator, extract_json_object
from profile_analyzer.profile.models import AssembledProfile, Profile

logger = logging.getLogger("profile_analyzer.analysis")

SCORE_KEYS = ("tone", "clarity", "relevance", "impact", "keywords", "overall")
SUGGESTION_KEYS = ("headline", "summary", "experience", "skills", "general")
KEYWORD_LIST_KEYS = ("present", "missing", "suggested")
MAX_REWRITTEN_EXPERIENCE = 3

DEFAULT_SCORES = {
    "tone": 70,
    "clarity": 65,
    "relevance": 60,
    "impact": 55,
    "keywords": 50,
    "overall": 60,
}

DEFAULT_SUGGESTIONS = {
    "headline": ["Make your headline more specific to your target role"],
    "summary": ["Add quantifiable achievements to your summary"],
    "experience": ["Use action verbs to describe your accomplishments"],
    "skills": ["Include more industry-relevant technical skills"],
    "general": ["Ensure all sections are complete and up-to-date"],
}

DEFAULT_KEYWORDS = {
    "present": [],
    "missing": [],
    "suggested": [],
    "score": 50,
}

REWRITE_INSTRUCTIONS = {
    "headline": "Make it more compelling and specific, highlighting key value proposition",
    "summary": "Enhance it with stronger action words, quantifiable achievements, and clearer value proposition",
    "experience": "Improve it with stronger action verbs, quantified results, and relevant keywords",
}


def clamp_score(value, fallback: int) -> int:
    """Coerce a generated score to an int in 0-100, or return the fallback."""
    try:
        score = int(round(float(value)))
    except (TypeError, ValueError):
        return fallback
    return max(0, min(100, score))


def _profile_block(profile: Profile) -> str:
    experience = [
        {"title": e.title, "company": e.company, "duration": e.duration, "description": e.description}
        for e in profile.experience
    ]
    education = [{"school": e.school, "degree": e.degree, "year": e.year} for e in profile.education]
    return (
        f"Name: {profile.name or 'Not provided'}\n"
        f"Headline: {profile.headline or 'Not provided'}\n"
        f"Summary: {profile.summary or 'Not provided'}\n"
        f"Experience: {json.dumps(experience, indent=2)}\n"
        f"Education: {json.dumps(education, indent=2)}\n"
        f"Skills: {', '.join(profile.skills) if profile.skills else 'Not provided'}"
    )


def build_scoring_prompt(profile: Profile, target_role: str = "") -> str:
    context = f"for the target role: {target_role}" if target_role else "in general"
    return (
        f"As a professional reviewer, analyze the following professional profile {context} and "
        "assign a score from 0-100 for each category below. Use only the information provided; "
        "do not assume details that are not present.\n\n"
        f"PROFILE:\n{_profile_block(profile)}\n\n"
        "Respond with ONLY a JSON object (no markdown) with these integer scores:\n"
        '- "tone": professional tone and language\n'
        '- "clarity": clear communication and structure\n'
        '- "relevance": relevance to the target role or industry\n'
        '- "impact": demonstration of achievements and results\n'
        '- "keywords": use of industry-relevant keywords\n'
        '- "overall": overall profile quality\n'
    )


def build_suggestions_prompt(profile: Profile, target_role: str = "", analysis_type: str = "basic") -> str:
    detail = "detailed and specific" if analysis_type == "detailed" else "concise and actionable"
    context = f"for the target role: {target_role}" if target_role else "for general professional improvement"
    return (
        f"Analyze this professional profile and provide {detail} suggestions {context}.\n\n"
        f"PROFILE:\n{_profile_block(profile)}\n\n"
        "Respond with ONLY a JSON object (no markdown) whose keys are "
        '"headline", "summary", "experience", "skills" and "general", '
        "each holding a list of suggestion strings.\n\n"
        "Focus on specific improvements per section, industry keywords to include, "
        "ways to quantify achievements and missing elements that should be added."
    )


def build_keywords_prompt(profile: Profile, target_role: str = "") -> str:
    context = f"for the role: {target_role}" if target_role else "for the current industry or field"
    return (
        f"Analyze the keywords in this professional profile {context}.\n\n"
        f"PROFILE:\n{json.dumps(profile.to_dict(), indent=2)}\n\n"
        "Respond with ONLY a JSON object (no markdown) containing:\n"
        '- "present": relevant keywords already in the profile\n'
        '- "missing": important keywords that should be added\n'
        '- "suggested": alternative or related keywords to consider\n'
        '- "score": keyword optimization score from 0 to 100\n'
    )


def build_rewrite_prompt(section: str, content: str, target_role: str = "") -> str:
    context = f" for a {target_role} role" if target_role else ""
    instruction = REWRITE_INSTRUCTIONS.get(section, "Improve clarity and impact")
    return (
        f"Rewrite this professional {section}{context}:\n\n"
        f"Original: {content}\n\n"
        "Instructions:\n"
        f"- {instruction}\n"
        "- Use professional language and relevant industry keywords\n"
        "- Keep the same general length\n"
        "- Maintain factual accuracy (don't make up numbers or achievements)\n\n"
        "Provide only the rewritten version, no other text."
    )


def _string_list(value) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item).strip() for item in value if str(item).strip()]


class ProfileAnalyzer:
    """Scores and critiques profiles through a TextGenerator."""

    def __init__(self, generator: TextGenerator):
        self.generator = generator

    def _ask_json(self, task: str, prompt: str, default: dict) -> dict:
        try:
            reply = self.generator.submit(prompt)
        except Exception as e:
            logger.warning("AI %s request failed, using defaults: %s", task, e)
            return copy.deepcopy(default)
        return extract_json_object(reply, default)

    def calculate_scores(self, assembled: AssembledProfile, target_role: str = "") -> dict:
        """Category scores plus the locally computed completeness."""
        raw = self._ask_json("scoring", build_scoring_prompt(assembled.profile, target_role), DEFAULT_SCORES)
        scores = {key: clamp_score(raw.get(key), DEFAULT_SCORES[key]) for key in SCORE_KEYS}
        scores["completeness"] = assembled.completeness
        return scores

    def generate_suggestions(
        self, assembled: AssembledProfile, target_role: str = "", analysis_type: str = "basic"
    ) -> dict:
        prompt = build_suggestions_prompt(assembled.profile, target_role, analysis_type)
        raw = self._ask_json("suggestions", prompt, DEFAULT_SUGGESTIONS)
        return {key: _string_list(raw.get(key)) for key in SUGGESTION_KEYS}

    def analyze_keywords(self, assembled: AssembledProfile, target_role: str = "") -> dict:
        raw = self._ask_json("keywords", build_keywords_prompt(assembled.profile, target_role), DEFAULT_KEYWORDS)
        keywords = {key: _string_list(raw.get(key)) for key in KEYWORD_LIST_KEYS}
        keywords["score"] = clamp_score(raw.get("score"), DEFAULT_KEYWORDS["score"])
        return keywords

    def rewrite_section(self, section: str, content: str, target_role: str = "") -> str:
        """Rewritten text, or the original content if generation fails."""
        try:
            rewritten = self.generator.submit(build_rewrite_prompt(section, content, target_role)).strip()
        except Exception as e:
            logger.warning("AI rewrite of %s failed, keeping original: %s", section, e)
            return content
        return rewritten or content

    def rewrite_content(self, assembled: AssembledProfile, target_role: str = "") -> dict:
        profile = assembled.profile
        rewritten = {}

        if profile.headline:
            rewritten["headline"] = self.rewrite_section("headline", profile.headline, target_role)
        if profile.summary:
            rewritten["summary"] = self.rewrite_section("summary", profile.summary, target_role)

        experience = []
        for entry in profile.experience[:MAX_REWRITTEN_EXPERIENCE]:
            if entry.description:
                experience.append({
                    "title": entry.title,
                    "company": entry.company,
                    "duration": entry.duration,
                    "description": self.rewrite_section("experience", entry.description, target_role),
                })
        if experience:
            rewritten["experience"] = experience

        return rewritten

    def analyze(
        self,
        assembled: AssembledProfile,
        target_role: str = "",
        analysis_type: str = "basic",
        now: Optional[datetime] = None,
    ) -> dict:
        """Run every analysis task; rewriting runs only for detailed analysis."""
        logger.info(
            "Analyzing profile '%s' (%s analysis%s)",
            assembled.profile.name or "Unknown",
            analysis_type,
            f", target role: {target_role}" if target_role else "",
        )

        analysis = {
            "scores": self.calculate_scores(assembled, target_role),
            "suggestions": self.generate_suggestions(assembled, target_role, analysis_type),
            "keywords": self.analyze_keywords(assembled, target_role),
            "rewritten": {},
            "metadata": {
                "analyzedAt": (now or datetime.now(timezone.utc)).isoformat(),
                "targetRole": target_role,
                "analysisType": analysis_type,
            },
        }

        if analysis_type == "detailed":
            analysis["rewritten"] = self.rewrite_content(assembled, target_role)

        logger.info("Analysis complete: overall score %d", analysis["scores"]["overall"])
        return analysis
