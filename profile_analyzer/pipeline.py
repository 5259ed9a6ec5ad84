"""Pipeline: acquire a profile, analyze it and hand it on for rendering."""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from profile_analyzer.analysis.analyzer import ProfileAnalyzer
from profile_analyzer.config import AppConfig
from profile_analyzer.profile.assembler import require_identity
from profile_analyzer.profile.models import AssembledProfile

logger = logging.getLogger("profile_analyzer.pipeline")


@dataclass
class AnalysisResult:
    assembled: AssembledProfile
    analysis: Optional[dict] = None

    def to_dict(self) -> dict:
        data = self.assembled.to_dict()
        data["analysis"] = self.analysis
        return data


def acquire_profile(
    config: AppConfig,
    resume_path: str = "",
    linkedin_url: str = "",
    session=None,
    sleep: Callable[[float], None] = time.sleep,
) -> AssembledProfile:
    """Acquire and assemble a profile from a resume file or a LinkedIn URL.

    Raises InsufficientDataError when neither a name nor a headline could be
    extracted.
    """
    target_role = config.analysis.target_role
    analysis_type = config.analysis.analysis_type

    if resume_path:
        from profile_analyzer.profile.resume_parser import parse_resume
        logger.info("Parsing resume from: %s", resume_path)
        assembled = parse_resume(
            resume_path, config.acquisition, target_role=target_role, analysis_type=analysis_type, sleep=sleep
        )
    elif linkedin_url:
        from profile_analyzer.profile.linkedin_scraper import scrape_linkedin_profile
        logger.info("Scraping LinkedIn profile: %s", linkedin_url)
        assembled = scrape_linkedin_profile(
            linkedin_url,
            config.acquisition,
            session=session,
            target_role=target_role,
            analysis_type=analysis_type,
            sleep=sleep,
        )
    else:
        raise ValueError("No profile source given. Pass a resume path or a LinkedIn URL")

    for warning in assembled.metadata.warnings:
        logger.warning("Extraction: %s", warning)

    return require_identity(assembled)


def build_analyzer(config: AppConfig) -> Optional[ProfileAnalyzer]:
    """Analyzer for the configured model, or None when AI analysis is off."""
    if not config.analysis.enabled:
        logger.info("AI analysis disabled")
        return None
    if not config.api_keys.openai_api_key:
        logger.warning("No OpenAI API key configured - skipping AI analysis")
        return None

    from profile_analyzer.analysis.llm_client import OpenAITextGenerator
    generator = OpenAITextGenerator(
        api_key=config.api_keys.openai_api_key,
        model=config.analysis.model,
        temperature=config.analysis.temperature,
        max_tokens=config.analysis.max_tokens,
    )
    return ProfileAnalyzer(generator)


def run_analysis(
    config: AppConfig,
    resume_path: str = "",
    linkedin_url: str = "",
    analyzer: Optional[ProfileAnalyzer] = None,
    session=None,
    sleep: Callable[[float], None] = time.sleep,
) -> AnalysisResult:
    """Run acquisition and, when an analyzer is available, AI analysis."""
    start = time.time()

    logger.info("Step 1: Acquiring profile...")
    assembled = acquire_profile(config, resume_path, linkedin_url, session=session, sleep=sleep)
    logger.info(
        "Profile loaded: %s (%d skills, %d%% complete)",
        assembled.profile.name or "Unknown",
        len(assembled.profile.skills),
        assembled.completeness,
    )

    analysis = None
    if analyzer is not None:
        logger.info("Step 2: Running AI analysis...")
        analysis = analyzer.analyze(
            assembled,
            target_role=config.analysis.target_role,
            analysis_type=config.analysis.analysis_type,
        )

    logger.info("Pipeline complete in %.2fs", time.time() - start)
    return AnalysisResult(assembled=assembled, analysis=analysis)


def build_preview(assembled: AssembledProfile) -> dict:
    """Short overview of an extracted profile."""
    profile = assembled.profile
    return {
        "name": profile.name,
        "headline": profile.headline,
        "location": profile.location,
        "has_experience": bool(profile.experience),
        "has_education": bool(profile.education),
        "skills_count": len(profile.skills),
    }
