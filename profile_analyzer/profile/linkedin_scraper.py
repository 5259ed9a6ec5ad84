"""Public LinkedIn profile scraping.

LinkedIn restricts scraping heavily: this works on public profiles only and
the selectors may break when LinkedIn changes its markup. Every selector list
is tried in order and the first element with text wins.
"""

import logging
import re
import time
from typing import Callable, Optional
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup

from profile_analyzer.config import AcquisitionConfig
from profile_analyzer.errors import AcquisitionError, ExtractionWarning
from profile_analyzer.extraction.normalizer import normalize_inline
from profile_analyzer.profile.assembler import guarded
from profile_analyzer.profile.extractor import extract_profile
from profile_analyzer.profile.models import (
    AssembledProfile,
    CertificationEntry,
    EducationEntry,
    ExperienceEntry,
    LanguageEntry,
    ProfileDraft,
)
from profile_analyzer.utils.http_client import fetch_page, open_session
from profile_analyzer.utils.retry import retry_with_backoff
from profile_analyzer.utils.text_processing import dedupe_preserve_order

logger = logging.getLogger("profile_analyzer.profile.linkedin")

LINKEDIN_PROFILE_URL = re.compile(r"^https://(www\.)?linkedin\.com/in/[a-zA-Z0-9-]+/?$")

NAME_SELECTORS = (
    "h1.text-heading-xlarge",
    ".pv-text-details__left-panel h1",
    ".mt2.relative h1",
    '[data-anonymize="person-name"]',
    ".top-card-layout__title",
    "h1",
)
HEADLINE_SELECTORS = (
    ".text-body-medium.break-words",
    ".pv-text-details__left-panel .text-body-medium",
    ".mt1.text-body-medium",
    ".top-card-layout__headline",
)
SUMMARY_SELECTORS = (
    '#about ~ * .pv-shared-text-with-see-more .inline-show-more-text span[aria-hidden="true"]',
    '.pv-shared-text-with-see-more .inline-show-more-text span[aria-hidden="true"]',
    ".pv-about-section .pv-about__summary-text .inline-show-more-text",
    '[data-section="summary"] .pv-shared-text-with-see-more',
    "section.summary .core-section-container__content",
)
LOCATION_SELECTORS = (
    ".text-body-small.inline.t-black--light.break-words",
    ".pv-text-details__left-panel .text-body-small",
    ".mt1.text-body-small",
    ".top-card__subline-item",
)

ITEM_TITLE = '.mr1.t-bold span[aria-hidden="true"]'
ITEM_LINK_TITLE = '.mr1.hoverable-link-text.t-bold span[aria-hidden="true"]'
ITEM_SUBTITLE = '.t-14.t-normal span[aria-hidden="true"]'
ITEM_CAPTION = '.t-14.t-normal.t-black--light span[aria-hidden="true"]'
ITEM_DESCRIPTION = '.pv-shared-text-with-see-more span[aria-hidden="true"]'

AUTH_WALL_SELECTORS = (
    '[data-test-id="guest-homepage-basic-join-flow"]',
    ".authwall",
    ".guest-homepage",
    'button[data-tracking-control-name="guest-homepage-basic-join-flow-submit"]',
)
AUTH_WALL_TITLES = ("Sign In", "Join LinkedIn")
AUTH_WALL_URL_MARKERS = ("authwall", "/login")
NOT_FOUND_MARKERS = ("Page not found", "This profile was not found")


def is_valid_linkedin_url(url: str) -> bool:
    return bool(LINKEDIN_PROFILE_URL.match(url or ""))


def extract_linkedin_username(url: str) -> Optional[str]:
    """Return the handle following ``/in/`` in a profile URL, or None."""
    try:
        parts = urlparse(url).path.split("/")
    except ValueError:
        logger.debug("Unparseable LinkedIn URL: %s", url)
        return None
    if "in" in parts:
        index = parts.index("in")
        if index + 1 < len(parts) and parts[index + 1]:
            return parts[index + 1]
    return None


def _element_text(element) -> str:
    return normalize_inline(element.get_text(" ", strip=True))


def _first_text(root, selectors, reject: tuple[str, ...] = ()) -> str:
    for selector in selectors:
        element = root.select_one(selector)
        if element is None:
            continue
        text = _element_text(element)
        if text and not any(marker in text for marker in reject):
            return text
    return ""


def _joined_text(root, selector: str, first: bool = False) -> str:
    elements = root.select(selector)
    if first:
        elements = elements[:1]
    return normalize_inline(" ".join(_element_text(e) for e in elements))


def _section_items(soup: BeautifulSoup, anchor_id: str) -> list:
    """List items of the profile card whose anchor element carries ``anchor_id``."""
    anchor = soup.find(id=anchor_id)
    if anchor is None or anchor.parent is None:
        return []
    return anchor.parent.find_all("li")


def extract_name(soup: BeautifulSoup) -> str:
    return _first_text(soup, NAME_SELECTORS)


def extract_headline(soup: BeautifulSoup) -> str:
    return _first_text(soup, HEADLINE_SELECTORS)


def extract_summary(soup: BeautifulSoup) -> str:
    return _first_text(soup, SUMMARY_SELECTORS)


def extract_location(soup: BeautifulSoup) -> str:
    return _first_text(soup, LOCATION_SELECTORS, reject=("Contact info",))


def extract_experience(soup: BeautifulSoup) -> list[ExperienceEntry]:
    entries = []
    for item in _section_items(soup, "experience"):
        title = _joined_text(item, ITEM_TITLE)
        company = _joined_text(item, ITEM_SUBTITLE, first=True)
        if title and company:
            entries.append(ExperienceEntry(
                title=title,
                company=company,
                duration=_joined_text(item, ITEM_CAPTION),
                description=_joined_text(item, ITEM_DESCRIPTION),
            ))
    return entries


def extract_education(soup: BeautifulSoup) -> list[EducationEntry]:
    entries = []
    for item in _section_items(soup, "education"):
        school = _joined_text(item, ITEM_LINK_TITLE)
        if school:
            entries.append(EducationEntry(
                school=school,
                degree=_joined_text(item, ITEM_SUBTITLE, first=True),
                year=_joined_text(item, ITEM_CAPTION),
            ))
    return entries


def extract_skills(soup: BeautifulSoup) -> list[str]:
    """Skill names from the skills card, deduplicated in page order."""
    anchor = soup.find(id="skills")
    if anchor is None or anchor.parent is None:
        return []
    return dedupe_preserve_order(_element_text(e) for e in anchor.parent.select(ITEM_LINK_TITLE))


def extract_languages(soup: BeautifulSoup) -> list[LanguageEntry]:
    entries = []
    for item in _section_items(soup, "languages"):
        language = _joined_text(item, ITEM_TITLE)
        if language:
            entries.append(LanguageEntry(language=language, proficiency=_joined_text(item, ITEM_SUBTITLE)))
    return entries


def extract_certifications(soup: BeautifulSoup) -> list[CertificationEntry]:
    entries = []
    for item in _section_items(soup, "licenses_and_certifications"):
        name = _joined_text(item, ITEM_TITLE)
        issuer = _joined_text(item, ITEM_SUBTITLE, first=True)
        if name and issuer:
            entries.append(CertificationEntry(name=name, issuer=issuer, date=_joined_text(item, ITEM_CAPTION)))
    return entries


class LinkedInDomExtractor:
    """Selector-based extraction over a LinkedIn profile page."""

    source_type = "web"

    def extract(self, raw: str) -> tuple[ProfileDraft, list[ExtractionWarning]]:
        warnings: list[ExtractionWarning] = []
        draft = ProfileDraft()
        soup = BeautifulSoup(raw or "", "lxml")

        draft.name = guarded(warnings, "name", extract_name, soup)
        draft.headline = guarded(warnings, "headline", extract_headline, soup)
        draft.summary = guarded(warnings, "summary", extract_summary, soup)
        draft.location = guarded(warnings, "location", extract_location, soup)
        draft.experience = guarded(warnings, "experience", extract_experience, soup, default=list)
        draft.education = guarded(warnings, "education", extract_education, soup, default=list)
        draft.skills = guarded(warnings, "skills", extract_skills, soup, default=list)
        draft.languages = guarded(warnings, "languages", extract_languages, soup, default=list)
        draft.certifications = guarded(warnings, "certifications", extract_certifications, soup, default=list)

        return draft, warnings


def detect_access_problem(html: str, final_url: str = "") -> Optional[str]:
    """Describe why a fetched page is not a readable profile, or return None."""
    if any(marker in (final_url or "") for marker in AUTH_WALL_URL_MARKERS):
        return f"LinkedIn auth wall detected (redirected to {final_url})"

    soup = BeautifulSoup(html or "", "lxml")
    for selector in AUTH_WALL_SELECTORS:
        if soup.select_one(selector) is not None:
            return "LinkedIn auth wall detected. The profile may be private or access is being blocked"

    title = soup.title.get_text(strip=True) if soup.title else ""
    if any(marker in title for marker in AUTH_WALL_TITLES):
        return "Profile requires authentication - LinkedIn sign-in page returned"

    if any(marker in (html or "") for marker in NOT_FOUND_MARKERS):
        return "LinkedIn profile not found - please check the URL"

    return None


def fetch_profile_html(url: str, session: requests.Session, timeout: int = 30) -> str:
    """Fetch one profile page and reject auth walls and missing profiles."""
    response = fetch_page(url, session=session, timeout=timeout)
    problem = detect_access_problem(response.text, response.url)
    if problem:
        raise AcquisitionError(problem, source=url)
    return response.text


def parse_linkedin_html(
    html: str,
    url: str = "",
    target_role: str = "",
    analysis_type: str = "basic",
) -> AssembledProfile:
    return extract_profile(LinkedInDomExtractor(), html, url, target_role, analysis_type)


def scrape_linkedin_profile(
    linkedin_url: str,
    config: Optional[AcquisitionConfig] = None,
    session: Optional[requests.Session] = None,
    target_role: str = "",
    analysis_type: str = "basic",
    sleep: Callable[[float], None] = time.sleep,
) -> AssembledProfile:
    """Scrape a public LinkedIn profile page.

    A caller-supplied session is used as-is and left open; otherwise a session
    is opened for this call and closed when it returns.
    """
    if not is_valid_linkedin_url(linkedin_url):
        raise ValueError(f"Invalid LinkedIn profile URL: {linkedin_url}")

    config = config or AcquisitionConfig()
    username = extract_linkedin_username(linkedin_url)
    logger.debug("Fetching LinkedIn profile for %s", username)

    def acquire(active: requests.Session) -> str:
        return retry_with_backoff(
            lambda: fetch_profile_html(linkedin_url, active, config.request_timeout),
            max_attempts=config.web_max_attempts,
            base_delay=config.web_base_delay,
            sleep=sleep,
        )

    if session is not None:
        html = acquire(session)
    else:
        with open_session() as owned:
            html = acquire(owned)

    assembled = parse_linkedin_html(html, linkedin_url, target_role, analysis_type)

    logger.info(
        "Scraped LinkedIn profile %s: %s (%d skills found)",
        username,
        assembled.profile.name or "Unknown",
        len(assembled.profile.skills),
    )

    return assembled
