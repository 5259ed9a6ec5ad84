"""Atomic field extractors (email, phone, name, location) for document text.

Every extractor returns an empty string when nothing matches; none raise on
ordinary input.
"""

import re

from profile_analyzer.extraction.heuristics import looks_like_date_range

EMAIL_PATTERN = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")

# North-American formats first, generic international last.
PHONE_PATTERNS = (
    re.compile(r"(?:\+?1[-.\s]?)?\(\d{3}\)[-.\s]?\d{3}[-.\s]?\d{4}\b"),
    re.compile(r"(?:\+?1[-.\s]?)?\b\d{3}[-.\s]?\d{3}[-.\s]?\d{4}\b"),
    re.compile(r"\+?\d{1,4}?[-.\s]?\(?\d{1,3}?\)?[-.\s]?\d{1,4}[-.\s]?\d{1,4}[-.\s]?\d{1,9}"),
)
MIN_PHONE_DIGITS = 7

EXACT = "exact"
SUBSTRING = "substring"

# Words that disqualify a line from being a name. Short terms that also occur
# inside ordinary surnames are matched as whole words only.
NAME_DENY_TERMS: dict[str, str] = {
    "resume": SUBSTRING, "curriculum": SUBSTRING, "cv": EXACT, "vitae": SUBSTRING,
    "contact": SUBSTRING, "phone": SUBSTRING, "email": SUBSTRING, "address": SUBSTRING,
    "skills": SUBSTRING, "objective": SUBSTRING, "summary": SUBSTRING, "profile": SUBSTRING,
    "languages": SUBSTRING, "programming": SUBSTRING, "certifications": SUBSTRING,
    "education": SUBSTRING, "experience": SUBSTRING, "work": EXACT, "employment": SUBSTRING,
    "professional": SUBSTRING, "career": SUBSTRING, "linkedin": SUBSTRING, "github": SUBSTRING,
    "portfolio": SUBSTRING, "website": SUBSTRING,
    "html": SUBSTRING, "css": EXACT, "javascript": SUBSTRING, "python": SUBSTRING,
    "java": EXACT, "basic": EXACT, "basics": EXACT, "advanced": SUBSTRING,
    "technical": SUBSTRING, "soft": EXACT, "communication": SUBSTRING, "problem": SUBSTRING,
    "solving": SUBSTRING, "management": SUBSTRING, "circuit": SUBSTRING, "design": SUBSTRING,
    "simulation": SUBSTRING, "matlab": SUBSTRING, "digital": SUBSTRING, "electronics": SUBSTRING,
    "operating": SUBSTRING, "systems": SUBSTRING, "linux": SUBSTRING, "cloud": SUBSTRING,
    "computing": SUBSTRING, "data": EXACT, "structures": SUBSTRING,
    "intermediate": SUBSTRING, "beginner": SUBSTRING, "expert": SUBSTRING,
    "proficient": SUBSTRING, "skilled": SUBSTRING, "familiar": SUBSTRING,
    "knowledge": SUBSTRING, "understanding": SUBSTRING, "level": EXACT, "years": EXACT,
    "months": EXACT, "duration": SUBSTRING,
}

NAME_SCAN_LINES = 10
NAME_FALLBACK_SCAN_LINES = 5

_STARTS_WITH_NUMBER = re.compile(r"^\+?\d")
_CAPS_WORD = re.compile(r"^[A-Z][A-Z]*$")
_TITLE_WORD = re.compile(r"^[A-Z][a-z]+$")
_CAPS_NAME_LINE = re.compile(r"^[A-Z]+\s+[A-Z]+(\s+[A-Z]+)?$")
_DIGIT = re.compile(r"\d")

US_CITIES = (
    "New York", "Los Angeles", "Chicago", "Houston", "Phoenix", "Philadelphia", "San Antonio",
    "San Diego", "Dallas", "San Jose", "Austin", "Jacksonville", "Fort Worth", "Columbus",
    "Charlotte", "San Francisco", "Indianapolis", "Seattle", "Denver", "Washington", "Boston",
    "El Paso", "Nashville", "Detroit", "Oklahoma City", "Portland", "Las Vegas", "Memphis",
    "Louisville", "Baltimore", "Milwaukee", "Albuquerque", "Tucson", "Fresno", "Sacramento",
    "Kansas City", "Long Beach", "Mesa", "Atlanta", "Colorado Springs", "Virginia Beach",
    "Raleigh", "Omaha", "Miami", "Oakland", "Minneapolis", "Tulsa", "Wichita", "New Orleans",
    "Arlington", "Cleveland", "Bakersfield", "Tampa", "Aurora", "Honolulu", "Anaheim",
    "Santa Ana", "Corpus Christi", "Riverside", "St. Louis", "Lexington", "Pittsburgh",
    "Anchorage", "Stockton", "Cincinnati", "Saint Paul", "Toledo", "Greensboro", "Newark",
    "Plano", "Henderson", "Lincoln", "Buffalo", "Jersey City", "Chula Vista", "Fort Wayne",
    "Orlando", "St. Petersburg", "Chandler", "Laredo", "Norfolk", "Durham", "Madison",
    "Lubbock", "Irvine", "Winston-Salem", "Glendale", "Garland", "Hialeah", "Reno",
    "Chesapeake", "Gilbert", "Baton Rouge", "Irving", "Scottsdale", "North Las Vegas",
    "Fremont", "Boise", "Richmond", "San Bernardino", "Birmingham", "Spokane", "Rochester",
    "Des Moines", "Modesto", "Fayetteville", "Tacoma", "Oxnard", "Fontana", "Montgomery",
    "Moreno Valley", "Shreveport", "Yonkers", "Akron", "Huntington Beach", "Little Rock",
    "Augusta", "Amarillo", "Mobile", "Grand Rapids", "Salt Lake City", "Tallahassee",
    "Huntsville", "Grand Prairie", "Knoxville", "Worcester", "Newport News", "Brownsville",
    "Overland Park", "Santa Clarita", "Providence", "Garden Grove", "Chattanooga",
    "Oceanside", "Jackson", "Fort Lauderdale", "Santa Rosa", "Rancho Cucamonga",
    "Port St. Lucie", "Tempe", "Ontario", "Vancouver", "Cape Coral", "Sioux Falls",
    "Springfield", "Peoria", "Pembroke Pines", "Elk Grove", "Salem", "Lancaster", "Corona",
    "Eugene", "Palmdale", "Salinas", "Pasadena", "Fort Collins", "Hayward", "Pomona", "Cary",
    "Rockford", "Alexandria", "Escondido", "McKinney", "Joliet", "Sunnyvale", "Torrance",
    "Bridgeport", "Lakewood", "Hollywood", "Paterson", "Naperville", "Syracuse", "Mesquite",
    "Dayton", "Savannah", "Clarksville", "Orange", "Fullerton", "Killeen", "Frisco",
    "Hampton", "McAllen", "Warren", "Bellevue", "West Valley City", "Columbia", "Olathe",
    "Sterling Heights", "New Haven", "Miramar", "Waco", "Thousand Oaks", "Cedar Rapids",
    "Charleston", "Sioux City", "Round Rock", "Richardson", "Lansing", "Surprise", "Denton",
    "Victorville", "Evansville", "Waterbury", "Roseville", "Thornton", "Beaumont",
    "Allentown", "Abilene", "Odessa", "Arvada", "Westminster", "Provo", "Norwalk",
    "Centennial", "Elgin", "Downey", "Broken Arrow", "Murfreesboro", "Allen",
    "College Station", "Pearland", "League City", "Sugar Land", "Edinburg", "Pharr",
    "Conroe", "Tyler",
)

US_STATES = (
    "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA", "HI", "ID", "IL", "IN", "IA",
    "KS", "KY", "LA", "ME", "MD", "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH", "NJ",
    "NM", "NY", "NC", "ND", "OH", "OK", "OR", "PA", "RI", "SC", "SD", "TN", "TX", "UT", "VT",
    "VA", "WA", "WV", "WI", "WY",
    "Alabama", "Alaska", "Arizona", "Arkansas", "California", "Colorado", "Connecticut",
    "Delaware", "Florida", "Georgia", "Hawaii", "Idaho", "Illinois", "Indiana", "Iowa",
    "Kansas", "Kentucky", "Louisiana", "Maine", "Maryland", "Massachusetts", "Michigan",
    "Minnesota", "Mississippi", "Missouri", "Montana", "Nebraska", "Nevada", "New Hampshire",
    "New Jersey", "New Mexico", "New York", "North Carolina", "North Dakota", "Ohio",
    "Oklahoma", "Oregon", "Pennsylvania", "Rhode Island", "South Carolina", "South Dakota",
    "Tennessee", "Texas", "Utah", "Vermont", "Virginia", "Washington", "West Virginia",
    "Wisconsin", "Wyoming",
)


def _alternation(names) -> str:
    unique = sorted(dict.fromkeys(names), key=len, reverse=True)
    return "|".join(re.escape(name) for name in unique)


STATE_CODES = tuple(state for state in US_STATES if len(state) == 2)
STATE_NAMES = tuple(state for state in US_STATES if len(state) > 2)

# Case-insensitive, except two-letter state codes ("in", "or", "me" are words).
LOCATION_PATTERN = re.compile(
    rf"\b(?:{_alternation(US_CITIES)})\b"
    rf"(?:,?[ \t]*(?:(?-i:{_alternation(STATE_CODES)})|{_alternation(STATE_NAMES)})\b)?",
    re.IGNORECASE,
)
LABEL_SUFFIX = re.compile(r"[ \t]*:")


def extract_email(text: str) -> str:
    match = EMAIL_PATTERN.search(text or "")
    return match.group(0) if match else ""


def extract_phone(text: str) -> str:
    """Return the first match of the first phone pattern that matches anywhere."""
    text = text or ""
    for pattern in PHONE_PATTERNS[:-1]:
        match = pattern.search(text)
        if match:
            return match.group(0).strip()

    for match in PHONE_PATTERNS[-1].finditer(text):
        candidate = match.group(0).strip()
        if len(_DIGIT.findall(candidate)) >= MIN_PHONE_DIGITS and not looks_like_date_range(candidate):
            return candidate
    return ""


def has_denied_word(line: str) -> bool:
    """Check each lowercase word against the name deny-list using each term's match mode."""
    words = line.lower().split()
    for term, mode in NAME_DENY_TERMS.items():
        for word in words:
            if word == term or (mode == SUBSTRING and term in word):
                return True
    return False


def _is_rejected_line(line: str) -> bool:
    return (
        not line
        or "@" in line
        or "http" in line
        or "www." in line
        or ".com" in line
        or bool(_STARTS_WITH_NUMBER.match(line))
        or len(line) < 3
        or len(line) > 40
    )


def _is_name_word(word: str) -> bool:
    if _DIGIT.search(word) or len(word) < 2 or len(word) > 15:
        return False
    return bool(_CAPS_WORD.match(word) or _TITLE_WORD.match(word))


def extract_name(lines: list[str]) -> str:
    """Heuristically pick the candidate's name from the top of the document."""
    for raw in lines[:NAME_SCAN_LINES]:
        line = raw.strip()
        if _is_rejected_line(line) or has_denied_word(line):
            continue
        words = line.split()
        if 1 <= len(words) <= 4 and all(_is_name_word(word) for word in words):
            return line

    # Fallback: FIRSTNAME LASTNAME in capitals, allowing lines over the length cap
    for raw in lines[:NAME_FALLBACK_SCAN_LINES]:
        line = raw.strip()
        if not _CAPS_NAME_LINE.match(line) or has_denied_word(line):
            continue
        words = line.lower().split()
        if all(2 <= len(word) <= 15 for word in words) and not _DIGIT.search(line):
            return line

    return ""


def extract_location(text: str) -> str:
    """First US city (optionally with its state) that is not a label or a lowercase word."""
    text = text or ""
    for match in LOCATION_PATTERN.finditer(text):
        found = match.group(0).strip()
        if found.islower() or LABEL_SUFFIX.match(text, match.end()):
            continue
        return found
    return ""
