"""Report building and rendering (HTML, plain text, JSON)."""

import html
import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Optional

from profile_analyzer.profile.models import AssembledProfile, ExperienceEntry
from profile_analyzer.utils.text_processing import capitalize_first, slugify, truncate_text

REPORT_TITLE = "Profile Analysis Report"
FOOTER_TEXT = (
    "This report was generated by Profile Analyzer. "
    "Suggestions are AI-generated and should be reviewed for accuracy."
)
MAX_INSIGHTS = 4
DETAIL_PREVIEW_LENGTH = 200
BAR_WIDTH = 20
NON_CATEGORY_SCORES = ("overall", "completeness")
FILE_EXTENSIONS = {"html": "html", "text": "txt", "json": "json"}


@dataclass
class ReportSection:
    title: str
    lines: list[str] = field(default_factory=list)
    kind: str = "text"  # "text", "list" or "scorecard"
    level: int = 2


def assessment_label(score: int) -> str:
    if score >= 80:
        return "Excellent"
    if score >= 65:
        return "Good"
    if score >= 50:
        return "Fair"
    return "Needs Improvement"


def _category_scores(scores: dict) -> list[tuple[str, int]]:
    return [(k, v) for k, v in scores.items() if k not in NON_CATEGORY_SCORES]


def generate_key_insights(analysis: dict) -> list[str]:
    """Up to four headline observations drawn from the scores and keywords."""
    insights = []
    scores = analysis.get("scores") or {}

    ranked = sorted(_category_scores(scores), key=lambda item: item[1])
    if ranked:
        lowest, lowest_score = ranked[0]
        insights.append(f"{capitalize_first(lowest)} needs the most improvement ({lowest_score}/100)")

        highest, highest_score = ranked[-1]
        if highest_score >= 70:
            insights.append(f"Strong performance in {highest} ({highest_score}/100)")

    completeness = scores.get("completeness", 0)
    if completeness < 80:
        insights.append(f"Profile is {completeness}% complete - consider adding missing sections")

    keyword_score = (analysis.get("keywords") or {}).get("score")
    if keyword_score is not None and keyword_score < 60:
        insights.append("Keyword optimization can be improved to increase visibility")

    return insights[:MAX_INSIGHTS]


def score_bar(score: int) -> str:
    filled = max(0, min(BAR_WIDTH, int(score) // 5))
    return "█" * filled + "░" * (BAR_WIDTH - filled)


def format_experience(experience: Iterable[ExperienceEntry]) -> str:
    return "; ".join(
        f"{e.title or 'Unknown Title'} at {e.company or 'Unknown Company'}" for e in experience
    )


def _header_section(assembled: AssembledProfile, generated_at: datetime) -> ReportSection:
    profile = assembled.profile
    lines = [f"Profile: {profile.name or 'Unknown'}"]
    if profile.headline:
        lines.append(profile.headline)
    if assembled.metadata.source:
        lines.append(f"Source: {assembled.metadata.source}")
    lines.append(f"Generated on: {generated_at.strftime('%B %d, %Y')}")
    return ReportSection(REPORT_TITLE, lines, level=1)


def _executive_summary(analysis: dict) -> ReportSection:
    scores = analysis.get("scores") or {}
    overall = scores.get("overall", 0)
    lines = [
        f"Overall Profile Score: {overall}/100 ({assessment_label(overall)})",
        f"Profile Completeness: {scores.get('completeness', 0)}%",
    ]
    insights = generate_key_insights(analysis)
    if insights:
        lines.append("Key Insights:")
        lines.extend(f"{i}. {insight}" for i, insight in enumerate(insights, 1))
    return ReportSection("Executive Summary", lines)


def _scorecard(scores: dict) -> ReportSection:
    lines = [
        f"{capitalize_first(category) + ':':<12} {score:>3}/100  {score_bar(score)}"
        for category, score in _category_scores(scores)
    ]
    return ReportSection("Profile Scorecard", lines, kind="scorecard")


def _detailed_analysis(assembled: AssembledProfile) -> ReportSection:
    profile = assembled.profile
    parts = (
        ("Professional Headline", profile.headline),
        ("Summary/About Section", profile.summary),
        ("Work Experience", format_experience(profile.experience)),
        ("Skills Section", ", ".join(profile.skills)),
    )
    lines = [
        f"{title}: {truncate_text(content, DETAIL_PREVIEW_LENGTH)}"
        for title, content in parts
        if content
    ]
    return ReportSection("Detailed Analysis", lines)


def _suggestion_sections(suggestions: dict) -> list[ReportSection]:
    sections = [ReportSection("Improvement Suggestions")]
    for category, items in suggestions.items():
        if isinstance(items, list) and items:
            sections.append(ReportSection(capitalize_first(category), [str(s) for s in items], kind="list", level=3))
    return sections


def _rewritten_sections(rewritten: dict) -> list[ReportSection]:
    sections = [ReportSection("Enhanced Content Suggestions")]
    if rewritten.get("headline"):
        sections.append(ReportSection("Enhanced Headline", [rewritten["headline"]], level=3))
    if rewritten.get("summary"):
        sections.append(ReportSection("Enhanced Summary", [rewritten["summary"]], level=3))
    for entry in rewritten.get("experience") or []:
        title = f"{entry.get('title', '')} at {entry.get('company', '')}"
        sections.append(ReportSection(title, [entry.get("description", "")], level=3))
    return sections


def _keyword_section(keywords: dict) -> ReportSection:
    lines = []
    if keywords.get("score") is not None:
        lines.append(f"Keyword Optimization Score: {keywords['score']}/100")
    labels = (
        ("present", "Keywords Found"),
        ("missing", "Recommended Keywords to Add"),
        ("suggested", "Additional Keyword Suggestions"),
    )
    for key, label in labels:
        if keywords.get(key):
            lines.append(f"{label}: {', '.join(keywords[key])}")
    return ReportSection("Keyword Analysis", lines)


def _profile_section(assembled: AssembledProfile) -> ReportSection:
    profile = assembled.profile
    lines = [f"Name: {profile.name or 'Not found'}"]
    if profile.headline:
        lines.append(f"Headline: {profile.headline}")
    if profile.location:
        lines.append(f"Location: {profile.location}")
    if profile.contact is not None:
        if profile.contact.email:
            lines.append(f"Email: {profile.contact.email}")
        if profile.contact.phone:
            lines.append(f"Phone: {profile.contact.phone}")
    if profile.summary:
        lines.append(f"Summary: {truncate_text(profile.summary, DETAIL_PREVIEW_LENGTH)}")
    for entry in profile.experience:
        duration = f" ({entry.duration})" if entry.duration else ""
        lines.append(f"Experience: {entry.title or 'Unknown Title'} at {entry.company or 'Unknown Company'}{duration}")
    for entry in profile.education:
        detail = ", ".join(part for part in (entry.degree, entry.year) if part)
        lines.append(f"Education: {entry.school}" + (f" ({detail})" if detail else ""))
    if profile.skills:
        lines.append(f"Skills: {', '.join(profile.skills)}")
    if profile.languages:
        langs = ", ".join(
            f"{l.language} ({l.proficiency})" if l.proficiency else l.language for l in profile.languages
        )
        lines.append(f"Languages: {langs}")
    for cert in profile.certifications:
        lines.append(f"Certification: {cert.name}" + (f" - {cert.issuer}" if cert.issuer else ""))
    lines.append(f"Completeness: {assembled.completeness}%")
    return ReportSection("Extracted Profile", lines)


def build_report_sections(
    assembled: AssembledProfile,
    analysis: Optional[dict] = None,
    include_scorecard: bool = True,
    include_rewritten: bool = True,
    generated_at: Optional[datetime] = None,
) -> list[ReportSection]:
    """Ordered report sections; without analysis only the extraction results are shown."""
    sections = [_header_section(assembled, generated_at or datetime.now())]

    if analysis:
        sections.append(_executive_summary(analysis))
        if include_scorecard and analysis.get("scores"):
            sections.append(_scorecard(analysis["scores"]))
        sections.append(_detailed_analysis(assembled))
        if analysis.get("suggestions"):
            sections.extend(_suggestion_sections(analysis["suggestions"]))
        if include_rewritten and analysis.get("rewritten"):
            sections.extend(_rewritten_sections(analysis["rewritten"]))
        if analysis.get("keywords"):
            sections.append(_keyword_section(analysis["keywords"]))

    sections.append(_profile_section(assembled))

    if assembled.metadata.warnings:
        sections.append(ReportSection("Extraction Warnings", list(assembled.metadata.warnings), kind="list"))

    sections.append(ReportSection("", [FOOTER_TEXT], level=0))
    return sections


def render_report_text(sections: list[ReportSection]) -> str:
    underline = {1: "=", 2: "=", 3: "-"}
    blocks = []
    for section in sections:
        block = []
        if section.title:
            block.append(section.title)
            block.append(underline.get(section.level, "-") * len(section.title))
        if section.kind == "list":
            block.extend(f"• {line}" for line in section.lines)
        else:
            block.extend(section.lines)
        blocks.append("\n".join(block))
    return "\n\n".join(blocks) + "\n"


def _render_section_html(section: ReportSection) -> str:
    if section.level == 0:
        body = "".join(f"<p>{html.escape(line)}</p>" for line in section.lines)
        return f'<div class="footer">{body}</div>'

    tag = {1: "h1", 2: "h2"}.get(section.level, "h3")
    heading = f"<{tag}>{html.escape(section.title)}</{tag}>" if section.title else ""

    if section.kind == "list":
        items = "".join(f"<li>{html.escape(line)}</li>" for line in section.lines)
        body = f"<ul>{items}</ul>"
    elif section.kind == "scorecard":
        body = f'<pre class="scorecard">{html.escape(chr(10).join(section.lines))}</pre>'
    else:
        body = "".join(f"<p>{html.escape(line)}</p>" for line in section.lines)

    css_class = "header" if section.level == 1 else "section"
    return f'<div class="{css_class}">{heading}{body}</div>'


def render_report_html(sections: list[ReportSection]) -> str:
    title = sections[0].title if sections else REPORT_TITLE
    body = "\n            ".join(_render_section_html(s) for s in sections)

    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{html.escape(title)}</title>
    <style>
        body {{
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            background-color: #f5f5f5;
            margin: 0;
            padding: 20px;
            color: #374151;
        }}
        .container {{
            max-width: 800px;
            margin: 0 auto;
            background: #fff;
            border-radius: 8px;
            padding: 24px;
            box-shadow: 0 2px 8px rgba(0,0,0,0.1);
        }}
        .header {{
            text-align: center;
            border-bottom: 1px solid #e5e7eb;
            padding-bottom: 16px;
        }}
        .header h1 {{
            color: #2563eb;
            font-size: 24px;
        }}
        .section {{
            border-bottom: 1px solid #e5e7eb;
            padding: 8px 0;
        }}
        .scorecard {{
            font-size: 13px;
            color: #6b7280;
        }}
        .footer {{
            text-align: center;
            font-size: 12px;
            color: #9ca3af;
            padding-top: 16px;
        }}
    </style>
</head>
<body>
    <div class="container">
            {body}
    </div>
</body>
</html>"""


def render_report_json(assembled: AssembledProfile, analysis: Optional[dict] = None) -> str:
    data = assembled.to_dict()
    data["analysis"] = analysis
    return json.dumps(data, indent=2, ensure_ascii=False)


def report_filename(profile_name: str, report_format: str = "html", now: Optional[datetime] = None) -> str:
    """File name of the form ``profile-analysis-<name>-<timestamp>.<ext>``."""
    timestamp = (now or datetime.now()).strftime("%Y%m%d-%H%M%S")
    extension = FILE_EXTENSIONS.get(report_format, report_format)
    return f"profile-analysis-{slugify(profile_name)}-{timestamp}.{extension}"
