"""CLI entry point for profile analysis."""

import argparse
import json
import logging
import sys
from pathlib import Path

from profile_analyzer.config import ANALYSIS_TYPES, REPORT_FORMATS, AppConfig, load_config, validate_config
from profile_analyzer.errors import ProfileAnalyzerError
from profile_analyzer.pipeline import AnalysisResult, build_analyzer, build_preview, run_analysis
from profile_analyzer.report.report import (
    build_report_sections,
    render_report_html,
    render_report_json,
    render_report_text,
    report_filename,
)
from profile_analyzer.utils.logging_config import setup_logging

logger = logging.getLogger("profile_analyzer")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Profile Analyzer - Extract and assess a resume or LinkedIn profile",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--resume", help="Path to a resume file (.pdf, .txt, .md)")
    source.add_argument("--url", help="Public LinkedIn profile URL")
    parser.add_argument(
        "--config", default=None,
        help="Path to config file (default: built-in defaults)",
    )
    parser.add_argument("--target-role", default=None, help="Role to assess the profile against")
    parser.add_argument("--analysis-type", choices=ANALYSIS_TYPES, default=None, help="basic or detailed")
    parser.add_argument("--no-ai", action="store_true", help="Skip AI analysis, report extraction only")
    parser.add_argument("--format", choices=REPORT_FORMATS, default=None, help="Report format")
    parser.add_argument(
        "--output", default=None,
        help="Report file path (default: <report.output_dir>/profile-analysis-<name>-<timestamp>.<ext>)",
    )
    parser.add_argument(
        "--preview", action="store_true",
        help="Print a short profile preview as JSON and exit",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging (overrides log_level)")
    return parser.parse_args(argv)


def apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    """Apply command-line options on top of the loaded config."""
    if args.target_role is not None:
        config.analysis.target_role = args.target_role
    if args.analysis_type is not None:
        config.analysis.analysis_type = args.analysis_type
    if args.format is not None:
        config.report.format = args.format
    if args.no_ai or args.preview:
        config.analysis.enabled = False
    if args.verbose:
        config.log_level = "DEBUG"
    return config


def render_report(result: AnalysisResult, config: AppConfig) -> str:
    if config.report.format == "json":
        return render_report_json(result.assembled, result.analysis)

    sections = build_report_sections(
        result.assembled,
        result.analysis,
        include_scorecard=config.report.include_scorecard,
        include_rewritten=config.report.include_rewritten,
    )
    if config.report.format == "text":
        return render_report_text(sections)
    return render_report_html(sections)


def write_report(content: str, result: AnalysisResult, config: AppConfig, output: str = None) -> Path:
    if output:
        path = Path(output)
    else:
        path = Path(config.report.output_dir) / report_filename(
            result.assembled.profile.name, config.report.format
        )
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def main(argv=None):
    args = parse_args(argv)

    # Load config
    try:
        config = load_config(args.config)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    config = apply_overrides(config, args)

    # Setup logging
    setup_logging(config.log_dir, config.log_level)

    # Validate config and print warnings
    for w in validate_config(config):
        logger.warning("Config: %s", w)

    try:
        analyzer = build_analyzer(config)
        result = run_analysis(
            config,
            resume_path=args.resume or "",
            linkedin_url=args.url or "",
            analyzer=analyzer,
        )
    except (ProfileAnalyzerError, ValueError) as e:
        logger.error("Analysis failed: %s", e)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.preview:
        print(json.dumps(build_preview(result.assembled), indent=2))
        return

    content = render_report(result, config)
    path = write_report(content, result, config, args.output)
    logger.info("Report written to %s", path)
    print(f"Report written to {path}")


if __name__ == "__main__":
    main()
