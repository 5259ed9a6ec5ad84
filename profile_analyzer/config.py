"""YAML config loading and validation."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from profile_analyzer.utils.logging_config import LOG_LEVELS

ANALYSIS_TYPES = ("basic", "detailed")
REPORT_FORMATS = ("html", "text", "json")


@dataclass
class AcquisitionConfig:
    web_max_attempts: int = 3
    web_base_delay: float = 2.0
    document_max_attempts: int = 1
    document_base_delay: float = 0.5
    request_timeout: int = 30
    max_pdf_pages: int = 10


@dataclass
class AnalysisConfig:
    enabled: bool = True
    model: str = "gpt-4o-mini"
    temperature: float = 0.2
    max_tokens: int = 1024
    target_role: str = ""
    analysis_type: str = "basic"  # "basic" or "detailed"


@dataclass
class ApiKeys:
    openai_api_key: str = ""


@dataclass
class ReportConfig:
    output_dir: str = "reports"
    format: str = "html"
    include_scorecard: bool = True
    include_rewritten: bool = True


@dataclass
class AppConfig:
    acquisition: AcquisitionConfig = field(default_factory=AcquisitionConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    api_keys: ApiKeys = field(default_factory=ApiKeys)
    report: ReportConfig = field(default_factory=ReportConfig)
    log_dir: str = "logs"
    log_level: str = "INFO"


def load_config(config_path: Optional[str] = "config.yaml") -> AppConfig:
    """Load configuration from a YAML file; ``None`` means defaults plus environment."""
    raw = {}
    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                "Copy config.example.yaml to config.yaml and adjust your settings."
            )
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

    config = AppConfig()

    # Acquisition
    acq_raw = raw.get("acquisition", {})
    config.acquisition = AcquisitionConfig(
        web_max_attempts=acq_raw.get("web_max_attempts", 3),
        web_base_delay=acq_raw.get("web_base_delay", 2.0),
        document_max_attempts=acq_raw.get("document_max_attempts", 1),
        document_base_delay=acq_raw.get("document_base_delay", 0.5),
        request_timeout=acq_raw.get("request_timeout", 30),
        max_pdf_pages=acq_raw.get("max_pdf_pages", 10),
    )

    # Analysis
    analysis_raw = raw.get("analysis", {})
    config.analysis = AnalysisConfig(
        enabled=analysis_raw.get("enabled", True),
        model=analysis_raw.get("model", "gpt-4o-mini"),
        temperature=analysis_raw.get("temperature", 0.2),
        max_tokens=analysis_raw.get("max_tokens", 1024),
        target_role=analysis_raw.get("target_role", ""),
        analysis_type=analysis_raw.get("analysis_type", "basic"),
    )

    # API keys (env vars take precedence)
    keys_raw = raw.get("api_keys", {})
    config.api_keys = ApiKeys(
        openai_api_key=os.environ.get("OPENAI_API_KEY", keys_raw.get("openai_api_key", "")),
    )

    # Report
    report_raw = raw.get("report", {})
    config.report = ReportConfig(
        output_dir=report_raw.get("output_dir", "reports"),
        format=report_raw.get("format", "html"),
        include_scorecard=report_raw.get("include_scorecard", True),
        include_rewritten=report_raw.get("include_rewritten", True),
    )

    config.log_dir = raw.get("log_dir", "logs")
    config.log_level = str(raw.get("log_level", "INFO"))

    return config


def validate_config(config: AppConfig) -> list[str]:
    """Return list of validation warnings (empty = OK)."""
    warnings = []

    if config.analysis.analysis_type not in ANALYSIS_TYPES:
        warnings.append(
            f"Unknown analysis_type '{config.analysis.analysis_type}' - expected one of {', '.join(ANALYSIS_TYPES)}"
        )

    if config.acquisition.web_max_attempts < 1 or config.acquisition.document_max_attempts < 1:
        warnings.append("Acquisition attempts must be at least 1")

    if config.analysis.enabled and not config.api_keys.openai_api_key:
        warnings.append("AI analysis enabled but no OpenAI API key configured - reports will contain extraction results only")

    if config.report.format not in REPORT_FORMATS:
        warnings.append(f"Unknown report format '{config.report.format}' - expected one of {', '.join(REPORT_FORMATS)}")

    if config.log_level.strip().upper() not in LOG_LEVELS:
        warnings.append(f"Unknown log_level '{config.log_level}' - using INFO")

    return warnings
