"""Tests for the acquisition-to-analysis pipeline and the CLI."""

import json
import logging
import os
import tempfile

import pytest

from profile_analyzer.analysis.analyzer import ProfileAnalyzer
from profile_analyzer.analysis.llm_client import OpenAITextGenerator
from profile_analyzer.config import AppConfig
from profile_analyzer.errors import InsufficientDataError
from profile_analyzer.main import main
from profile_analyzer.pipeline import acquire_profile, build_analyzer, build_preview, run_analysis
from profile_analyzer.utils.logging_config import CLIENT_LOGGERS

SAMPLE_TEXT = (
    "JOHN SMITH\njohn@x.com\n\nEXPERIENCE\nSoftware Engineer, Acme Corp\n"
    "Jan 2020 - Present\nBuilt things.\n\nEDUCATION\nState University"
)

PROFILE_HTML = """
<html><head><title>Jane Doe | LinkedIn</title></head><body>
<h1 class="text-heading-xlarge">Jane Doe</h1>
<div class="text-body-medium break-words">Data Engineer</div>
</body></html>
"""


class FakeResponse:
    status_code = 200
    url = "https://www.linkedin.com/in/jane-doe"

    def __init__(self, text):
        self.text = text

    def raise_for_status(self):
        pass


class FakeSession:
    def __init__(self, text):
        self.headers = {}
        self.text = text

    def get(self, url, timeout=None):
        return FakeResponse(self.text)


class EchoGenerator:
    def submit(self, prompt):
        return '{"tone": 90, "overall": 75}'


@pytest.fixture
def resume_file():
    with tempfile.NamedTemporaryFile(mode="w", suffix=".txt", delete=False, encoding="utf-8") as f:
        f.write(SAMPLE_TEXT)
        path = f.name
    yield path
    os.unlink(path)


@pytest.fixture
def config():
    config = AppConfig()
    config.analysis.target_role = "Backend Engineer"
    return config


class TestAcquireProfile:
    def test_resume(self, config, resume_file):
        assembled = acquire_profile(config, resume_path=resume_file)
        assert assembled.profile.name == "JOHN SMITH"
        assert assembled.metadata.target_role == "Backend Engineer"
        assert assembled.completeness == 50

    def test_linkedin(self, config):
        assembled = acquire_profile(
            config, linkedin_url="https://www.linkedin.com/in/jane-doe", session=FakeSession(PROFILE_HTML)
        )
        assert assembled.profile.name == "Jane Doe"
        assert assembled.profile.headline == "Data Engineer"

    def test_unidentifiable_profile_is_fatal(self, config):
        session = FakeSession("<html><body><p>nothing useful</p></body></html>")
        with pytest.raises(InsufficientDataError) as exc_info:
            acquire_profile(config, linkedin_url="https://www.linkedin.com/in/jane-doe", session=session)
        assert exc_info.value.reason == InsufficientDataError.UNINTERPRETABLE

    def test_requires_a_source(self, config):
        with pytest.raises(ValueError):
            acquire_profile(config)


class TestBuildAnalyzer:
    def test_disabled(self, config):
        config.analysis.enabled = False
        assert build_analyzer(config) is None

    def test_missing_key(self, config):
        assert build_analyzer(config) is None

    def test_openai_backed(self, config):
        config.api_keys.openai_api_key = "sk-test"
        analyzer = build_analyzer(config)
        assert isinstance(analyzer, ProfileAnalyzer)
        assert isinstance(analyzer.generator, OpenAITextGenerator)
        assert analyzer.generator.model == "gpt-4o-mini"


class TestRunAnalysis:
    def test_without_analyzer(self, config, resume_file):
        result = run_analysis(config, resume_path=resume_file)
        assert result.analysis is None
        assert result.to_dict()["analysis"] is None

    def test_with_analyzer(self, config, resume_file):
        result = run_analysis(config, resume_path=resume_file, analyzer=ProfileAnalyzer(EchoGenerator()))
        assert result.analysis["scores"]["tone"] == 90
        assert result.analysis["scores"]["completeness"] == 50
        assert result.analysis["metadata"]["targetRole"] == "Backend Engineer"


class TestBuildPreview:
    def test_preview(self, config, resume_file):
        preview = build_preview(acquire_profile(config, resume_path=resume_file))
        assert preview == {
            "name": "JOHN SMITH",
            "headline": "",
            "location": "",
            "has_experience": True,
            "has_education": True,
            "skills_count": 0,
        }


class TestMain:
    @pytest.fixture(autouse=True)
    def in_tmp_dir(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        yield
        app_logger = logging.getLogger("profile_analyzer")
        for handler in list(app_logger.handlers):
            handler.close()
            app_logger.removeHandler(handler)

    def test_writes_text_report(self, resume_file, tmp_path):
        out = tmp_path / "report.txt"
        main(["--resume", resume_file, "--no-ai", "--format", "text", "--output", str(out)])
        content = out.read_text(encoding="utf-8")
        assert "Profile: JOHN SMITH" in content
        assert "Extracted Profile" in content

    def test_default_output_location(self, resume_file, tmp_path):
        main(["--resume", resume_file, "--no-ai"])
        reports = list((tmp_path / "reports").glob("profile-analysis-john-smith-*.html"))
        assert len(reports) == 1

    def test_preview(self, resume_file, capsys):
        main(["--resume", resume_file, "--preview"])
        preview = json.loads(capsys.readouterr().out)
        assert preview["name"] == "JOHN SMITH"

    def test_fatal_error_exits_1(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--resume", "missing.txt", "--no-ai"])
        assert exc_info.value.code == 1
        assert "Resume file not found" in capsys.readouterr().err

    def test_missing_config_exits_1(self, resume_file):
        with pytest.raises(SystemExit) as exc_info:
            main(["--resume", resume_file, "--config", "nope.yaml"])
        assert exc_info.value.code == 1

    def test_verbose_enables_debug_logging(self, resume_file, tmp_path):
        try:
            main(["--resume", resume_file, "--no-ai", "--verbose", "--output", str(tmp_path / "r.html")])
            assert logging.getLogger("profile_analyzer").level == logging.DEBUG
            assert "Logging to" in (tmp_path / "logs" / "profile_analyzer.log").read_text(encoding="utf-8")
        finally:
            for name in CLIENT_LOGGERS:
                logging.getLogger(name).setLevel(logging.NOTSET)
