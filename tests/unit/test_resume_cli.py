"""Unit tests for the career-resume command."""

import json

import pytest
from click.testing import CliRunner

from resume_parser import main as resume_main


@pytest.mark.unit
def test_no_ai_uses_keyword_extraction(tmp_path, pdf_factory, settings, monkeypatch):
    resume = tmp_path / "resume.pdf"
    resume.write_bytes(pdf_factory("Python and Docker developer with 5 years of experience"))

    def unexpected_extractor(*args, **kwargs):
        raise AssertionError("the LLM extractor must not be built with --no-ai")

    monkeypatch.setattr(resume_main, "get_settings", lambda: settings)
    monkeypatch.setattr(resume_main, "setup_logging", lambda settings: None)
    monkeypatch.setattr(resume_main, "ResumeExtractor", unexpected_extractor)

    result = CliRunner().invoke(resume_main.main, [str(resume), "--no-ai"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert {"Python", "Docker"} <= set(data["skills"])
    assert "5 years" in data["experience"]
