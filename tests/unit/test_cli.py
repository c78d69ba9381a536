"""Tests for the loan-compliance CLI."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from loan_compliance.cli.main import app
from tests.fakes.payloads import make_issue
from tests.fakes.pdf_builder import LOAN_AGREEMENT, make_pdf

runner = CliRunner()


@pytest.fixture(autouse=True)
def _no_logging_setup():
    with patch("loan_compliance.cli.main.setup_logging"):
        yield


@pytest.fixture
def pdf_path(tmp_path):
    path = tmp_path / "loan.pdf"
    path.write_bytes(make_pdf(LOAN_AGREEMENT))
    return path


class TestSectionsCommand:
    def test_json_output(self, pdf_path) -> None:
        result = runner.invoke(app, ["sections", str(pdf_path), "--json"])
        assert result.exit_code == 0, result.output
        document = json.loads(result.output)
        assert document["totalPages"] == 2
        assert document["sections"][0]["pageNumber"] == 1
        assert "boundingBox" in document["sections"][0]

    def test_table_output(self, pdf_path) -> None:
        result = runner.invoke(app, ["sections", str(pdf_path)])
        assert result.exit_code == 0, result.output
        assert "Total sections: 5" in result.output

    def test_unreadable_file(self, tmp_path) -> None:
        bad = tmp_path / "bad.pdf"
        bad.write_bytes(b"not a pdf")
        result = runner.invoke(app, ["sections", str(bad)])
        assert result.exit_code == 1


class TestCheckCommand:
    def test_missing_api_key_exits_2(self, pdf_path, monkeypatch) -> None:
        monkeypatch.delenv("COMPLIANCE_LLM_API_KEY", raising=False)
        monkeypatch.setenv("COMPLIANCE_LLM_PROVIDER", "gemini")
        result = runner.invoke(app, ["check", str(pdf_path)])
        assert result.exit_code == 2
        assert "COMPLIANCE_LLM_API_KEY" in result.output

    def test_report_written(self, pdf_path, tmp_path, monkeypatch) -> None:
        monkeypatch.setenv("COMPLIANCE_LLM_INFERENCE_BACKEND", "tests.fakes.fake_analysis:SettingsBackend")
        out = tmp_path / "report.json"
        result = runner.invoke(app, ["check", str(pdf_path), "--api-key", "k", "--output", str(out)])
        assert result.exit_code == 0, result.output
        assert "Compliance score:" in result.output
        report = json.loads(out.read_text())
        assert report["summary"]["compliance_score"] == 100
        assert report["filename"] == "loan.pdf"

    def test_analysis_failure_shows_user_message(self, pdf_path) -> None:
        from loan_compliance.exceptions import RateLimitError

        with patch(
            "loan_compliance.services.compliance_service.ComplianceService.check_file",
            side_effect=RateLimitError(),
        ):
            result = runner.invoke(app, ["check", str(pdf_path), "--api-key", "k"])
        assert result.exit_code == 1
        assert "too many requests" in result.output

    def test_issues_table(self, pdf_path, monkeypatch) -> None:
        from loan_compliance.analysis.report import ReportBuilder

        report = ReportBuilder().build(json.dumps({"issues": [make_issue("high", "ECOA")]}), "loan.pdf")
        with patch(
            "loan_compliance.services.compliance_service.ComplianceService.check_file",
            return_value=report,
        ):
            result = runner.invoke(app, ["check", str(pdf_path), "--api-key", "k"])
        assert result.exit_code == 0, result.output
        assert "ECOA" in result.output
        assert "90/100" in result.output
