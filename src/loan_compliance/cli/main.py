"""CLI for loan-compliance-checker: sections / check commands."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from loan_compliance.core.config import AppSettings, LLMConfig, ObservabilityConfig
from loan_compliance.core.startup_checks import validate_settings
from loan_compliance.exceptions import AnalysisError, ExtractionError
from loan_compliance.extraction.assembler import DocumentAssembler
from loan_compliance.extraction.pymupdf_source import open_pdf_path
from loan_compliance.formatters.json_formatter import JSONFormatter
from loan_compliance.hooks.logging_config import setup_logging
from loan_compliance.models import ComplianceReport, DocumentAnalysis
from loan_compliance.services.compliance_service import ComplianceService

app = typer.Typer(name="loan-compliance", help="Regulatory compliance review for personal loan PDFs")
console = Console()

_SEVERITY_STYLES = {"high": "red", "medium": "yellow", "low": "cyan"}


def _build_settings(
    api_key: Optional[str],
    model: Optional[str],
    verbose: bool,
) -> AppSettings:
    """Build settings, overriding env defaults with CLI flags."""
    llm_overrides: dict = {}
    if api_key:
        llm_overrides["api_key"] = api_key
    if model:
        llm_overrides["model"] = model

    settings = AppSettings()
    if llm_overrides:
        settings.llm = LLMConfig(**{**settings.llm.model_dump(), **llm_overrides})
    if verbose:
        settings.observability = ObservabilityConfig(
            **{**settings.observability.model_dump(), "log_level": "DEBUG"}
        )
    return settings


def _print_sections(document: DocumentAnalysis) -> None:
    table = Table(title=f"{document.filename} ({document.total_pages} pages)")
    table.add_column("Page", justify="right")
    table.add_column("Type", style="cyan")
    table.add_column("Content", max_width=80)

    for section in document.sections:
        preview = section.content
        if len(preview) > 100:
            preview = preview[:100] + "..."
        table.add_row(str(section.page_number), section.type.value, preview)

    console.print(table)
    console.print(f"\nTotal sections: {len(document.sections)}")


def _print_report(report: ComplianceReport) -> None:
    summary = report.summary
    console.print(f"\n[bold]{report.document_type}:[/bold] {report.filename}")
    console.print(f"[bold]Compliance score:[/bold] {summary.compliance_score}/100")
    console.print(
        f"Issues: {summary.total_issues} "
        f"([red]{summary.high_severity} high[/red], "
        f"[yellow]{summary.medium_severity} medium[/yellow], "
        f"[cyan]{summary.low_severity} low[/cyan])\n"
    )

    if not report.issues:
        return

    table = Table(title="Issues")
    table.add_column("Severity")
    table.add_column("Category", style="green")
    table.add_column("Page", justify="right")
    table.add_column("Description", max_width=60)
    table.add_column("Suggested fix", max_width=50)

    for issue in report.issues:
        style = _SEVERITY_STYLES.get(issue.severity.value, "")
        table.add_row(
            f"[{style}]{issue.severity.value}[/{style}]",
            issue.category.value,
            str(issue.location.page_number),
            issue.description,
            issue.suggested_fix,
        )
    console.print(table)


@app.command()
def sections(
    pdf_file: Path = typer.Argument(..., help="PDF document to segment"),
    as_json: bool = typer.Option(False, "--json", help="Print the DocumentAnalysis as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Reconstruct and print a PDF's section structure."""
    settings = _build_settings(None, None, verbose)
    setup_logging(settings.observability)
    assembler = DocumentAssembler(settings.segmentation)

    async def _run() -> DocumentAnalysis:
        with open_pdf_path(pdf_file) as source:
            return await assembler.assemble(source, pdf_file.name)

    try:
        document = asyncio.run(_run())
    except ExtractionError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(document.model_dump_json(by_alias=True, indent=2))
    else:
        _print_sections(document)


@app.command()
def check(
    pdf_file: Path = typer.Argument(..., help="PDF document to analyze"),
    output: Optional[Path] = typer.Option(None, help="Write the report JSON to this path"),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="Analysis service API key"),
    model: Optional[str] = typer.Option(None, "--model", help="LiteLLM model, e.g. gemini/gemini-pro"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Analyze a loan PDF for TILA / ESIGN / UDAAP / ECOA compliance."""
    settings = _build_settings(api_key, model, verbose)
    setup_logging(settings.observability)
    try:
        validate_settings(settings)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=2)

    service = ComplianceService(settings)
    console.print(f"[bold]Analyzing {pdf_file}[/bold]")

    try:
        report = asyncio.run(service.check_file(pdf_file))
    except ExtractionError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)
    except AnalysisError as exc:
        console.print(f"[red]{exc.user_message}[/red]")
        raise typer.Exit(code=1)

    _print_report(report)

    if output:
        JSONFormatter().format_to_file(report, output)
        console.print(f"[green]Report saved to {output}[/green]")


if __name__ == "__main__":
    app()
