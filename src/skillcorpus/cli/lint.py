"""Lint CLI command."""

from enum import Enum

import typer
from rich.console import Console
from rich.markup import escape

from skillcorpus.core.lint import Linter
from skillcorpus.utils.logging import setup_logging

console = Console()

SEVERITY_STYLES = {"error": "red", "warning": "yellow", "info": "blue"}


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


def lint_command(
    ctx: typer.Context,
    output_format: OutputFormat = OutputFormat.TEXT,
    strict: bool = False,
) -> None:
    """Lint the corpus and exit non-zero when it has errors."""
    config = ctx.obj.get("config")
    setup_logging(config)

    try:
        report = Linter(config).lint()
    except FileNotFoundError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    if output_format == OutputFormat.JSON:
        typer.echo(report.model_dump_json(indent=2))
    else:
        for issue in report.issues:
            style = SEVERITY_STYLES.get(issue.severity, "white")
            console.print(
                f"{escape(issue.location())}: [{style}]{issue.severity}[/{style}] "
                f"{escape(issue.message)} [dim]({issue.rule})[/dim]"
            )
        summary = (
            f"{report.skills_checked} skill(s) checked, "
            f"{report.error_count} error(s), {report.warning_count} warning(s)"
        )
        console.print(
            f"[green]{summary}[/green]" if not report.issues else f"[bold]{summary}[/bold]"
        )

    if not report.ok or (strict and report.warning_count):
        raise typer.Exit(1)
