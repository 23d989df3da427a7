"""CLI interface for skillcorpus using Typer."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from skillcorpus.cli.lint import OutputFormat, lint_command
from skillcorpus.cli.server import server_command
from skillcorpus.cli.skills import list_command, new_command, show_command
from skillcorpus.utils.config import Config

app = typer.Typer(
    name="skillcorpus",
    help="Browse, lint and scaffold Markdown skill documents",
    no_args_is_help=True,
    add_completion=True,
)

console = Console()


def load_config_callback(ctx: typer.Context, root: str) -> str:
    """Load configuration and store it in the context."""
    try:
        cfg = Config.load(Path(root))
    except FileNotFoundError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[red]Error loading config: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg
    return root


@app.callback()
def main(
    ctx: typer.Context,
    root: str = typer.Option(
        ".",
        "--root",
        "-r",
        help="Corpus root holding skillcorpus.yaml and the skills/ tree",
        callback=load_config_callback,
    ),
) -> None:
    """
    Browse, lint and scaffold Markdown skill documents.

    Configuration is read from skillcorpus.yaml (and skillcorpus.local.yaml)
    in the corpus root, which defaults to the current directory.
    """
    # Config is loaded via callback, nothing to do here
    pass


@app.command("list")
def list_skills(
    ctx: typer.Context,
    prefix: Annotated[
        str | None,
        typer.Option("--prefix", "-p", help="Only show skills with this prefix"),
    ] = None,
) -> None:
    """List skills in the corpus."""
    list_command(ctx, prefix=prefix)


@app.command()
def show(
    ctx: typer.Context,
    skill_id: Annotated[str, typer.Argument(help="Skill folder name")],
) -> None:
    """Show metadata, parameters and changelog of a skill."""
    show_command(ctx, skill_id)


@app.command()
def lint(
    ctx: typer.Context,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format"),
    ] = OutputFormat.TEXT,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Fail on warnings as well as errors"),
    ] = False,
) -> None:
    """Check layout, front-matter and Markdown of every skill."""
    lint_command(ctx, output_format=output_format, strict=strict)


@app.command()
def new(
    ctx: typer.Context,
    prefix: Annotated[str, typer.Argument(help="Topic prefix, e.g. solidity")],
    name: Annotated[str, typer.Argument(help="Skill name in kebab-case")],
    description: Annotated[
        str | None,
        typer.Option("--description", "-d", help="One-line description"),
    ] = None,
    version: Annotated[
        str, typer.Option("--version", "-v", help="Initial version")
    ] = "0.1.0",
    references: Annotated[
        bool,
        typer.Option("--references", help="Also create a references/ folder"),
    ] = False,
) -> None:
    """Scaffold a new skill folder."""
    new_command(
        ctx,
        prefix=prefix,
        name=name,
        description=description,
        version=version,
        with_references=references,
    )


@app.command("serve")
def serve(
    ctx: typer.Context,
    host: Annotated[
        str | None, typer.Option("--host", help="Overrides api.host")
    ] = None,
    port: Annotated[
        int | None, typer.Option("--port", help="Overrides api.port")
    ] = None,
) -> None:
    """Serve the corpus over HTTP."""
    server_command(ctx, host=host, port=port)


if __name__ == "__main__":
    app()
