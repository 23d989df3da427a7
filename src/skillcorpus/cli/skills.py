"""Skill browsing and scaffolding commands."""

import questionary
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from skillcorpus.core.scaffold import create_skill
from skillcorpus.core.skill_loader import SkillLoader
from skillcorpus.utils.def_loader import DefNotFoundError, InvalidDefError
from skillcorpus.utils.logging import setup_logging

console = Console()


def list_command(ctx: typer.Context, prefix: str | None = None) -> None:
    """List all skills, optionally limited to one prefix."""
    config = ctx.obj.get("config")
    loader = SkillLoader.from_config(config)

    skills = loader.discover_skills(prefix=prefix)
    if not skills:
        console.print(f"[yellow]No skills found in {config.skills_path}[/yellow]")
        return

    table = Table(title=f"Skills: {len(skills)}")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Version")
    table.add_column("Description")
    for skill in skills:
        table.add_row(
            escape(skill.id), escape(skill.version or "-"), escape(skill.description)
        )
    console.print(table)


def show_command(ctx: typer.Context, skill_id: str) -> None:
    """Show detailed information about a skill."""
    config = ctx.obj.get("config")
    loader = SkillLoader.from_config(config)

    try:
        skill = loader.load_skill(skill_id)
    except DefNotFoundError:
        console.print(f"[red]Skill not found: {escape(skill_id)}[/red]")
        raise typer.Exit(1)
    except InvalidDefError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print(typer.style(f"Skill: {skill.id}", bold=True, fg="cyan"))
    console.print(f"Name: {escape(skill.name)}")
    console.print(f"Description: {escape(skill.description)}")
    console.print(f"Version: {escape(skill.version or '-')}")
    if skill.bonded_agent:
        console.print(f"Bonded agent: {escape(skill.bonded_agent)}")
    if skill.tags:
        console.print(f"Tags: {escape(', '.join(skill.tags))}")

    console.print("\nParameters:")
    if skill.parameters:
        for param in skill.parameters:
            required = (
                typer.style(" required", fg="red", bold=True)
                if param.required
                else typer.style(" optional", fg="green")
            )
            console.print(f"  [bold]{escape(param.name)}[/bold] ({param.type}){required}")
            if param.description:
                console.print(f"    {escape(param.description)}")
            if param.enum:
                values = ", ".join(str(value) for value in param.enum)
                console.print(f"    one of: {escape(values)}")
    else:
        console.print("  No parameters")

    if skill.retry_config:
        retry = skill.retry_config
        console.print(
            f"\nRetry: {retry.max_attempts} attempt(s), {retry.backoff} backoff"
        )

    if skill.references:
        console.print("\nReferences:")
        for ref in skill.references:
            console.print(f"  - {escape(ref)}")

    if skill.changelog:
        console.print("\nChangelog:")
        for entry in skill.changelog:
            date = f" ({entry.date})" if entry.date else ""
            console.print(f"  {escape(entry.version)}{escape(date)}: {escape(entry.changes)}")


def new_command(
    ctx: typer.Context,
    prefix: str,
    name: str,
    description: str | None = None,
    version: str = "0.1.0",
    with_references: bool = False,
) -> None:
    """Scaffold a new skill folder and document."""
    config = ctx.obj.get("config")
    setup_logging(config)

    if description is None:
        description = questionary.text("One-line description:").ask()
        if not description:
            console.print("[yellow]Cancelled.[/yellow]")
            raise typer.Exit(1)

    try:
        path = create_skill(
            config.skills_path,
            prefix=prefix,
            name=name,
            description=description,
            version=version,
            with_references=with_references,
            skill_file_suffix=config.skill_file_suffix,
            references_dir=config.references_dir,
        )
    except (ValueError, FileExistsError) as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Created {escape(str(path))}[/green]")
