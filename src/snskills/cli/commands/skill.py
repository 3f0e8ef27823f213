"""
sn-skills commands.

Usage:
    sn-skills list [--category itsm | --tag triage | --platform chatgpt]
    sn-skills search incident
    sn-skills load itsm/incident-triage [--prompt | --section procedure]
    sn-skills info itsm/incident-triage
    sn-skills validate [itsm/incident-triage]
    sn-skills stats
    sn-skills categories
    sn-skills tags
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from snskills.cli.output import (
    complexity_marker,
    console,
    print_error,
    print_info,
    print_json,
    print_success,
    print_warning,
)
from snskills.config import Config
from snskills.skills import (
    SkillInfo,
    SkillLoader,
    SkillNotFoundError,
    SkillParseError,
    SkillRegistry,
    SkillValidator,
    ValidationResult,
    create_registry,
    to_prompt,
    tools_for_platform,
)


@dataclass
class CliState:
    """Per-invocation state set up by the root callback."""

    config: Config
    root: Path

    def registry(self) -> SkillRegistry:
        return create_registry(self.root, self.config)

    def loader(self) -> SkillLoader:
        return SkillLoader.from_config(self.config, self.root)

    def validator(self) -> SkillValidator:
        return SkillValidator.from_config(self.config)


def _state(ctx: typer.Context) -> CliState:
    return ctx.obj


def _skills_table(skills: list[SkillInfo], title: str) -> Table:
    table = Table(title=title)
    table.add_column("", no_wrap=True)
    table.add_column("Path", style="cyan")
    table.add_column("Name")
    table.add_column("Description", style="dim")

    for skill in skills:
        table.add_row(
            complexity_marker(skill.complexity),
            escape(skill.path),
            escape(skill.name),
            escape(skill.description),
        )
    return table


def list_skills(
    ctx: typer.Context,
    category: Annotated[
        str | None,
        typer.Option("--category", "-c", help="Filter by category."),
    ] = None,
    tag: Annotated[
        str | None,
        typer.Option("--tag", "-t", help="Filter by tag."),
    ] = None,
    platform: Annotated[
        str | None,
        typer.Option("--platform", "-p", help="Filter by platform."),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON."),
    ] = False,
) -> None:
    """List all available skills."""
    registry = _state(ctx).registry()

    if category:
        skills = registry.find_by_category(category)
    elif tag:
        skills = registry.find_by_tag(tag)
    elif platform:
        skills = registry.find_by_platform(platform)
    else:
        skills = registry.get_all()

    if as_json:
        print_json(skills)
        return

    if not skills:
        print_warning("No skills found.")
        return

    console.print(_skills_table(skills, "Skills"))
    console.print(f"\n[dim]Total: {len(skills)} skill(s)[/dim]")


def search(
    ctx: typer.Context,
    query: Annotated[str, typer.Argument(help="Search query.")],
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON."),
    ] = False,
) -> None:
    """Search skills by name, description, or tags."""
    results = _state(ctx).registry().search(query)

    if as_json:
        print_json(results)
        return

    if not results:
        print_warning(f"No skills found matching '{escape(query)}'")
        return

    console.print(_skills_table(results, f"Search results for '{escape(query)}'"))


def load(
    ctx: typer.Context,
    skill_path: Annotated[str, typer.Argument(help="Skill path (category/name).")],
    section: Annotated[
        str | None,
        typer.Option("--section", "-s", help="Show a specific section only."),
    ] = None,
    prompt: Annotated[
        bool,
        typer.Option("--prompt", help="Output in prompt-ready format."),
    ] = False,
    platform: Annotated[
        str | None,
        typer.Option("--platform", "-p", help="Show tools for this platform only."),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON."),
    ] = False,
) -> None:
    """Load and display a skill."""
    try:
        skill = _state(ctx).loader().load(skill_path)
    except SkillNotFoundError:
        print_error(f"Skill not found: {escape(skill_path)}")
        raise typer.Exit(1)
    except SkillParseError as e:
        print_error(f"Failed to parse skill: {escape(str(e))}")
        raise typer.Exit(1)
    except (OSError, UnicodeDecodeError) as e:
        print_error(f"Could not read skill: {escape(str(e))}")
        raise typer.Exit(1)

    if as_json:
        print_json(skill)
        return

    if prompt:
        typer.echo(to_prompt(skill))
        return

    if section:
        content = skill.sections.get(section.lower())
        if content is None:
            print_warning(f"No '{escape(section)}' section; showing full content")
            content = skill.raw_content
        typer.echo(content)
        return

    lines = [
        f"[bold]{escape(skill.name)}[/bold] v{escape(skill.version)}",
        "",
        escape(skill.description),
        "",
        f"[dim]Author:[/dim]     {escape(skill.author)}",
        f"[dim]Category:[/dim]   {escape(skill.category)}",
        f"[dim]Complexity:[/dim] {escape(skill.complexity)}",
        f"[dim]Tags:[/dim]       {escape(', '.join(skill.tags))}",
        f"[dim]Platforms:[/dim]  {escape(', '.join(skill.platforms))}",
    ]

    if platform:
        tools = tools_for_platform(skill, platform)
        lines.append(f"[dim]Tools ({escape(platform)}):[/dim] {escape(', '.join(tools)) or '(none)'}")
    elif skill.tools:
        lines.append("[dim]Tools:[/dim]")
        for tool_type, tools in skill.tools.items():
            lines.append(f"  {escape(tool_type)}: {escape(', '.join(tools))}")

    console.print(Panel("\n".join(lines), title=escape(skill.path)))
    console.print("\n[bold cyan]## Procedure[/bold cyan]\n")
    typer.echo(skill.procedure or skill.raw_content)


def info(
    ctx: typer.Context,
    skill_path: Annotated[str, typer.Argument(help="Skill path (category/name).")],
) -> None:
    """Show skill metadata."""
    skill = _state(ctx).registry().get(skill_path)

    if skill is None:
        print_error(f"Skill not found: {escape(skill_path)}")
        raise typer.Exit(1)

    table = Table(show_header=False, box=None, title=escape(skill.name))
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Description", escape(skill.description))
    table.add_row("Version", escape(skill.version))
    table.add_row("Author", escape(skill.author))
    table.add_row("Category", escape(skill.category))
    table.add_row("Complexity", escape(skill.complexity))
    table.add_row("Tags", escape(", ".join(skill.tags)))
    table.add_row("Platforms", escape(", ".join(skill.platforms)))
    console.print(table)


def _print_result(result: ValidationResult, show_warnings: bool = True) -> None:
    if result.valid:
        print_success(f"{escape(result.path)} - {result.summary}")
    else:
        print_error(f"{escape(result.path)} - {result.summary}")

    for error in result.errors:
        console.print(f"    [red]- {escape(error)}[/red]")
    if show_warnings:
        for warning in result.warnings:
            console.print(f"    [yellow]- {escape(warning)}[/yellow]")


def validate(
    ctx: typer.Context,
    skill_path: Annotated[
        str | None,
        typer.Argument(help="Skill path (validates all skills if omitted)."),
    ] = None,
    show_warnings: Annotated[
        bool,
        typer.Option("--warnings/--no-warnings", help="Show warnings."),
    ] = True,
) -> None:
    """Validate skill files."""
    state = _state(ctx)
    validator = state.validator()

    if skill_path:
        try:
            content = state.loader().read_raw(skill_path)
        except SkillNotFoundError:
            print_error(f"Skill not found: {escape(skill_path)}")
            raise typer.Exit(1)
        except (OSError, UnicodeDecodeError) as e:
            print_error(f"Could not read skill: {escape(str(e))}")
            raise typer.Exit(1)

        result = validator.validate(content, skill_path)
        _print_result(result, show_warnings)
        if not result.valid:
            raise typer.Exit(1)
        return

    print_info("Validating all skills...")
    results = validator.validate_all(
        state.root,
        state.config.skills.skill_filename,
        state.config.skills.max_workers,
    )

    for result in results:
        _print_result(result, show_warnings)

    invalid = sum(1 for r in results if not r.valid)
    console.print(f"\n[bold]{len(results) - invalid} valid, {invalid} invalid[/bold]")
    if invalid:
        raise typer.Exit(1)


def stats(ctx: typer.Context) -> None:
    """Show skills library statistics."""
    summary = _state(ctx).registry().get_stats()

    table = Table(title="Skills Statistics", show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", style="cyan")
    table.add_row("Total Skills", str(summary.total_skills))
    table.add_row("Categories", str(summary.categories))
    table.add_row("Unique Tags", str(summary.tags))
    table.add_row("Platforms", str(summary.platforms))
    console.print(table)

    by_category = Table(title="By Category")
    by_category.add_column("Category")
    by_category.add_column("Skills", justify="right")
    for name, count in summary.by_category.items():
        by_category.add_row(escape(name), str(count))
    console.print(by_category)

    by_complexity = Table(title="By Complexity")
    by_complexity.add_column("Complexity")
    by_complexity.add_column("Skills", justify="right")
    for name, count in summary.by_complexity.items():
        by_complexity.add_row(escape(name), str(count))
    console.print(by_complexity)


def categories(ctx: typer.Context) -> None:
    """List all categories."""
    for category in _state(ctx).registry().get_categories():
        console.print(f"  • {escape(category)}")


def tags(ctx: typer.Context) -> None:
    """List all tags."""
    all_tags = _state(ctx).registry().get_tags()
    if not all_tags:
        print_warning("No tags found.")
        return
    console.print(escape(", ".join(all_tags)))
