"""
Main Typer application for the sn-skills CLI.

This module defines the root CLI application and registers all commands.
"""

from pathlib import Path
from typing import Annotated

import typer

from snskills import __version__
from snskills.cli.commands import skill
from snskills.cli.output import configure_logging, print_error, print_info
from snskills.config import ConfigurationError, load_config

app = typer.Typer(
    name="sn-skills",
    help="Platform-agnostic AI skills library.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=True,
    pretty_exceptions_show_locals=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        print_info(f"sn-skills version [green]{__version__}[/green]")
        raise typer.Exit()


# noinspection PyUnusedLocal
@app.callback()
def main_callback(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    root: Annotated[
        Path | None,
        typer.Option(
            "--root",
            "-r",
            help="Skills root directory (overrides skills.root from config).",
            envvar="SNSKILLS_ROOT",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging.",
        ),
    ] = False,
) -> None:
    """
    [bold blue]sn-skills[/bold blue] - AI skills library

    Discover, search, load, and validate skill documents.
    """
    try:
        config = load_config()
    except ConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(1)

    configure_logging("DEBUG" if verbose else config.logging.level)
    ctx.obj = skill.CliState(config=config, root=config.skills.resolve_root(root))


app.command("list")(skill.list_skills)
app.command()(skill.search)
app.command()(skill.load)
app.command()(skill.info)
app.command()(skill.validate)
app.command()(skill.stats)
app.command()(skill.categories)
app.command()(skill.tags)


if __name__ == "__main__":
    app()
