"""taskplan CLI entry point."""

import logging
import sys

import structlog
import typer
from rich.console import Console

from taskplan.api.cli.commands import resolve, skills

app = typer.Typer(
    name="taskplan",
    help="taskplan - validate, expand and check LLM task plans",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

app.add_typer(skills.app, name="skills", help="Skill inspection")
app.command("resolve")(resolve.resolve_plan)


def configure_logging(debug: bool) -> None:
    """Route structlog output to stderr, filtered by the debug flag."""
    level = logging.DEBUG if debug else logging.WARNING
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug logging on stderr"),
):
    """taskplan CLI."""
    configure_logging(debug)
    ctx.obj = {"debug": debug}


@app.command()
def version():
    """Show taskplan version."""
    from taskplan import __version__

    console.print(f"[bold blue]Version:[/bold blue] [cyan]{__version__}[/cyan]")


if __name__ == "__main__":
    app()
