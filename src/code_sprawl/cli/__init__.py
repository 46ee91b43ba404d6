"""CLI entry point; registers all subcommands."""

from typing import Optional

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="code-sprawl",
    help="Code Sprawl - maintainability debt scoring for JavaScript/TypeScript",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold cyan]Code Sprawl[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Score JavaScript/TypeScript files for size, complexity, duplication,
    responsibility and coupling debt.
    """


# Import subcommands to register them
from .analyze import analyze as _analyze  # noqa: F401, E402
