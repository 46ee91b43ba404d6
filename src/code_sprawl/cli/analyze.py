"""Analyze command: score every candidate file under a directory."""

from pathlib import Path
from typing import Optional

import click
import typer

from ..analysis import RunCoordinator
from ..exceptions import SprawlError
from ..formatters import get_formatter
from ..logging_config import setup_logging
from . import app
from ._common import console, err_console, resolve_config


@app.command()
def analyze(
    path: Path = typer.Argument(
        Path("."),
        help="Project root to analyze (default: current directory)",
        file_okay=False,
        dir_okay=True,
    ),
    output_format: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich | json",
        click_type=click.Choice(["rich", "json"], case_sensitive=False),
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write JSON output to a file instead of stdout",
        dir_okay=False,
    ),
    workers: Optional[int] = typer.Option(
        None,
        "-w",
        "--workers",
        help="Parallel workers (default: min(cpu count, 8))",
        min=1,
        max=64,
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    line_counter: bool = typer.Option(
        False,
        "--line-counter",
        help="Add a cloc LOC breakdown to the output",
    ),
    top: Optional[int] = typer.Option(
        None,
        "--top",
        "-n",
        help="Only show the N worst files in the table",
        min=1,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log errors"),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also append log records to this file",
        dir_okay=False,
    ),
):
    """
    Score each JavaScript/TypeScript file for maintainability debt.

    [bold cyan]Examples:[/bold cyan]

      code-sprawl analyze

      code-sprawl analyze ./src --format json -o report.json

      code-sprawl analyze . --workers 1 --line-counter
    """
    try:
        settings = resolve_config(
            config=config,
            workers=workers,
            line_counter=line_counter,
            verbose=verbose,
            quiet=quiet,
        )
    except SprawlError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    logger = setup_logging(settings.verbosity, log_file=log_file)

    fmt_name = "json" if output is not None else output_format.lower()
    options = {"console": console, "limit": top} if fmt_name == "rich" else {}
    formatter = get_formatter(fmt_name, **options)

    try:
        result = RunCoordinator(settings).run(path)

        if output is not None:
            output.write_text(formatter.format(result) + "\n", encoding="utf-8")
            err_console.print(f"[green]Wrote[/green] {output}")
        else:
            formatter.render(result)

    except SprawlError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    except KeyboardInterrupt:
        logger.info("Analysis interrupted by user")
        err_console.print("\n[yellow]Analysis interrupted[/yellow]")
        raise typer.Exit(130)
