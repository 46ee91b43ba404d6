"""Rich terminal formatter for Code Sprawl."""

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..models import FileScore, RunResult, SprawlLevel, percent, round_half_up
from .base import BaseFormatter

_LEVEL_STYLES = {
    SprawlLevel.CLEAN: "green",
    SprawlLevel.MILD: "yellow",
    SprawlLevel.HIGH: "red",
    SprawlLevel.SEVERE: "red bold",
}

_FLAG_LABELS = {
    "has_long_functions": "long",
    "has_deep_nesting": "nested",
    "has_repetitive_patterns": "repetitive",
    "has_high_coupling": "coupled",
    "has_too_many_responsibilities": "overloaded",
}


def _level_label(level: SprawlLevel) -> str:
    style = _LEVEL_STYLES[level]
    return f"[{style}]{level.value}[/{style}]"


def _flags(score: FileScore) -> str:
    return ", ".join(label for attr, label in _FLAG_LABELS.items() if getattr(score.details, attr))


class RichFormatter(BaseFormatter):
    """Summary panel followed by a per-file table, worst files first."""

    def __init__(self, console: Optional[Console] = None, limit: Optional[int] = None):
        self.console = console or Console()
        self.limit = limit

    def render(self, result: RunResult) -> None:
        self._print_summary(result)
        if result.files:
            self._print_table(result)

    def format(self, result: RunResult) -> str:
        with self.console.capture() as capture:
            self.render(result)
        return capture.get()

    def _print_summary(self, result: RunResult) -> None:
        s = result.summary
        lines = [
            f"Files: [bold]{s.analyzed_files}[/bold] analyzed of {s.total_files}",
            f"Average complexity: [bold]{round_half_up(s.average_complexity)}[/bold]",
            f"Average debt score: [bold]{round_half_up(s.average_debt_score)}[/bold]",
        ]
        counts = {level: 0 for level in SprawlLevel}
        for f in result.files:
            counts[f.level] += 1
        lines.append("  ".join(f"{_level_label(level)}: {n}" for level, n in counts.items()))
        if result.loc_breakdown and "SUM" in result.loc_breakdown:
            total = result.loc_breakdown["SUM"].get("code")
            if total is not None:
                lines.append(f"Lines of code (cloc): [bold]{total}[/bold]")

        self.console.print(
            Panel("\n".join(lines), title="[bold cyan]Code Sprawl[/bold cyan]", expand=False)
        )

    def _print_table(self, result: RunResult) -> None:
        files = sorted(result.files, key=lambda f: f.adjusted_score, reverse=True)
        if self.limit is not None:
            files = files[: self.limit]

        table = Table(show_header=True, header_style="bold")
        table.add_column("File", overflow="fold")
        table.add_column("LOC", justify="right")
        table.add_column("CC", justify="right")
        table.add_column("Dup", justify="right")
        table.add_column("Entropy", justify="right")
        table.add_column("Debt", justify="right")
        table.add_column("Level")
        table.add_column("Flags", style="dim")

        for f in files:
            table.add_row(
                f.path,
                str(f.loc),
                f"{f.metrics.cyclomatic_complexity:.0f}",
                f"{percent(f.metrics.duplication)}%",
                f"{percent(f.entropy_factor)}%",
                f"{round_half_up(f.adjusted_score):.2f}",
                _level_label(f.level),
                _flags(f),
            )

        self.console.print(table)
