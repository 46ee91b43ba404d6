"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import AnalysisConfig, load_config

console = Console()
err_console = Console(stderr=True)


def resolve_config(
    config: Optional[Path] = None,
    workers: Optional[int] = None,
    line_counter: bool = False,
    verbose: bool = False,
    quiet: bool = False,
) -> AnalysisConfig:
    """Build the run configuration from CLI options."""
    overrides = {}
    if workers is not None:
        overrides["workers"] = workers
    if line_counter:
        overrides["enable_line_counter"] = True
    if verbose:
        overrides["verbose"] = True
    if quiet:
        overrides["quiet"] = True
    return load_config(config_file=config, **overrides)
