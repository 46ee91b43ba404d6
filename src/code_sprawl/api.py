"""Public API for Code Sprawl.

Example:
    >>> from code_sprawl import analyze
    >>>
    >>> result = analyze("/path/to/project")
    >>> result.summary.average_debt_score
    0.73
    >>>
    >>> # With overrides
    >>> result = analyze("/path/to/project", workers=1, enable_line_counter=True)
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from .analysis import RunCoordinator
from .config import load_config
from .logging_config import get_logger
from .models import RunResult
from .workspace import Workspace

logger = get_logger(__name__)


def analyze(
    path: Union[str, Path, Workspace] = ".",
    config_file: Optional[Path] = None,
    **overrides,
) -> RunResult:
    """Score every candidate file under a source tree.

    Args:
        path: Root directory, or a Workspace handed over by the caller
        config_file: Optional explicit config file path
        **overrides: Configuration overrides (e.g., workers=4)

    Returns:
        RunResult with the summary and per-file scores in enumeration order

    Raises:
        ConfigurationError: If configuration is invalid
        InvalidPathError: If the root cannot be enumerated
    """
    config = load_config(config_file=config_file, **overrides)
    logger.debug(f"Analyzing {path} with {config.workers} workers")
    return RunCoordinator(config).run(path)
