"""
Logging configuration for Code Sprawl.

Log records go to stderr through a rich handler so that stdout stays free
for the structured JSON result. Library code only obtains loggers; the CLI
is the one place that installs handlers.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "code_sprawl"

LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}


def setup_logging(
    verbosity: str = "normal", log_file: Optional[Union[str, Path]] = None
) -> logging.Logger:
    """
    Configure logging for a command-line run.

    Args:
        verbosity: One of "quiet", "normal" or "verbose"
        log_file: Optional file that receives a plain-text copy of every
            code_sprawl record at the same level

    Returns:
        Configured logger instance for code_sprawl
    """
    if verbosity not in LEVELS:
        raise ValueError(f"unknown verbosity '{verbosity}'")
    level = LEVELS[verbosity]
    verbose = verbosity == "verbose"

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        tracebacks_show_locals=verbose,
        markup=False,
        show_time=True,
        show_path=verbose,
    )
    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]", handlers=[handler])

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        logger.addHandler(file_handler)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Module name (e.g., 'code_sprawl.analysis')
              If None, returns the root code_sprawl logger

    Returns:
        Logger instance
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER)

    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"

    return logging.getLogger(name)
