"""Exception hierarchy for Code Sprawl."""

from .analysis import (
    AnalysisError,
    FileAccessError,
    ParsingError,
    UnsupportedLanguageError,
)
from .base import SprawlError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
    SecurityError,
)

__all__ = [
    "SprawlError",
    "AnalysisError",
    "FileAccessError",
    "ParsingError",
    "UnsupportedLanguageError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
    "SecurityError",
]
