"""
Code Sprawl - per-file maintainability debt scoring for JavaScript/TypeScript.

Each file gets five sub-metrics (size, complexity, duplication,
responsibility, coupling), an entropy penalty for boilerplate-looking code,
and a sprawl level from clean to severe.
"""

__version__ = "0.1.0"

from .api import analyze
from .config import AnalysisConfig, SprawlConfig, load_config
from .exceptions import SprawlError
from .models import FileScore, RunResult, RunSummary, SprawlLevel

__all__ = [
    "analyze",
    "AnalysisConfig",
    "SprawlConfig",
    "load_config",
    "SprawlError",
    "FileScore",
    "RunResult",
    "RunSummary",
    "SprawlLevel",
]
