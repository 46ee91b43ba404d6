"""Per-file scoring and run coordination."""

from .coordinator import FileOutcome, RunCoordinator, SummaryAccumulator
from .engine import FileAnalyzer, detail_flags
from .scoring import adjust, classify, combine

__all__ = [
    "FileAnalyzer",
    "FileOutcome",
    "RunCoordinator",
    "SummaryAccumulator",
    "adjust",
    "classify",
    "combine",
    "detail_flags",
]
