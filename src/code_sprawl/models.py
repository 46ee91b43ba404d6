"""Data models for Code Sprawl.

Everything here is run-scoped: a SourceFile is read once, turned into a
FileScore, folded into the RunSummary and then dropped.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


def round_half_up(value: float, digits: int = 2) -> float:
    """Round for reporting. Halves go up, unlike the built-in round()."""
    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale


def percent(value: float) -> int:
    """Express a 0..1 ratio as a whole percentage."""
    return int(math.floor(value * 100 + 0.5))


class SprawlLevel(str, Enum):
    """Discrete classification of an adjusted score."""

    CLEAN = "clean"
    MILD = "mild"
    HIGH = "high"
    SEVERE = "severe"


@dataclass(frozen=True)
class SourceFile:
    """A file's identity (path relative to the root) and raw text."""

    path: str
    content: str

    @property
    def lines(self) -> list[str]:
        return self.content.split("\n")

    @property
    def line_count(self) -> int:
        return self.content.count("\n") + 1


@dataclass(frozen=True)
class SubMetrics:
    """The five independent sub-scores plus the raw counts behind them."""

    normalized_size: float
    complexity: float
    duplication: float
    responsibility: float
    coupling: float

    cyclomatic_complexity: float = 0.0
    responsibility_count: float = 0.0
    dependency_count: float = 0.0


@dataclass(frozen=True)
class FileDetails:
    """Secondary boolean signals. Not inputs to the score."""

    has_long_functions: bool
    has_deep_nesting: bool
    has_repetitive_patterns: bool
    has_high_coupling: bool
    has_too_many_responsibilities: bool

    def to_dict(self) -> dict[str, bool]:
        return {
            "hasLongFunctions": self.has_long_functions,
            "hasDeepNesting": self.has_deep_nesting,
            "hasRepetitivePatterns": self.has_repetitive_patterns,
            "hasHighCoupling": self.has_high_coupling,
            "hasTooManyResponsibilities": self.has_too_many_responsibilities,
        }


@dataclass(frozen=True)
class FileScore:
    """Per-file result. A pure function of the file content and config."""

    path: str
    loc: int
    mode: str
    metrics: SubMetrics
    entropy_factor: float
    sprawl_score: float
    adjusted_score: float
    level: SprawlLevel
    details: FileDetails

    def to_dict(self) -> dict[str, Any]:
        m = self.metrics
        return {
            "path": self.path,
            "loc": self.loc,
            "metrics": {
                "normalizedLOC": round_half_up(m.normalized_size),
                "complexityScore": round_half_up(m.complexity),
                "duplicationRatio": round_half_up(m.duplication),
                "responsibilityScore": round_half_up(m.responsibility),
                "couplingScore": round_half_up(m.coupling),
                "aiEntropyFactor": round_half_up(self.entropy_factor),
            },
            "cyclomaticComplexity": round_half_up(m.cyclomatic_complexity),
            "duplicatedLogicScore": percent(m.duplication),
            "aiEntropyScore": percent(self.entropy_factor),
            "totalDebtScore": round_half_up(self.adjusted_score),
            "sprawlScore": round_half_up(self.sprawl_score),
            "sprawlLevel": self.level.value,
            "details": self.details.to_dict(),
        }


@dataclass(frozen=True)
class RunSummary:
    """Aggregate over the files that produced a FileScore."""

    total_files: int
    analyzed_files: int
    average_complexity: float
    average_debt_score: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalFiles": self.total_files,
            "analyzedFiles": self.analyzed_files,
            "averageComplexity": self.average_complexity,
            "averageDebtScore": self.average_debt_score,
        }


@dataclass
class RunResult:
    """Complete output of one analysis run."""

    summary: RunSummary
    files: list[FileScore] = field(default_factory=list)
    loc_breakdown: Optional[dict[str, Any]] = None
    skipped_files: int = 0
    failed_files: int = 0

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "summary": self.summary.to_dict(),
            "files": [f.to_dict() for f in self.files],
        }
        if self.loc_breakdown is not None:
            data["locBreakdown"] = self.loc_breakdown
        return data
