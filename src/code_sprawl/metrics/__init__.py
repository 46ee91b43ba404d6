"""Per-file metric calculators and the entropy penalty."""

from .calculators import (
    compute_sub_metrics,
    cyclomatic_complexity,
    dependency_count,
    duplication_ratio,
    responsibility_count,
    responsibility_score,
    size_score,
)
from .entropy import entropy_factor, parameter_count, signature_concentration

__all__ = [
    "compute_sub_metrics",
    "cyclomatic_complexity",
    "dependency_count",
    "duplication_ratio",
    "responsibility_count",
    "responsibility_score",
    "size_score",
    "entropy_factor",
    "parameter_count",
    "signature_concentration",
]
