"""Score aggregation: weighted combination, entropy adjustment, levels."""

from ..config import LevelThresholds, ScoreWeights
from ..models import SprawlLevel, SubMetrics


def combine(metrics: SubMetrics, weights: ScoreWeights) -> float:
    """Pre-entropy sprawl score: the weighted sum of the five sub-metrics."""
    return (
        weights.size * metrics.normalized_size
        + weights.complexity * metrics.complexity
        + weights.duplication * metrics.duplication
        + weights.responsibility * metrics.responsibility
        + weights.coupling * metrics.coupling
    )


def adjust(sprawl: float, entropy: float) -> float:
    """Apply the entropy penalty multiplicatively."""
    return sprawl * (1 + entropy)


def classify(adjusted: float, thresholds: LevelThresholds) -> SprawlLevel:
    """Map an adjusted score to its level. Each bound opens the next bucket."""
    if adjusted < thresholds.mild:
        return SprawlLevel.CLEAN
    if adjusted < thresholds.high:
        return SprawlLevel.MILD
    if adjusted < thresholds.severe:
        return SprawlLevel.HIGH
    return SprawlLevel.SEVERE
