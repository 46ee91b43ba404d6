"""Tests for score aggregation and classification."""

import pytest

from code_sprawl.analysis import adjust, classify, combine
from code_sprawl.config import LevelThresholds, ScoreWeights
from code_sprawl.models import SprawlLevel, SubMetrics

THRESHOLDS = LevelThresholds()


class TestCombine:
    def test_weights_applied(self):
        metrics = SubMetrics(
            normalized_size=1.0, complexity=0.0, duplication=0.0, responsibility=0.0, coupling=0.0
        )
        assert combine(metrics, ScoreWeights()) == pytest.approx(0.25)

    def test_unit_metrics_sum_to_one(self):
        metrics = SubMetrics(1.0, 1.0, 1.0, 1.0, 1.0)
        assert combine(metrics, ScoreWeights()) == pytest.approx(1.0)

    def test_custom_weights(self):
        weights = ScoreWeights(size=1.0, complexity=0.0, duplication=0.0, responsibility=0.0, coupling=0.0)
        assert combine(SubMetrics(2.0, 5.0, 1.0, 1.0, 1.0), weights) == 2.0


class TestAdjust:
    def test_multiplicative(self):
        assert adjust(1.0, 0.5) == 1.5
        assert adjust(0.8, 0.0) == 0.8


class TestClassify:
    """Each bound starts its bucket; no off-by-one."""

    @pytest.mark.parametrize(
        "score,level",
        [
            (0.0, SprawlLevel.CLEAN),
            (0.7999, SprawlLevel.CLEAN),
            (0.8, SprawlLevel.MILD),
            (1.1999, SprawlLevel.MILD),
            (1.2, SprawlLevel.HIGH),
            (1.5999, SprawlLevel.HIGH),
            (1.6, SprawlLevel.SEVERE),
            (25.0, SprawlLevel.SEVERE),
        ],
    )
    def test_boundaries(self, score, level):
        assert classify(score, THRESHOLDS) is level

    def test_custom_thresholds(self):
        thresholds = LevelThresholds(mild=0.1, high=0.2, severe=0.3)
        assert classify(0.25, thresholds) is SprawlLevel.HIGH
