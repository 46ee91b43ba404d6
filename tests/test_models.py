"""Tests for result models and their serialized form."""

import pytest

from code_sprawl.models import (
    FileDetails,
    FileScore,
    RunResult,
    RunSummary,
    SprawlLevel,
    SubMetrics,
    percent,
    round_half_up,
)


def _score(**overrides):
    fields = dict(
        path="src/a.js",
        loc=12,
        mode="structural",
        metrics=SubMetrics(0.4, 0.2, 0.125, 0.5, 0.2, cyclomatic_complexity=2.0),
        entropy_factor=0.055,
        sprawl_score=0.31,
        adjusted_score=0.32705,
        level=SprawlLevel.CLEAN,
        details=FileDetails(False, True, True, False, False),
    )
    fields.update(overrides)
    return FileScore(**fields)


class TestRounding:
    def test_half_up(self):
        assert round_half_up(0.125) == 0.13
        assert round_half_up(0.5, digits=0) == 1.0
        assert round_half_up(1.004) == 1.0

    def test_percent(self):
        assert percent(0.125) == 13
        assert percent(0.0) == 0
        assert percent(1.0) == 100


class TestFileScoreDict:
    """The per-file output contract."""

    def test_keys(self):
        data = _score().to_dict()
        assert set(data) == {
            "path",
            "loc",
            "metrics",
            "cyclomaticComplexity",
            "duplicatedLogicScore",
            "aiEntropyScore",
            "totalDebtScore",
            "sprawlScore",
            "sprawlLevel",
            "details",
        }
        assert set(data["metrics"]) == {
            "normalizedLOC",
            "complexityScore",
            "duplicationRatio",
            "responsibilityScore",
            "couplingScore",
            "aiEntropyFactor",
        }

    def test_values(self):
        data = _score().to_dict()
        assert data["metrics"]["duplicationRatio"] == 0.13
        assert data["duplicatedLogicScore"] == 13
        assert data["aiEntropyScore"] == 6
        assert data["sprawlScore"] == 0.31
        assert data["totalDebtScore"] == 0.33
        assert data["sprawlLevel"] == "clean"
        assert data["details"] == {
            "hasLongFunctions": False,
            "hasDeepNesting": True,
            "hasRepetitivePatterns": True,
            "hasHighCoupling": False,
            "hasTooManyResponsibilities": False,
        }


class TestRunResultDict:
    def test_summary_and_files(self):
        result = RunResult(RunSummary(3, 1, 2.0, 0.32705), files=[_score()])
        data = result.to_dict()
        assert data["summary"] == {
            "totalFiles": 3,
            "analyzedFiles": 1,
            "averageComplexity": 2.0,
            "averageDebtScore": 0.32705,
        }
        assert len(data["files"]) == 1
        assert "locBreakdown" not in data

    def test_loc_breakdown(self):
        result = RunResult(RunSummary(0, 0, 0.0, 0.0), loc_breakdown={"SUM": {"code": 1}})
        assert result.to_dict()["locBreakdown"] == {"SUM": {"code": 1}}

    def test_level_is_string_enum(self):
        assert SprawlLevel("severe") is SprawlLevel.SEVERE
        assert SprawlLevel.MILD == "mild"
        with pytest.raises(ValueError):
            SprawlLevel("extreme")
