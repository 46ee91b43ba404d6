"""Tests for per-file analysis."""

import pytest

from code_sprawl.analysis import FileAnalyzer
from code_sprawl.config import SprawlConfig
from code_sprawl.exceptions import FileAccessError
from code_sprawl.models import SourceFile, SprawlLevel


def _two_hundred_line_file() -> str:
    lines = [f'import dep{i} from "dep{i}";' for i in range(8)]
    lines.append("let total = 0;")
    for i in range(15):
        keyword = "if" if i % 2 == 0 else "while"
        lines.append(f"{keyword} (total > {i}) {{ total -= {i}; }}")
    for k in range(5):
        lines.append(f"total += compute({k});")
        lines.append(f"total += compute({k});")
    lines.extend(f"const value{i} = compute({i});" for i in range(200 - len(lines)))
    return "\n".join(lines)


class TestSkipping:
    def test_fewer_than_five_lines(self, analyzer):
        assert analyzer.analyze(SourceFile("a.js", "a;\nb;\nc;\nd;")) is None

    def test_five_lines_scored(self, analyzer):
        assert analyzer.analyze(SourceFile("a.js", "a;\nb;\nc;\nd;\ne;")) is not None

    def test_min_lines_configurable(self):
        analyzer = FileAnalyzer(SprawlConfig(min_lines=1))
        assert analyzer.analyze(SourceFile("a.js", "a;")) is not None


class TestEndToEnd:
    """Known files produce known scores."""

    def test_small_clean_file(self, analyzer, simple_function):
        score = analyzer.analyze(SourceFile("check.js", simple_function))
        assert score.mode == "structural"
        assert score.loc == 10
        assert score.entropy_factor == 0.0
        assert score.sprawl_score == pytest.approx(0.25 * 10 / 30 + 0.30 * 0.2 + 0.15 * 0.5)
        assert score.to_dict()["totalDebtScore"] == 0.22
        assert score.level is SprawlLevel.CLEAN

    def test_lone_surrogate_in_content(self, analyzer):
        content = "const a = '\ud800';\n" + "".join(f"const v{i} = {i};\n" for i in range(5))
        score = analyzer.analyze(SourceFile("a.js", content))
        assert score is not None
        assert score.mode == "structural"

    def test_large_tangled_file(self, analyzer):
        score = analyzer.analyze(SourceFile("big.js", _two_hundred_line_file()))
        m = score.metrics
        assert score.loc == 200
        assert m.normalized_size == pytest.approx(200 / 30)
        assert m.complexity == pytest.approx(1.6)
        assert m.duplication == pytest.approx(5 / 192)
        assert m.coupling == pytest.approx(1.6)
        assert score.sprawl_score > 1.6
        assert score.level is SprawlLevel.SEVERE

    def test_adjusted_includes_entropy(self, analyzer):
        lines = ["let a: any;"] + [f"const v{i} = {i};" for i in range(9)]
        score = analyzer.analyze(SourceFile("a.ts", "\n".join(lines)))
        assert score.entropy_factor == pytest.approx(0.05)
        assert score.adjusted_score == pytest.approx(score.sprawl_score * 1.05)

    def test_broken_file_scored_textually(self, analyzer, simple_function):
        score = analyzer.analyze(SourceFile("broken.js", simple_function + "\n}}"))
        assert score.mode == "textual"
        assert score.metrics.cyclomatic_complexity == 2


class TestPurity:
    def test_idempotent(self, analyzer, simple_function):
        source = SourceFile("check.js", simple_function)
        assert analyzer.analyze(source) == analyzer.analyze(source)

    def test_structural_textual_parity(self, analyzer):
        code = "\n".join(
            [
                'import api from "./api";',
                "function run(a, b) {",
                "  if (a && b) {",
                "    return api(a);",
                "  }",
                "  return null;",
                "}",
            ]
        )
        structural = analyzer.analyze(SourceFile("run.js", code))
        textual = analyzer.analyze(SourceFile("run.txt", code))
        assert (structural.mode, textual.mode) == ("structural", "textual")
        assert structural.metrics.cyclomatic_complexity == textual.metrics.cyclomatic_complexity
        assert structural.metrics.dependency_count == textual.metrics.dependency_count
        assert structural.adjusted_score == pytest.approx(textual.adjusted_score)


class TestDetails:
    """Secondary flags."""

    def test_simple_file_has_no_flags(self, analyzer, simple_function):
        details = analyzer.analyze(SourceFile("check.js", simple_function)).details
        assert not any(details.to_dict().values())

    def test_deep_nesting(self, analyzer):
        shallow = "\n".join(["a;"] * 4 + [" " * 16 + "b;"])
        deep = "\n".join(["a;"] * 4 + [" " * 17 + "b;"])
        assert not analyzer.analyze(SourceFile("a.js", shallow)).details.has_deep_nesting
        assert analyzer.analyze(SourceFile("a.js", deep)).details.has_deep_nesting

    def test_long_file(self, analyzer):
        code = "\n".join(f"const value{i} = {i};" for i in range(51))
        assert analyzer.analyze(SourceFile("a.js", code)).details.has_long_functions


class TestAnalyzePath:
    def test_reads_file(self, analyzer, write_file):
        path = write_file("src/check.js")
        score = analyzer.analyze_path(path, "src/check.js")
        assert score.path == "src/check.js"

    def test_missing_file(self, analyzer, tmp_path):
        with pytest.raises(FileAccessError):
            analyzer.analyze_path(tmp_path / "gone.js", "gone.js")

    def test_too_large(self, analyzer, write_file):
        path = write_file("check.js")
        with pytest.raises(FileAccessError):
            analyzer.analyze_path(path, "check.js", max_bytes=10)
