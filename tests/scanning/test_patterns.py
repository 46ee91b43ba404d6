"""Tests for the pattern library."""

import re

from code_sprawl.scanning.patterns import (
    COMPLEXITY_PATTERNS,
    COUPLING_PATTERNS,
    DEFAULT_PATTERNS,
    ENTROPY_PATTERNS,
    NamedPattern,
    PatternLibrary,
    count_all,
    score_all,
)


def _pattern(table, name):
    return next(p for p in table if p.name == name)


class TestNamedPattern:
    """NamedPattern compiles once and counts non-overlapping matches."""

    def test_count(self):
        p = NamedPattern("word", r"\bfoo\b")
        assert p.count("foo bar foo food") == 2

    def test_score_uses_weight(self):
        p = NamedPattern("word", r"x", weight=0.3)
        assert abs(p.score("xxx") - 0.9) < 1e-9

    def test_flags_are_applied(self):
        p = NamedPattern("ci", r"todo", flags=re.IGNORECASE)
        assert p.count("TODO todo ToDo") == 3

    def test_table_helpers(self):
        table = (NamedPattern("a", "a", 1.0), NamedPattern("b", "b", 0.5))
        assert count_all(table, "aabbb") == 5
        assert score_all(table, "aabbb") == 3.5


class TestComplexityPatterns:
    """Lexical decision-point detectors."""

    def test_ternary_matches_conditional(self):
        ternary = _pattern(COMPLEXITY_PATTERNS, "ternary")
        assert ternary.count("const x = ok ? 1 : 2;") == 1

    def test_ternary_ignores_optional_chaining_and_nullish(self):
        ternary = _pattern(COMPLEXITY_PATTERNS, "ternary")
        assert ternary.count("const x = a?.b ?? c;") == 0

    def test_keywords_need_word_boundaries(self):
        text = "const format = forEach(shift); // iffy"
        assert _pattern(COMPLEXITY_PATTERNS, "for").count(text) == 0
        assert _pattern(COMPLEXITY_PATTERNS, "if").count(text) == 0

    def test_logical_operators(self):
        assert count_all(COMPLEXITY_PATTERNS, "if (a && b || c) {}") == 3


class TestCouplingPatterns:
    """Import and require detectors."""

    def test_import_forms(self):
        text = "\n".join(
            [
                'import a from "a";',
                "import {",
                "  b,",
                "  c,",
                '} from "bc";',
                'import "./side-effect.css";',
                'const d = require("d");',
            ]
        )
        assert count_all(COUPLING_PATTERNS, text) == 4

    def test_dynamic_import_is_not_a_declaration(self):
        assert count_all(COUPLING_PATTERNS, 'const m = await import("m");') == 0


class TestEntropyPatterns:
    """Placeholder and boilerplate detectors."""

    def test_each_marker(self):
        text = "\n".join(
            [
                "// TODO: implement this",
                "// ...",
                "console.log('debug value');",
                "let x: any;",
                "/** docs */",
                "throw new Error('Not implemented');",
                "// eslint-disable-next-line",
            ]
        )
        assert count_all(ENTROPY_PATTERNS, text) == 7

    def test_plain_code_has_no_markers(self):
        assert count_all(ENTROPY_PATTERNS, "const company = 1;\nreturn company;") == 0


class TestPatternLibrary:
    """PatternLibrary bundles the tables as one value."""

    def test_default_library_tables(self):
        assert DEFAULT_PATTERNS.complexity == COMPLEXITY_PATTERNS
        assert "if_statement" in DEFAULT_PATTERNS.decision_nodes
        assert DEFAULT_PATTERNS.responsibility_nodes["class_declaration"] == 1.0

    def test_library_can_be_replaced(self):
        library = PatternLibrary(complexity=(NamedPattern("unless", r"\bunless\b"),))
        assert count_all(library.complexity, "unless x; if y") == 1
