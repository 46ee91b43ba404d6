"""The five sub-metric calculators.

Each calculator takes an ``AnalysisMode`` and keeps its structural and textual
implementations side by side, so the two can be compared directly. Raw
counts are returned separately from their normalized scores because the raw
cyclomatic complexity is part of the report.

Structural and textual counts agree on which constructs count and on the base
value, but may differ slightly on edge syntax (a keyword inside a string
literal, for example, only counts textually).
"""

from __future__ import annotations

import re
from collections import Counter
from typing import Any

from ..config import SprawlConfig
from ..models import SourceFile, SubMetrics
from ..scanning.modes import AnalysisMode, StructuralMode, iter_named_nodes
from ..scanning.patterns import DEFAULT_PATTERNS, PatternLibrary, count_all, score_all

_WHITESPACE_RUN = re.compile(r"\s+")
_BRACED_NAMES = re.compile(r"\{([^}]*)\}")


# ── Size ───────────────────────────────────────────────────────────


def size_score(source: SourceFile, config: SprawlConfig) -> float:
    """Line count relative to an ideal file size. Unbounded above."""
    return source.line_count / config.ideal_loc


# ── Complexity ─────────────────────────────────────────────────────


def cyclomatic_complexity(mode: AnalysisMode, patterns: PatternLibrary = DEFAULT_PATTERNS) -> int:
    """Decision points plus a base of 1."""
    if isinstance(mode, StructuralMode):
        decisions = 0
        for node in iter_named_nodes(mode.root):
            if node.type in patterns.decision_nodes:
                decisions += 1
            elif node.type == "binary_expression" and _operator(node) in patterns.logical_operators:
                decisions += 1
        return 1 + decisions

    return 1 + count_all(patterns.complexity, mode.text)


def _operator(node: Any) -> str:
    operator = node.child_by_field_name("operator")
    return operator.type if operator is not None else ""


# ── Duplication ────────────────────────────────────────────────────


def normalize_line(line: str) -> str:
    return _WHITESPACE_RUN.sub(" ", line.strip())


def duplication_ratio(
    source: SourceFile,
    config: SprawlConfig,
    patterns: PatternLibrary = DEFAULT_PATTERNS,
) -> float:
    """Share of eligible lines that repeat an earlier identical line.

    Comment and import lines, and lines shorter than
    ``config.min_duplicate_line_length``, are not eligible.
    """
    eligible = []
    for line in source.lines:
        normalized = normalize_line(line)
        if len(normalized) < config.min_duplicate_line_length:
            continue
        if normalized.startswith(patterns.duplication_exempt_prefixes):
            continue
        eligible.append(normalized)

    if not eligible:
        return 0.0

    duplicated = sum(n - 1 for n in Counter(eligible).values() if n > 1)
    return duplicated / len(eligible)


# ── Responsibility ─────────────────────────────────────────────────


def responsibility_count(
    mode: AnalysisMode,
    config: SprawlConfig,
    patterns: PatternLibrary = DEFAULT_PATTERNS,
) -> float:
    """Weighted count of responsibility-bearing constructs (unclamped)."""
    if isinstance(mode, StructuralMode):
        total = 0.0
        for node in iter_named_nodes(mode.root):
            weight = patterns.responsibility_nodes.get(node.type)
            if weight is not None:
                total += weight
            elif node.type in patterns.member_assignment_nodes and _assigns_this_member(node):
                total += patterns.member_assignment_weight
            elif config.await_call_weight and _is_awaited_call(node):
                total += config.await_call_weight
        return total

    total = score_all(patterns.responsibility, mode.text)
    if config.await_call_weight:
        total += patterns.await_call.count(mode.text) * config.await_call_weight
    return total


def _assigns_this_member(node: Any) -> bool:
    left = node.child_by_field_name("left")
    if left is None or left.type != "member_expression":
        return False
    target = left.child_by_field_name("object")
    return target is not None and target.type == "this"


def _is_awaited_call(node: Any) -> bool:
    if node.type != "await_expression":
        return False
    children = node.named_children
    return bool(children) and children[0].type == "call_expression"


def responsibility_score(raw: float, config: SprawlConfig) -> float:
    return max(1.0, raw) / config.ideal_responsibilities


# ── Coupling ───────────────────────────────────────────────────────


def dependency_count(
    mode: AnalysisMode,
    config: SprawlConfig,
    patterns: PatternLibrary = DEFAULT_PATTERNS,
) -> float:
    """Import/require declarations, plus imported names when configured."""
    if isinstance(mode, StructuralMode):
        declarations = 0
        bindings = 0
        for node in iter_named_nodes(mode.root):
            if node.type in patterns.import_nodes:
                declarations += 1
            elif node.type == "call_expression" and _is_module_load(node, patterns):
                declarations += 1
            elif node.type in patterns.imported_binding_nodes:
                bindings += 1
            elif node.type == "identifier" and node.parent is not None:
                if node.parent.type == "import_clause":
                    bindings += 1
        return declarations + bindings * config.imported_symbol_weight

    declarations = count_all(patterns.coupling, mode.text)
    if not config.imported_symbol_weight:
        return float(declarations)
    bindings = sum(
        _count_bindings(m.group(1)) for m in patterns.import_clause.compiled.finditer(mode.text)
    )
    return declarations + bindings * config.imported_symbol_weight


def _is_module_load(node: Any, patterns: PatternLibrary) -> bool:
    function = node.child_by_field_name("function")
    if function is None or function.type != "identifier" or function.text is None:
        return False
    return function.text.decode("utf-8", errors="replace") in patterns.module_load_functions


def _count_bindings(clause: str) -> int:
    """Count names bound by an import clause such as ``a, { b, c as d }``."""
    count = 0
    braces = _BRACED_NAMES.search(clause)
    if braces:
        count += sum(1 for part in braces.group(1).split(",") if part.strip())
        clause = clause[: braces.start()] + clause[braces.end() :]
    count += sum(1 for part in clause.split(",") if part.strip())
    return count


# ── All five ───────────────────────────────────────────────────────


def compute_sub_metrics(
    mode: AnalysisMode,
    config: SprawlConfig,
    patterns: PatternLibrary = DEFAULT_PATTERNS,
) -> SubMetrics:
    """Run every calculator against one mode value."""
    source = mode.source
    complexity = cyclomatic_complexity(mode, patterns)
    responsibilities = responsibility_count(mode, config, patterns)
    dependencies = dependency_count(mode, config, patterns)

    return SubMetrics(
        normalized_size=size_score(source, config),
        complexity=complexity / config.cc_max,
        duplication=duplication_ratio(source, config, patterns),
        responsibility=responsibility_score(responsibilities, config),
        coupling=dependencies / config.max_allowed_dependencies,
        cyclomatic_complexity=float(complexity),
        responsibility_count=responsibilities,
        dependency_count=float(dependencies),
    )
