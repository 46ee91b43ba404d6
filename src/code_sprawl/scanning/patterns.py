"""Pattern library: the detectors shared by structural and textual analysis.

Lexical detectors are ``NamedPattern`` rows (name, regex, weight) grouped in
tables; structural detectors are tree-sitter node-type tables. Both are plain
data bundled in a ``PatternLibrary`` so another C-family dialect can be
supported by building a different library, without touching the metric or
scoring code.

The regexes target JavaScript/TypeScript syntax.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Pattern


@dataclass(frozen=True)
class NamedPattern:
    """A named regular expression with the weight of one match."""

    name: str
    regex: str
    weight: float = 1.0
    flags: int = 0
    compiled: Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "compiled", re.compile(self.regex, self.flags))

    def count(self, text: str) -> int:
        return sum(1 for _ in self.compiled.finditer(text))

    def score(self, text: str) -> float:
        return self.count(text) * self.weight


def count_all(patterns: tuple[NamedPattern, ...], text: str) -> int:
    """Total number of matches across a pattern table."""
    return sum(p.count(text) for p in patterns)


def score_all(patterns: tuple[NamedPattern, ...], text: str) -> float:
    """Weighted total across a pattern table."""
    return sum(p.score(text) for p in patterns)


# ── Textual detectors ──────────────────────────────────────────────

COMPLEXITY_PATTERNS = (
    NamedPattern("if", r"\bif\b"),
    NamedPattern("else_if", r"\belse\s+if\b"),
    NamedPattern("for", r"\bfor\b"),
    NamedPattern("while", r"\bwhile\b"),
    NamedPattern("case", r"\bcase\b"),
    NamedPattern("catch", r"\bcatch\b"),
    # `?` not followed by `.`, `?` or `:` (optional chaining, nullish, optional member)
    NamedPattern("ternary", r"\?(?![.?:])[^?\n:]*:"),
    NamedPattern("logical_and", r"&&"),
    NamedPattern("logical_or", r"\|\|"),
)

RESPONSIBILITY_PATTERNS = (
    NamedPattern(
        "function_definition",
        r"\bfunction\s+[\w$]+"
        r"|\b(?:const|let|var)\s+[\w$]+\s*=\s*(?:async\s*)?(?:\([^)]*\)|[\w$]+)\s*=>",
        weight=0.5,
    ),
    NamedPattern("class_definition", r"\bclass\s+[A-Za-z_$][\w$]*", weight=1.0),
    # No quotes or parens inside the parameter list, so a line-leading call
    # such as `describe('x', function () {` is not taken for a method.
    NamedPattern(
        "method_definition",
        r"^[ \t]*(?:(?:public|private|protected|static|async|get|set)\s+)*"
        r"(?!(?:if|for|while|switch|catch|function|return|else|do|with)\b)"
        r"[A-Za-z_$][\w$]*\s*\([^()'\"`\n]*\)\s*(?::\s*[^{\n]+)?\{",
        weight=0.3,
        flags=re.MULTILINE,
    ),
    NamedPattern("http_verb_call", r"\.(?:get|post|put|delete|patch)\s*\(", 0.3, re.IGNORECASE),
    NamedPattern(
        "state_mutation_call",
        r"\.set\s*\(|setState|\.update\s*\(|\.push\s*\(|\.splice\s*\(",
        0.2,
        re.IGNORECASE,
    ),
)

AWAIT_CALL_PATTERN = NamedPattern("await_call", r"\bawait\s+[\w$.]+\s*\(")

COUPLING_PATTERNS = (
    NamedPattern("import_from", r"^[ \t]*import\b[^;'\"]*?\bfrom\s*['\"]", flags=re.MULTILINE),
    NamedPattern("import_side_effect", r"^[ \t]*import\s*['\"]", flags=re.MULTILINE),
    NamedPattern("require_call", r"\brequire\s*\(\s*['\"]"),
)

IMPORT_CLAUSE_PATTERN = NamedPattern(
    "import_clause", r"^[ \t]*import\s+(?:type\s+)?([^;'\"]*?)\s*\bfrom\s*['\"]", flags=re.MULTILINE
)

ENTROPY_PATTERNS = (
    NamedPattern("unfinished_marker", r"TODO:?\s*(?:implement|add|fix|handle)", flags=re.IGNORECASE),
    NamedPattern("ellipsis_comment", r"//\s*\.\.\."),
    NamedPattern("debug_logging", r"console\.log\(['\"](?:debug|test|here)", flags=re.IGNORECASE),
    NamedPattern("any_escape_hatch", r"\bany\b"),
    NamedPattern("doc_comment_block", r"/\*\*[\s\S]*?\*/"),
    NamedPattern("not_implemented_throw", r"throw new Error\(['\"]Not implemented", flags=re.IGNORECASE),
    NamedPattern("lint_suppression", r"//\s*eslint-disable", flags=re.IGNORECASE),
)

SIGNATURE_PATTERNS = (
    NamedPattern("function_signature", r"function\s+\w+\s*\([^)]*\)"),
    NamedPattern("arrow_signature", r"const\s+\w+\s*=\s*\([^)]*\)\s*=>"),
)

PARAMETER_LIST_PATTERN = re.compile(r"\([^)]*\)")

# Lines that are expected to repeat and never count as duplication.
DUPLICATION_EXEMPT_PREFIXES = ("//", "/*", "*", "import")


# ── Structural detectors (tree-sitter node types) ──────────────────

DECISION_NODE_TYPES = frozenset(
    {
        "if_statement",
        "for_statement",
        "for_in_statement",  # covers for-of as well
        "while_statement",
        "do_statement",
        "switch_case",  # `default:` is a separate switch_default node
        "ternary_expression",
    }
)

LOGICAL_OPERATORS = frozenset({"&&", "||"})

RESPONSIBILITY_NODE_WEIGHTS = {
    "function_declaration": 0.5,
    "function_expression": 0.5,
    "function": 0.5,  # older grammars name function expressions this way
    "arrow_function": 0.5,
    "generator_function_declaration": 0.5,
    "generator_function": 0.5,
    "class_declaration": 1.0,
    "abstract_class_declaration": 1.0,
    "method_definition": 0.3,
}

MEMBER_ASSIGNMENT_NODE_TYPES = frozenset({"assignment_expression", "augmented_assignment_expression"})
MEMBER_ASSIGNMENT_WEIGHT = 0.2

IMPORT_NODE_TYPES = frozenset({"import_statement"})
MODULE_LOAD_FUNCTIONS = frozenset({"require"})
IMPORTED_BINDING_NODE_TYPES = frozenset({"import_specifier", "namespace_import"})


@dataclass(frozen=True)
class PatternLibrary:
    """Everything the calculators match against, as one swappable value."""

    complexity: tuple[NamedPattern, ...] = COMPLEXITY_PATTERNS
    responsibility: tuple[NamedPattern, ...] = RESPONSIBILITY_PATTERNS
    coupling: tuple[NamedPattern, ...] = COUPLING_PATTERNS
    entropy: tuple[NamedPattern, ...] = ENTROPY_PATTERNS
    signatures: tuple[NamedPattern, ...] = SIGNATURE_PATTERNS
    await_call: NamedPattern = AWAIT_CALL_PATTERN
    import_clause: NamedPattern = IMPORT_CLAUSE_PATTERN
    duplication_exempt_prefixes: tuple[str, ...] = DUPLICATION_EXEMPT_PREFIXES

    decision_nodes: frozenset[str] = DECISION_NODE_TYPES
    logical_operators: frozenset[str] = LOGICAL_OPERATORS
    responsibility_nodes: dict[str, float] = field(
        default_factory=lambda: dict(RESPONSIBILITY_NODE_WEIGHTS)
    )
    member_assignment_nodes: frozenset[str] = MEMBER_ASSIGNMENT_NODE_TYPES
    member_assignment_weight: float = MEMBER_ASSIGNMENT_WEIGHT
    import_nodes: frozenset[str] = IMPORT_NODE_TYPES
    module_load_functions: frozenset[str] = MODULE_LOAD_FUNCTIONS
    imported_binding_nodes: frozenset[str] = IMPORTED_BINDING_NODE_TYPES


DEFAULT_PATTERNS = PatternLibrary()
