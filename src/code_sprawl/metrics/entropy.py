"""Entropy penalty: a lexical estimate of low-effort or generated code.

Independent of the five sub-metrics and identical in both analysis modes.
Two signals feed it:

* placeholder patterns (unfinished-work markers, debug logging, escape-hatch
  types, doc-comment blocks, lint suppressions...) per line of code, and
* signature concentration: when most function signatures share the same
  parameter count, the file looks templated.

    factor = min(cap, patterns / lines * pattern_weight
                      + concentration * signature_weight)
"""

from collections import Counter

from ..config import EntropySettings
from ..models import SourceFile
from ..scanning.patterns import DEFAULT_PATTERNS, PARAMETER_LIST_PATTERN, PatternLibrary, count_all


def parameter_count(signature: str) -> int:
    """Parameters in a signature: commas, plus one for a non-empty list."""
    match = PARAMETER_LIST_PATTERN.search(signature)
    params = match.group(0) if match else ""
    return params.count(",") + (1 if len(params) > 2 else 0)


def signature_concentration(
    text: str,
    min_signatures: int,
    patterns: PatternLibrary = DEFAULT_PATTERNS,
) -> float:
    """Fraction of signatures in the most common parameter-count bucket.

    Zero unless there are more than ``min_signatures`` signatures.
    """
    signatures = [m.group(0) for p in patterns.signatures for m in p.compiled.finditer(text)]
    if len(signatures) <= min_signatures:
        return 0.0

    buckets = Counter(parameter_count(sig) for sig in signatures)
    return max(buckets.values()) / len(signatures)


def entropy_factor(
    source: SourceFile,
    settings: EntropySettings,
    patterns: PatternLibrary = DEFAULT_PATTERNS,
) -> float:
    """Noise penalty in [0, settings.cap]."""
    line_count = source.line_count
    if line_count == 0:
        return 0.0

    text = source.content
    pattern_ratio = count_all(patterns.entropy, text) / line_count
    concentration = signature_concentration(text, settings.min_signatures, patterns)

    factor = pattern_ratio * settings.pattern_weight + concentration * settings.signature_weight
    return min(settings.cap, factor)
