"""Per-file analysis: read, pick a mode, measure, score."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..config import DEFAULT_SPRAWL_CONFIG, FlagThresholds, SprawlConfig
from ..file_ops import safe_read_file
from ..logging_config import get_logger
from ..metrics import compute_sub_metrics, entropy_factor
from ..models import FileDetails, FileScore, SourceFile, SubMetrics
from ..scanning.patterns import DEFAULT_PATTERNS, PatternLibrary
from ..scanning.treesitter_parser import TreeSitterParser
from . import scoring

logger = get_logger(__name__)


def leading_whitespace(line: str) -> int:
    return len(line) - len(line.lstrip())


def detail_flags(source: SourceFile, metrics: SubMetrics, flags: FlagThresholds) -> FileDetails:
    """Secondary signals reported next to the score."""
    return FileDetails(
        has_long_functions=source.line_count > flags.long_file_lines,
        has_deep_nesting=any(
            leading_whitespace(line) > flags.deep_nesting_columns for line in source.lines
        ),
        has_repetitive_patterns=metrics.duplication > flags.repetitive_ratio,
        has_high_coupling=metrics.coupling > flags.high_coupling,
        has_too_many_responsibilities=metrics.responsibility > flags.many_responsibilities,
    )


class FileAnalyzer:
    """Scores single files. Holds no per-file state, so one instance can
    serve many worker threads.
    """

    def __init__(
        self,
        config: SprawlConfig = DEFAULT_SPRAWL_CONFIG,
        patterns: PatternLibrary = DEFAULT_PATTERNS,
        parser: Optional[TreeSitterParser] = None,
    ):
        self.config = config
        self.patterns = patterns
        self.parser = parser or TreeSitterParser()

    def analyze_path(
        self, filepath: Path, relative_path: str, max_bytes: Optional[int] = None
    ) -> Optional[FileScore]:
        """Read and score a file on disk.

        Raises:
            FileAccessError: If the file cannot be read
        """
        content = safe_read_file(filepath, max_bytes=max_bytes)
        return self.analyze(SourceFile(path=relative_path, content=content))

    def analyze(self, source: SourceFile) -> Optional[FileScore]:
        """Score one file, or return None when it is too short to measure."""
        cfg = self.config
        if source.line_count < cfg.min_lines:
            logger.debug(f"Skipped (fewer than {cfg.min_lines} lines): {source.path}")
            return None

        mode = self.parser.select_mode(source)
        metrics = compute_sub_metrics(mode, cfg, self.patterns)
        entropy = entropy_factor(source, cfg.entropy, self.patterns)

        sprawl = scoring.combine(metrics, cfg.weights)
        adjusted = scoring.adjust(sprawl, entropy)

        return FileScore(
            path=source.path,
            loc=source.line_count,
            mode=mode.name,
            metrics=metrics,
            entropy_factor=entropy,
            sprawl_score=sprawl,
            adjusted_score=adjusted,
            level=scoring.classify(adjusted, cfg.thresholds),
            details=detail_flags(source, metrics, cfg.flags),
        )
