"""Run coordinator: one pass from enumeration to summary.

One run is a single pass over the candidate files of a workspace. Per-file
analysis is independent, so it may run on a thread pool; results are still
reported in enumeration order. Per-file failures are logged and excluded.
Only a failure to enumerate the root aborts the run. The workspace is
released exactly once, whatever happens.
"""

from __future__ import annotations

import math
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from ..config import AnalysisConfig
from ..enrichment import count_lines
from ..logging_config import get_logger
from ..models import FileScore, RunResult, RunSummary
from ..scanning.enumerator import FileEnumerator
from ..workspace import Workspace
from .engine import FileAnalyzer

logger = get_logger(__name__)


@dataclass(frozen=True)
class FileOutcome:
    """What happened to one candidate file."""

    path: str
    score: Optional[FileScore] = None
    error: Optional[Exception] = None

    @property
    def skipped(self) -> bool:
        return self.score is None and self.error is None


class SummaryAccumulator:
    """Thread-safe collector of per-file outcomes.

    Scores are kept at full precision and the means are taken with
    ``math.fsum`` so they do not depend on the order files complete in.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._scores: list[FileScore] = []
        self.skipped = 0
        self.failed = 0

    def add(self, outcome: FileOutcome) -> None:
        with self._lock:
            if outcome.error is not None:
                self.failed += 1
            elif outcome.score is None:
                self.skipped += 1
            else:
                self._scores.append(outcome.score)

    @property
    def scores(self) -> list[FileScore]:
        with self._lock:
            return list(self._scores)

    def summary(self, total_files: int) -> RunSummary:
        with self._lock:
            analyzed = len(self._scores)
            if analyzed == 0:
                return RunSummary(total_files, 0, 0.0, 0.0)
            complexity = math.fsum(s.metrics.cyclomatic_complexity for s in self._scores)
            debt = math.fsum(s.adjusted_score for s in self._scores)
            return RunSummary(
                total_files=total_files,
                analyzed_files=analyzed,
                average_complexity=complexity / analyzed,
                average_debt_score=debt / analyzed,
            )


class RunCoordinator:
    """Drives one analysis run over a workspace."""

    def __init__(self, config: Optional[AnalysisConfig] = None, analyzer: Optional[FileAnalyzer] = None):
        self.config = config or AnalysisConfig()
        self.analyzer = analyzer or FileAnalyzer(self.config.scoring)

    def run(self, target: Union[Workspace, str, Path]) -> RunResult:
        """Analyze every candidate file under the workspace root.

        Raises:
            InvalidPathError: If the root cannot be enumerated
            SecurityError: If the root is a protected system directory
        """
        workspace = target if isinstance(target, Workspace) else Workspace.existing(target)
        try:
            return self._run(workspace.root)
        finally:
            workspace.cleanup()

    def _run(self, root: Path) -> RunResult:
        enumerator = FileEnumerator.from_config(root, self.config)
        candidates = list(enumerator)
        logger.info(f"Found {len(candidates)} candidate files under {root}")

        loc_breakdown = None
        if self.config.enable_line_counter:
            loc_breakdown = count_lines(
                enumerator.root,
                exclude_dirs=self.config.exclude_dirs,
                timeout=self.config.line_counter_timeout,
            )

        max_bytes = self.config.max_file_size_bytes

        def analyze_one(path: Path) -> FileOutcome:
            relative = enumerator.relative(path)
            try:
                return FileOutcome(relative, score=self.analyzer.analyze_path(path, relative, max_bytes))
            except Exception as e:
                logger.warning(f"Failed to analyze {relative}: {e}")
                return FileOutcome(relative, error=e)

        accumulator = SummaryAccumulator()
        workers = min(self.config.workers, len(candidates)) if candidates else 1
        if workers > 1:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                for outcome in executor.map(analyze_one, candidates):
                    accumulator.add(outcome)
        else:
            for path in candidates:
                accumulator.add(analyze_one(path))

        summary = accumulator.summary(len(candidates))
        logger.info(
            f"Analyzed {summary.analyzed_files}/{summary.total_files} files "
            f"({accumulator.skipped} skipped, {accumulator.failed} failed), "
            f"average debt {summary.average_debt_score:.2f}"
        )

        return RunResult(
            summary=summary,
            files=accumulator.scores,
            loc_breakdown=loc_breakdown,
            skipped_files=accumulator.skipped,
            failed_files=accumulator.failed,
        )
