"""File enumerator: the candidate file sequence for one run.

Iteration is lazy, finite and restartable: every ``iter()`` performs a fresh
walk in sorted order, so two walks over an unchanged tree yield the same
sequence.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Optional

from ..config import AnalysisConfig
from ..exceptions import InvalidPathError
from ..file_ops import should_skip_file
from ..logging_config import get_logger
from ..security import PathValidator, validate_root_directory

logger = get_logger(__name__)


class FileEnumerator:
    """Walks a materialized source tree and yields candidate files."""

    def __init__(
        self,
        root: Path,
        extensions: Iterable[str],
        exclude_dirs: Iterable[str] = (),
        exclude_patterns: Iterable[str] = (),
        follow_symlinks: bool = False,
        max_file_size_bytes: Optional[int] = None,
        max_files: Optional[int] = None,
    ):
        """
        Initialize enumerator.

        Args:
            root: Directory to walk
            extensions: File suffixes to include (e.g., ['.js', '.ts'])
            exclude_dirs: Directory names never descended into
            exclude_patterns: File globs to skip (e.g., '*.min.js')
            follow_symlinks: Yield symlinked files that resolve inside root
            max_file_size_bytes: Larger files are not yielded
            max_files: Stop after this many candidates

        Raises:
            InvalidPathError: If root is missing or unreadable
            SecurityError: If root is a system directory
        """
        self.root = validate_root_directory(Path(root))
        self.extensions = {ext.lower() for ext in extensions}
        self.exclude_dirs = set(exclude_dirs)
        self.exclude_patterns = tuple(exclude_patterns)
        self.follow_symlinks = follow_symlinks
        self.max_file_size_bytes = max_file_size_bytes
        self.max_files = max_files
        self._validator = PathValidator(self.root)

    @classmethod
    def from_config(cls, root: Path, config: AnalysisConfig) -> "FileEnumerator":
        return cls(
            root,
            extensions=config.extensions,
            exclude_dirs=config.exclude_dirs,
            exclude_patterns=config.exclude_patterns,
            follow_symlinks=config.follow_symlinks,
            max_file_size_bytes=config.max_file_size_bytes,
            max_files=config.max_files,
        )

    def __iter__(self) -> Iterator[Path]:
        yielded = 0
        for dirpath, dirnames, filenames in os.walk(
            self.root, onerror=self._on_walk_error, followlinks=False
        ):
            current = Path(dirpath)
            dirnames[:] = sorted(
                d
                for d in dirnames
                if d not in self.exclude_dirs and not (current / d).is_symlink()
            )

            for name in sorted(filenames):
                path = current / name
                if not self._is_candidate(path):
                    continue
                if self.max_files is not None and yielded >= self.max_files:
                    logger.warning(f"Reached max files limit ({self.max_files})")
                    return
                yielded += 1
                yield path

    def relative(self, path: Path) -> str:
        """POSIX-style path relative to the root, used as the file identity."""
        return path.relative_to(self.root).as_posix()

    def _is_candidate(self, path: Path) -> bool:
        if path.suffix.lower() not in self.extensions:
            return False

        if should_skip_file(path.relative_to(self.root), self.exclude_patterns):
            logger.debug(f"Skipped (pattern): {path}")
            return False

        if path.is_symlink():
            if not self.follow_symlinks:
                logger.debug(f"Skipped (symlink): {path}")
                return False
            if not self._validator.is_safe_path(path):
                logger.warning(f"Skipped symlink resolving outside root: {path}")
                return False

        if self.max_file_size_bytes is not None:
            try:
                size = path.stat().st_size
            except OSError:
                # Unreadable files stay candidates; the read reports them.
                return True
            if size > self.max_file_size_bytes:
                logger.info(f"Skipped (size): {path} ({size} bytes)")
                return False

        return True

    def _on_walk_error(self, error: OSError) -> None:
        if error.filename is not None and Path(error.filename) == self.root:
            raise InvalidPathError(self.root, f"Cannot list directory: {error.strerror}")
        logger.warning(f"Cannot list directory {error.filename}: {error.strerror}")
