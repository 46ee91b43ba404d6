"""
File operations for Code Sprawl.

Size-limited reads that report failures as FileAccessError, and glob-based
exclusion checks.
"""

from pathlib import Path, PurePath
from typing import Iterable, Optional

from .exceptions import FileAccessError


def safe_read_file(
    filepath: Path,
    max_bytes: Optional[int] = None,
    encoding: str = "utf-8",
    errors: str = "replace",
) -> str:
    """
    Read a source file, converting every failure into FileAccessError.

    Args:
        filepath: File to read
        max_bytes: Reject files larger than this (None = no limit)
        encoding: Text encoding
        errors: How to handle encoding errors

    Returns:
        File contents as string

    Raises:
        FileAccessError: If file cannot be read or is too large
    """
    try:
        if max_bytes is not None:
            size = filepath.stat().st_size
            if size > max_bytes:
                raise FileAccessError(filepath, f"File size {size} exceeds limit {max_bytes}")
        with open(filepath, encoding=encoding, errors=errors) as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise FileAccessError(filepath, f"Encoding error: {e}")
    except OSError as e:
        raise FileAccessError(filepath, f"OS error: {e}")


def should_skip_file(filepath: PurePath, exclude_patterns: Iterable[str]) -> bool:
    """
    Check if a file should be skipped based on exclusion patterns.

    Args:
        filepath: File to check
        exclude_patterns: Glob patterns matched from the right (Path.match)

    Returns:
        True if file should be skipped
    """
    for pattern in exclude_patterns:
        if filepath.match(pattern):
            return True
    return False
