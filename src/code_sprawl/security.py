"""
Path safety for Code Sprawl.

The engine trusts the tree it is given, but never reads outside it: root
validation happens once per run and every symlinked candidate is checked
against the resolved root.
"""

import os
from pathlib import Path

from .exceptions import InvalidPathError, SecurityError

# System directories that should never be analyzed
SYSTEM_DIRECTORIES = {
    "/etc", "/sys", "/proc", "/dev", "/boot",
    "/bin", "/sbin", "/usr/bin", "/usr/sbin",
}


class PathValidator:
    """
    Validates that file paths stay inside the analysis root.

    Prevents:
    - Directory traversal
    - Symlink escape
    """

    def __init__(self, root_dir: Path):
        """
        Initialize path validator.

        Args:
            root_dir: Root directory that paths must be within
        """
        self.root_dir = root_dir.resolve()

    def validate_path(self, path: Path) -> Path:
        """
        Validate that a path is safe to access.

        Args:
            path: Path to validate

        Returns:
            Resolved absolute path

        Raises:
            SecurityError: If the path resolves outside the root
            InvalidPathError: If the path cannot be resolved or doesn't exist
        """
        try:
            resolved_path = path.resolve(strict=True)
        except (OSError, RuntimeError) as e:
            raise InvalidPathError(path, f"Cannot resolve path: {e}")

        try:
            resolved_path.relative_to(self.root_dir)
        except ValueError:
            reason = (
                "Symlink escape detected: target is outside root directory"
                if path.is_symlink()
                else "Path traversal detected: path is outside root directory"
            )
            raise SecurityError(reason, filepath=path)

        return resolved_path

    def is_safe_path(self, path: Path) -> bool:
        """
        Check if path is safe without raising exceptions.

        Args:
            path: Path to check

        Returns:
            True if path is safe, False otherwise
        """
        try:
            self.validate_path(path)
            return True
        except (SecurityError, InvalidPathError):
            return False


def validate_root_directory(path: Path) -> Path:
    """
    Validate that a root directory is safe to analyze.

    Args:
        path: Directory path to validate

    Returns:
        Resolved absolute path

    Raises:
        InvalidPathError: If path is missing, not a directory or unreadable
        SecurityError: If path is a system directory
    """
    try:
        resolved = path.resolve()
    except (OSError, RuntimeError) as e:
        raise InvalidPathError(path, f"Cannot resolve path: {e}")

    if not resolved.exists():
        raise InvalidPathError(resolved, "Directory does not exist")

    if not resolved.is_dir():
        raise InvalidPathError(resolved, "Path is not a directory")

    if not os.access(resolved, os.R_OK | os.X_OK):
        raise InvalidPathError(resolved, "Directory is not readable")

    path_str = str(resolved)
    for sys_dir in SYSTEM_DIRECTORIES:
        if path_str == sys_dir or path_str.startswith(sys_dir + os.sep):
            raise SecurityError(
                f"Cannot analyze system directory: {sys_dir}",
                filepath=resolved
            )

    return resolved
