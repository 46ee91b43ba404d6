"""Working-tree lifecycle.

The acquisition collaborator materializes a source tree; a Workspace wraps
it for the duration of one run and removes it afterwards when the run owns
it. ``cleanup()`` is idempotent so callers can invoke it from ``finally``
blocks without double-deleting.
"""

from __future__ import annotations

import shutil
import tempfile
import threading
from pathlib import Path
from typing import Union

from .logging_config import get_logger

logger = get_logger(__name__)


class Workspace:
    """A source tree plus the knowledge of whether to delete it."""

    def __init__(self, root: Union[str, Path], owned: bool = False):
        self.root = Path(root)
        self.owned = owned
        self._lock = threading.Lock()
        self._cleaned = False

    @classmethod
    def existing(cls, root: Union[str, Path]) -> "Workspace":
        """Wrap a tree the caller keeps; cleanup leaves it in place."""
        return cls(root, owned=False)

    @classmethod
    def temporary(cls, prefix: str = "code-sprawl-") -> "Workspace":
        """Create a scratch directory that cleanup removes."""
        return cls(tempfile.mkdtemp(prefix=prefix), owned=True)

    @property
    def cleaned(self) -> bool:
        return self._cleaned

    def cleanup(self) -> None:
        """Release the tree. Only the first call has any effect."""
        with self._lock:
            if self._cleaned:
                return
            self._cleaned = True

        if not self.owned:
            return
        try:
            shutil.rmtree(self.root)
            logger.debug(f"Cleaned up {self.root}")
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.error(f"Failed to clean up {self.root}: {e}")

    def __enter__(self) -> "Workspace":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()

    def __repr__(self) -> str:
        return f"Workspace(root={str(self.root)!r}, owned={self.owned})"
