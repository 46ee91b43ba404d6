"""Base formatter interface for Code Sprawl output rendering."""

from abc import ABC, abstractmethod

from ..models import RunResult


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, result: RunResult) -> None:
        """Render a run result to stdout/stderr as appropriate."""

    @abstractmethod
    def format(self, result: RunResult) -> str:
        """Return formatted string representation of a run result."""
