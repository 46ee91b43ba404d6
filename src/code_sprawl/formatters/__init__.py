"""Output formatters for Code Sprawl."""

from .base import BaseFormatter
from .json_formatter import JsonFormatter
from .rich_formatter import RichFormatter

_FORMATTERS = {
    "rich": RichFormatter,
    "json": JsonFormatter,
}


def get_formatter(name: str, **options) -> BaseFormatter:
    """Get a formatter instance by name, passing ``options`` to its constructor."""
    cls = _FORMATTERS.get(name)
    if cls is None:
        raise ValueError(f"Unknown formatter: {name!r}. Choose from: {', '.join(_FORMATTERS)}")
    return cls(**options)


__all__ = ["BaseFormatter", "JsonFormatter", "RichFormatter", "get_formatter"]
