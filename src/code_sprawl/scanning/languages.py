"""Language table: which grammar parses which file kind.

Adding a dialect:
  1. Add a LanguageConfig entry to LANGUAGES below.
  2. Register its grammar loader in treesitter_parser._GRAMMARS.
Files whose extension is not listed here are analyzed textually.
"""

from dataclasses import dataclass
from pathlib import PurePath
from typing import Optional, Union


@dataclass(frozen=True)
class LanguageConfig:
    """A grammar name and the extensions it handles."""

    name: str
    extensions: tuple[str, ...]


LANGUAGES = {
    "javascript": LanguageConfig(
        name="javascript",
        extensions=(".js", ".jsx", ".mjs", ".cjs"),
    ),
    "typescript": LanguageConfig(
        name="typescript",
        extensions=(".ts", ".mts", ".cts"),
    ),
    "tsx": LanguageConfig(
        name="tsx",
        extensions=(".tsx",),
    ),
}


_EXTENSION_TO_LANGUAGE: dict[str, str] = {}
for _lang_name, _cfg in LANGUAGES.items():
    for _ext in _cfg.extensions:
        _EXTENSION_TO_LANGUAGE[_ext] = _lang_name


def detect_language(filepath: Union[str, PurePath]) -> Optional[str]:
    """Detect the grammar for a file from its extension.

    Returns:
        Language name (e.g., "javascript") or None when no grammar applies
    """
    ext = PurePath(filepath).suffix.lower()
    return _EXTENSION_TO_LANGUAGE.get(ext)
