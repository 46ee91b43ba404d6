"""Tree-sitter parser wrapper and mode selection.

tree-sitter recovers from syntax errors instead of raising, so a tree that
contains ERROR or MISSING nodes is treated as a failed parse: the file is
then analyzed in textual mode in its entirety.

Usage:
    parser = TreeSitterParser()
    mode = parser.select_mode(source_file)
    if isinstance(mode, StructuralMode):
        ...  # mode.tree is a clean syntax tree
"""

from __future__ import annotations

import threading
from typing import Any, Callable

import tree_sitter
import tree_sitter_javascript
import tree_sitter_typescript

from ..exceptions import ParsingError, UnsupportedLanguageError
from ..logging_config import get_logger
from ..models import SourceFile
from .languages import detect_language
from .modes import AnalysisMode, StructuralMode, TextualMode, iter_nodes

logger = get_logger(__name__)

_GRAMMARS: dict[str, Callable[[], Any]] = {
    "javascript": tree_sitter_javascript.language,
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
}


def get_supported_languages() -> list[str]:
    """Get list of languages with a registered grammar."""
    return sorted(_GRAMMARS)


class TreeSitterParser:
    """Builds syntax trees and decides the analysis mode for each file.

    Parser objects are not shared between threads; each worker thread lazily
    creates its own set.
    """

    def __init__(self) -> None:
        self._languages: dict[str, Any] = {
            name: tree_sitter.Language(loader()) for name, loader in _GRAMMARS.items()
        }
        self._local = threading.local()

    def is_language_supported(self, language: str) -> bool:
        """Check if a language is supported."""
        return language in self._languages

    def _parser_for(self, language: str) -> Any:
        parsers = getattr(self._local, "parsers", None)
        if parsers is None:
            parsers = self._local.parsers = {}
        parser = parsers.get(language)
        if parser is None:
            parser = tree_sitter.Parser(self._languages[language])
            parsers[language] = parser
        return parser

    def parse(self, source: SourceFile, language: str) -> Any:
        """Parse a file and return its syntax tree.

        Raises:
            UnsupportedLanguageError: If no grammar is registered for language
            ParsingError: If the tree contains syntax errors
        """
        if not self.is_language_supported(language):
            raise UnsupportedLanguageError(language, get_supported_languages())

        tree = self._parser_for(language).parse(source.content.encode("utf-8", errors="replace"))
        if tree.root_node.has_error:
            row = _first_error_row(tree.root_node)
            raise ParsingError(source.path, language, f"syntax error near line {row + 1}")
        return tree

    def select_mode(self, source: SourceFile) -> AnalysisMode:
        """Choose structural or textual analysis for one file.

        Never raises for malformed input; the failure reason is carried on the
        returned TextualMode instead.
        """
        language = detect_language(source.path)
        if language is None:
            return TextualMode(source, reason="no grammar for file kind")

        try:
            tree = self.parse(source, language)
        except (ParsingError, UnsupportedLanguageError) as e:
            reason = getattr(e, "reason", str(e))
            logger.debug(f"Textual mode for {source.path}: {reason}")
            return TextualMode(source, reason=reason)

        return StructuralMode(source, tree, language)


def _first_error_row(root: Any) -> int:
    for node in iter_nodes(root):
        if node.type == "ERROR" or node.is_missing:
            return int(node.start_point[0])
    return 0
