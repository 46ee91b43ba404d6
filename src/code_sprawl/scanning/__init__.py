"""File enumeration, language detection, parsing and pattern tables."""

from .enumerator import FileEnumerator
from .languages import LANGUAGES, LanguageConfig, detect_language
from .modes import AnalysisMode, StructuralMode, TextualMode
from .patterns import DEFAULT_PATTERNS, NamedPattern, PatternLibrary
from .treesitter_parser import TreeSitterParser, get_supported_languages

__all__ = [
    "FileEnumerator",
    "LANGUAGES",
    "LanguageConfig",
    "detect_language",
    "AnalysisMode",
    "StructuralMode",
    "TextualMode",
    "DEFAULT_PATTERNS",
    "NamedPattern",
    "PatternLibrary",
    "TreeSitterParser",
    "get_supported_languages",
]
