"""Analysis-related exceptions: file access, parsing, language support."""

from pathlib import Path
from typing import List

from .base import SprawlError


class AnalysisError(SprawlError):
    """Base class for analysis-related errors."""
    pass


class FileAccessError(AnalysisError):
    """Raised when a source file cannot be accessed or read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class ParsingError(AnalysisError):
    """Raised when a file cannot be turned into a clean syntax tree."""

    def __init__(self, filepath: str, language: str, reason: str):
        super().__init__(
            f"Failed to parse {language} file: {filepath}",
            details={"filepath": str(filepath), "language": language, "reason": reason},
        )
        self.filepath = filepath
        self.language = language
        self.reason = reason


class UnsupportedLanguageError(AnalysisError):
    """Raised when no grammar is registered for a file kind."""

    def __init__(self, language: str, supported_languages: List[str]):
        super().__init__(
            f"Unsupported language: {language}",
            details={"language": language, "supported": ", ".join(supported_languages)},
        )
        self.language = language
        self.supported_languages = supported_languages
