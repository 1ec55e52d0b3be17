"""Language identifiers and the formatting family each one belongs to."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Union

from ..errors import UnsupportedLanguageError


class LanguageFamily(Enum):
    """Closed set of formatting pipelines."""

    JAVASCRIPT = "javascript"
    HTML = "html"
    CSS = "css"
    PYTHON = "python"
    C_FAMILY = "c-family"

    @property
    def unit_width(self) -> int:
        """Leading-whitespace columns assumed per indentation level."""
        return 4 if self is LanguageFamily.PYTHON else 2

    @property
    def comment_marker(self) -> Optional[str]:
        if self is LanguageFamily.PYTHON:
            return "#"
        if self in (LanguageFamily.JAVASCRIPT, LanguageFamily.C_FAMILY):
            return "//"
        return None


SUPPORTED_LANGUAGES = (
    "javascript",
    "typescript",
    "json",
    "html",
    "css",
    "python",
    "java",
    "c",
    "cpp",
)

LANGUAGE_FAMILIES: Dict[str, LanguageFamily] = {
    "javascript": LanguageFamily.JAVASCRIPT,
    "typescript": LanguageFamily.JAVASCRIPT,
    "json": LanguageFamily.JAVASCRIPT,
    "html": LanguageFamily.HTML,
    "css": LanguageFamily.CSS,
    "python": LanguageFamily.PYTHON,
    "java": LanguageFamily.C_FAMILY,
    "c": LanguageFamily.C_FAMILY,
    "cpp": LanguageFamily.C_FAMILY,
}

FILE_EXTENSIONS: Dict[str, str] = {
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".jsx": "javascript",
    ".ts": "typescript",
    ".tsx": "typescript",
    ".json": "json",
    ".html": "html",
    ".htm": "html",
    ".css": "css",
    ".py": "python",
    ".pyi": "python",
    ".java": "java",
    ".c": "c",
    ".h": "c",
    ".cpp": "cpp",
    ".cc": "cpp",
    ".cxx": "cpp",
    ".hpp": "cpp",
    ".hh": "cpp",
    ".hxx": "cpp",
}


def normalize_language_id(language_id: str) -> str:
    return (language_id or "").strip().lower()


def is_supported(language_id: str) -> bool:
    return normalize_language_id(language_id) in LANGUAGE_FAMILIES


def resolve_family(language_id: str) -> LanguageFamily:
    """
    Map a language identifier onto its formatting family.

    Raises:
        UnsupportedLanguageError: If the identifier is outside the recognised set.
    """
    family = LANGUAGE_FAMILIES.get(normalize_language_id(language_id))
    if family is None:
        raise UnsupportedLanguageError(language_id, supported=SUPPORTED_LANGUAGES)
    return family


def language_for_path(
    path: Union[str, Path],
    extra_extensions: Optional[Dict[str, str]] = None,
) -> Optional[str]:
    suffix = Path(path).suffix.lower()
    if extra_extensions and suffix in extra_extensions:
        return extra_extensions[suffix]
    return FILE_EXTENSIONS.get(suffix)


__all__ = [
    "LanguageFamily",
    "SUPPORTED_LANGUAGES",
    "LANGUAGE_FAMILIES",
    "FILE_EXTENSIONS",
    "normalize_language_id",
    "is_supported",
    "resolve_family",
    "language_for_path",
]
