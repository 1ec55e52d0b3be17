"""Unified error model for the code beautifier."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional


@dataclass
class ErrorLocation:
    path: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None

    def describe(self) -> str:
        if not self.path:
            return "unknown location"
        parts = [self.path]
        if self.line is not None:
            parts.append(str(self.line))
            if self.column is not None:
                parts.append(str(self.column))
        return ":".join(parts)


class BeautifierError(Exception):
    """Base class for all errors surfaced to users of the formatter."""

    code: Optional[str] = None
    hint: Optional[str] = None

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.location = ErrorLocation(path=path, line=line, column=column)
        if code is not None:
            self.code = code
        if hint is not None:
            self.hint = hint

    @property
    def path(self) -> Optional[str]:
        return self.location.path

    @property
    def line(self) -> Optional[int]:
        return self.location.line

    @property
    def column(self) -> Optional[int]:
        return self.location.column

    def with_path(self, path: str) -> "BeautifierError":
        """Attach ``path`` unless the error already names a file."""
        if self.location.path is None:
            self.location.path = path
        return self

    def format(self) -> str:
        meta = []
        if self.location.path:
            meta.append(self.location.describe())
        if self.code:
            meta.append(self.code)
        text = f"{self.message} ({'; '.join(meta)})" if meta else self.message
        if self.hint:
            text = f"{text} Hint: {self.hint}"
        return text


class UnsupportedLanguageError(BeautifierError):
    """Raised when a document's language identifier has no formatting pipeline."""

    code = "unsupported-language"

    def __init__(
        self,
        language_id: str,
        *,
        supported: Iterable[str] = (),
        path: Optional[str] = None,
    ) -> None:
        supported = tuple(supported)
        hint = f"Supported languages: {', '.join(supported)}" if supported else None
        super().__init__(f"Unsupported language: {language_id}", path=path, hint=hint)
        self.language_id = language_id
        self.supported = supported


class FormattingConfigError(BeautifierError):
    """Raised when formatting options or workspace configuration are invalid."""

    code = "invalid-config"


__all__ = [
    "BeautifierError",
    "UnsupportedLanguageError",
    "FormattingConfigError",
    "ErrorLocation",
]
