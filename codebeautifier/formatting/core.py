"""Core formatting entry points for the code beautifier."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..errors import BeautifierError, FormattingConfigError
from .boundaries import collapse_blank_runs
from .languages import normalize_language_id, resolve_family
from .pipelines import PIPELINES

logger = logging.getLogger(__name__)


class IndentStyle(Enum):
    """Supported indentation styles."""
    SPACES = "spaces"
    TABS = "tabs"


def indent_unit_for(insert_spaces: bool, tab_size: int) -> str:
    """
    Build the string used for one indentation level.

    Raises:
        FormattingConfigError: If ``tab_size`` is not a positive integer.
    """
    if isinstance(tab_size, bool) or not isinstance(tab_size, int) or tab_size < 1:
        raise FormattingConfigError(
            f"Invalid tab size: {tab_size!r}",
            hint="tab_size must be a positive integer",
        )
    return " " * tab_size if insert_spaces else "\t"


def format_code(text: str, language_id: str, indent_unit: str = "    ") -> str:
    """
    Format ``text`` as ``language_id`` using ``indent_unit`` per level.

    The input is split on ``\\n``; trailing carriage returns are trimmed with
    the rest of each line's trailing whitespace. Runs of three or more
    newlines never survive.

    Raises:
        UnsupportedLanguageError: If ``language_id`` is not recognised.
    """
    family = resolve_family(language_id)
    language = normalize_language_id(language_id)
    lines = text.split("\n")
    logger.debug("Formatting %d lines as %s (%s family)", len(lines), language, family.value)
    formatted = PIPELINES[family](lines, indent_unit, language)
    return collapse_blank_runs("\n".join(formatted))


@dataclass
class FormattingOptions:
    """Options supplied by the caller for one formatting run."""

    indent_style: IndentStyle = IndentStyle.SPACES
    tab_size: int = 4
    insert_final_newline: bool = False

    @property
    def insert_spaces(self) -> bool:
        return self.indent_style == IndentStyle.SPACES

    @property
    def indent_unit(self) -> str:
        return indent_unit_for(self.insert_spaces, self.tab_size)

    @classmethod
    def from_editor(cls, tab_size: int, insert_spaces: bool) -> "FormattingOptions":
        return cls(
            indent_style=IndentStyle.SPACES if insert_spaces else IndentStyle.TABS,
            tab_size=tab_size,
        )


@dataclass
class FormattedResult:
    """Result of a formatting operation."""

    formatted_text: str
    is_changed: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def success(self) -> bool:
        """Check if formatting was successful."""
        return len(self.errors) == 0


class CodeFormatter:
    """
    Formatter object used by the CLI and the language server.

    Failures never propagate out of ``format_document``: the original text is
    returned unchanged and the failure is recorded on the result.
    """

    def __init__(self, options: Optional[FormattingOptions] = None):
        self.options = options or FormattingOptions()

    def format_document(
        self,
        source_text: str,
        language_id: str,
        file_path: Optional[str] = None,
    ) -> FormattedResult:
        errors: List[str] = []
        warnings: List[str] = []

        try:
            formatted_text = format_code(source_text, language_id, self.options.indent_unit)
        except BeautifierError as exc:
            if file_path:
                exc.with_path(file_path)
            logger.warning("Formatting failed for %s: %s", file_path or "<text>", exc.message)
            errors.append(exc.format())
            return FormattedResult(
                formatted_text=source_text,
                is_changed=False,
                errors=errors,
                warnings=warnings,
            )

        if self.options.insert_final_newline and formatted_text and not formatted_text.endswith("\n"):
            formatted_text += "\n"
        if "\r\n" in source_text:
            warnings.append("CRLF line endings were converted to LF")

        return FormattedResult(
            formatted_text=formatted_text,
            is_changed=formatted_text != source_text,
            errors=errors,
            warnings=warnings,
        )


__all__ = [
    "IndentStyle",
    "FormattingOptions",
    "FormattedResult",
    "CodeFormatter",
    "format_code",
    "indent_unit_for",
]
