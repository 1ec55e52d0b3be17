"""
Line-oriented source formatting.

This package provides the heuristic formatter that:
1. Splits each line into code and comment with quote-aware scanners
2. Rewrites spacing with ordered per-family cleanup rules
3. Re-indents by original width or by brace depth
4. Normalises blank lines and comment placement around blocks
"""

from __future__ import annotations

__all__ = [
    "CodeFormatter",
    "FormattingOptions",
    "FormattedResult",
    "IndentStyle",
    "DefaultFormattingRules",
    "LanguageFamily",
    "SUPPORTED_LANGUAGES",
    "format_code",
    "indent_unit_for",
    "resolve_family",
    "is_supported",
]

from .core import (
    CodeFormatter,
    FormattedResult,
    FormattingOptions,
    IndentStyle,
    format_code,
    indent_unit_for,
)
from .languages import SUPPORTED_LANGUAGES, LanguageFamily, is_supported, resolve_family
from .rules import DefaultFormattingRules
