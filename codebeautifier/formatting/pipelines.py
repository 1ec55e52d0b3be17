"""
Family pipelines.

Each pipeline cleans and indents every input line (one output line per input
line), then hands the result to the family's structural pass.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Sequence

from .boundaries import normalize_structure
from .cleanup import clean_line
from .indentation import BraceDepthTracker, SourceLine, is_flat
from .languages import LanguageFamily
from .scanner import is_block_comment_line

logger = logging.getLogger(__name__)

Pipeline = Callable[[Sequence[str], str, Optional[str]], List[str]]


def _render(indent_unit: str, level: int, cleaned: str, family: LanguageFamily) -> str:
    prefix = indent_unit * level
    if (
        family in (LanguageFamily.JAVASCRIPT, LanguageFamily.C_FAMILY)
        and cleaned.startswith("*")
        and is_block_comment_line(cleaned)
    ):
        # Continuation lines stay one column right of their "/*" opener.
        prefix += " "
    return prefix + cleaned


def ratio_pass(
    lines: Sequence[str],
    family: LanguageFamily,
    indent_unit: str,
    language_id: Optional[str] = None,
) -> List[str]:
    """Clean each line and re-indent it from its original leading width."""
    unit_width = family.unit_width
    output: List[str] = []
    for source in map(SourceLine, lines):
        if source.is_blank:
            output.append("")
            continue
        cleaned = clean_line(source.trimmed, family, language_id)
        output.append(_render(indent_unit, source.level(unit_width), cleaned, family))
    return output


def brace_depth_pass(
    lines: Sequence[str],
    family: LanguageFamily,
    indent_unit: str,
    language_id: Optional[str] = None,
) -> List[str]:
    """Clean each line and indent it by the running brace depth."""
    tracker = BraceDepthTracker(family)
    output: List[str] = []
    for source in map(SourceLine, lines):
        if source.is_blank:
            output.append("")
            continue
        trimmed = source.trimmed
        if family is LanguageFamily.C_FAMILY and tracker.is_directive(trimmed):
            output.append(trimmed)
            continue
        cleaned = clean_line(trimmed, family, language_id)
        output.append(_render(indent_unit, tracker.indent_for(cleaned), cleaned, family))
        if not is_block_comment_line(trimmed):
            tracker.advance(trimmed)
    return output


def format_javascript_family(
    lines: Sequence[str], indent_unit: str, language_id: Optional[str] = None
) -> List[str]:
    family = LanguageFamily.JAVASCRIPT
    if is_flat(lines):
        logger.debug("Unindented %s source; using brace depth", language_id or "javascript")
        output = brace_depth_pass(lines, family, indent_unit, language_id)
    else:
        output = ratio_pass(lines, family, indent_unit, language_id)
    return normalize_structure(output, family, language_id)


def format_html(
    lines: Sequence[str], indent_unit: str, language_id: Optional[str] = None
) -> List[str]:
    return ratio_pass(lines, LanguageFamily.HTML, indent_unit, language_id)


def format_css(
    lines: Sequence[str], indent_unit: str, language_id: Optional[str] = None
) -> List[str]:
    output = ratio_pass(lines, LanguageFamily.CSS, indent_unit, language_id)
    return normalize_structure(output, LanguageFamily.CSS, language_id)


def format_python(
    lines: Sequence[str], indent_unit: str, language_id: Optional[str] = None
) -> List[str]:
    output = ratio_pass(lines, LanguageFamily.PYTHON, indent_unit, language_id)
    return normalize_structure(output, LanguageFamily.PYTHON, language_id)


def format_c_family(
    lines: Sequence[str], indent_unit: str, language_id: Optional[str] = None
) -> List[str]:
    output = brace_depth_pass(lines, LanguageFamily.C_FAMILY, indent_unit, language_id)
    return normalize_structure(output, LanguageFamily.C_FAMILY, language_id)


PIPELINES: Dict[LanguageFamily, Pipeline] = {
    LanguageFamily.JAVASCRIPT: format_javascript_family,
    LanguageFamily.HTML: format_html,
    LanguageFamily.CSS: format_css,
    LanguageFamily.PYTHON: format_python,
    LanguageFamily.C_FAMILY: format_c_family,
}


__all__ = [
    "PIPELINES",
    "ratio_pass",
    "brace_depth_pass",
    "format_javascript_family",
    "format_html",
    "format_css",
    "format_python",
    "format_c_family",
]
