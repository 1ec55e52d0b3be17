"""
Blank-line and boundary normalisation.

These passes run over the reconstructed output lines after every line has
been cleaned and indented. They only ever remove blank lines, re-indent
standalone comments, or (for CSS) insert blank lines between rule blocks.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .languages import LanguageFamily
from .indentation import leading_width
from .scanner import code_without_literals

logger = logging.getLogger(__name__)

_BLANK_RUN_RE = re.compile(r"\n{3,}")

JS_FUNCTION_RE = re.compile(
    r"^(?:export\s+)?(?:default\s+)?(?:async\s+)?"
    r"(?:function\s*\*?\s*(\w+)"
    r"|(?:const|let|var)\s+(\w+)\s*=\s*(?:async\s+)?(?:function\b|\(.*\)\s*=>))"
)
PYTHON_FUNCTION_RE = re.compile(r"^(?:async\s+)?def\s+(\w+)\s*\(")
JAVA_METHOD_RE = re.compile(
    r"^\s*(?:(?:public|private|protected)\s+)?(?:static\s+)?"
    r"(?!(?:return|new|else|throw|case)\b)\w+(?:<[^>]*>)?(?:\[\])*\s+(\w+)\s*\("
)
C_FUNCTION_RE = re.compile(
    r"^\s*(?:\w+[\s*&]+)+(?:\w+::)*"
    r"(?!(?:if|for|while|switch|catch|return)\b)(\w+)\s*\([^)]*\)\s*(?:const\s*)?\{"
)


@dataclass(frozen=True)
class FunctionSpan:
    """Line range (inclusive) of one detected function or method."""

    start: int
    end: int
    name: Optional[str] = None


def _is_blank(line: str) -> bool:
    return not line.strip()


def _indent_of(line: str) -> str:
    return line[: len(line) - len(line.lstrip())]


def collapse_blank_runs(text: str) -> str:
    """Replace any run of three or more newlines with exactly two."""
    return _BLANK_RUN_RE.sub("\n\n", text)


def squeeze_blank_lines(lines: Sequence[str]) -> List[str]:
    result: List[str] = []
    for line in lines:
        if _is_blank(line) and result and _is_blank(result[-1]):
            continue
        result.append(line)
    return result


def drop_blank_between_closing_braces(lines: Sequence[str]) -> List[str]:
    """Remove a blank line whose neighbours both end with ``}``."""
    result: List[str] = []
    last = len(lines) - 1
    for index, line in enumerate(lines):
        if (
            _is_blank(line)
            and 0 < index < last
            and lines[index - 1].rstrip().endswith("}")
            and lines[index + 1].rstrip().endswith("}")
        ):
            continue
        result.append(line)
    return result


def _is_comment(stripped: str, marker: str) -> bool:
    if not stripped.startswith(marker):
        return False
    return not (marker == "#" and stripped.startswith("#!"))


def align_standalone_comments(lines: Sequence[str], marker: str) -> List[str]:
    """
    Give each standalone comment the indentation of the code below it.

    Blank lines between the comment and that code are removed. The list is
    walked bottom-up so a run of comments lines up as one block.
    """
    reversed_out: List[str] = []
    pending_blanks: List[str] = []
    next_indent: Optional[str] = None
    for line in reversed(lines):
        stripped = line.strip()
        if not stripped:
            pending_blanks.append(line)
            continue
        if next_indent is not None and _is_comment(stripped, marker):
            pending_blanks = []
            line = next_indent + stripped
        reversed_out.extend(pending_blanks)
        pending_blanks = []
        reversed_out.append(line)
        next_indent = _indent_of(line)
    reversed_out.extend(pending_blanks)
    reversed_out.reverse()
    return reversed_out


def _is_css_comment(stripped: str) -> bool:
    return stripped.startswith(("/*", "//"))


def _closes_block(stripped: str) -> bool:
    # One-line rules such as "a {color: red;}" open a block and are not a block end.
    return "}" in stripped and "{" not in stripped


def ensure_css_block_spacing(lines: Sequence[str]) -> List[str]:
    """
    After a block-closing line, pad the gap before the next rule block.

    The gap is raised to ``2 + comments`` blank lines, where ``comments`` is
    the number of comment lines between the two blocks. Existing blank lines
    are kept.
    """
    result: List[str] = []
    total = len(lines)
    for index, line in enumerate(lines):
        result.append(line)
        if not _closes_block(line.strip()):
            continue

        cursor = index + 1
        while cursor < total and _is_blank(lines[cursor]):
            cursor += 1
        comments = 0
        while cursor < total and _is_css_comment(lines[cursor].strip()):
            comments += 1
            cursor += 1
            while cursor < total and _is_blank(lines[cursor]):
                cursor += 1

        if cursor >= total or lines[cursor].strip().startswith("}"):
            continue
        existing = sum(1 for k in range(index + 1, cursor) if _is_blank(lines[k]))
        needed = 2 + comments
        if existing < needed:
            result.extend([""] * (needed - existing))
    return result


def _function_pattern(family: LanguageFamily, language_id: Optional[str]) -> Optional[re.Pattern]:
    if family is LanguageFamily.JAVASCRIPT:
        return JS_FUNCTION_RE
    if family is LanguageFamily.PYTHON:
        return PYTHON_FUNCTION_RE
    if family is LanguageFamily.C_FAMILY:
        return JAVA_METHOD_RE if language_id == "java" else C_FUNCTION_RE
    return None


def _brace_span_end(lines: Sequence[str], start: int, family: LanguageFamily) -> int:
    depth = 0
    opened = False
    for index in range(start, len(lines)):
        for char in code_without_literals(lines[index].strip(), family):
            if char == "{":
                depth += 1
                opened = True
            elif char == "}":
                depth -= 1
        if opened and depth <= 0:
            return index
    return len(lines) - 1


def _indent_span_end(lines: Sequence[str], start: int) -> int:
    base = leading_width(lines[start], 4)
    end = start
    for index in range(start + 1, len(lines)):
        if _is_blank(lines[index]):
            continue
        if leading_width(lines[index], 4) <= base:
            break
        end = index
    return end


def find_function_boundaries(
    lines: Sequence[str],
    family: LanguageFamily,
    language_id: Optional[str] = None,
) -> List[FunctionSpan]:
    """
    Detect top-level function and method spans with declaration patterns.

    This is a heuristic: multi-line signatures and unusual declaration
    styles are missed. Nested declarations inside a detected span are not
    reported separately.
    """
    pattern = _function_pattern(family, language_id)
    if pattern is None:
        return []

    spans: List[FunctionSpan] = []
    index = 0
    while index < len(lines):
        stripped = lines[index].strip()
        match = pattern.match(stripped) if stripped else None
        if match is None:
            index += 1
            continue
        name = next((group for group in match.groups() if group), None)
        if family is LanguageFamily.PYTHON:
            end = _indent_span_end(lines, index)
        else:
            end = _brace_span_end(lines, index, family)
        spans.append(FunctionSpan(start=index, end=end, name=name))
        index = end + 1
    return spans


def normalize_structure(
    lines: Sequence[str],
    family: LanguageFamily,
    language_id: Optional[str] = None,
) -> List[str]:
    """Run the family's structural pass over reconstructed output lines."""
    if family is LanguageFamily.CSS:
        return ensure_css_block_spacing(lines)
    if family is LanguageFamily.HTML:
        return list(lines)

    result = squeeze_blank_lines(lines)
    if family is LanguageFamily.C_FAMILY:
        spans = find_function_boundaries(result, family, language_id)
        if not spans:
            logger.debug("No method boundaries found; skipping comment alignment")
            return result
        logger.debug("Found %d method boundaries", len(spans))
    result = drop_blank_between_closing_braces(result)
    return align_standalone_comments(result, family.comment_marker or "//")


__all__ = [
    "FunctionSpan",
    "JS_FUNCTION_RE",
    "PYTHON_FUNCTION_RE",
    "JAVA_METHOD_RE",
    "C_FUNCTION_RE",
    "collapse_blank_runs",
    "squeeze_blank_lines",
    "drop_blank_between_closing_braces",
    "align_standalone_comments",
    "ensure_css_block_spacing",
    "find_function_boundaries",
    "normalize_structure",
]
