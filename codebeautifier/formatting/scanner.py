"""
Line-at-a-time scanning for comments and literals.

The scanners track quote state character by character. They never look
across line boundaries, so multi-line strings and block comments are only
recognised by the shape of the individual line.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .languages import LanguageFamily

LITERAL_OPEN = "\ue000"
LITERAL_CLOSE = "\ue001"

_SENTINEL_RE = re.compile(LITERAL_OPEN + r"(\d+)" + LITERAL_CLOSE)
_EXPONENT_RE = re.compile(r"(?<![\w.])\d+(?:\.\d*)?[eE][-+]?\d+")
_STREAM_RE = re.compile(r"<<=?|>>>?=?")
_GENERIC_RE = re.compile(r"(?:(?<=\w)|(?<=\btemplate ))<[\w\s,.?:\[\]*<>]*>")
_CSS_URL_RE = re.compile(r"url\([^)]*\)", re.IGNORECASE)

_GENERIC_LANGUAGES = frozenset({"java", "cpp", "typescript"})


@dataclass(frozen=True)
class LineSegments:
    """A trimmed line split into its code and trailing comment."""

    code: str
    comment: str = ""

    @property
    def has_comment(self) -> bool:
        return bool(self.comment)


def find_js_comment_index(line: str) -> Optional[int]:
    in_single = in_double = in_template = in_regex = False
    previous = ""
    for index, char in enumerate(line):
        escaped = previous == "\\"
        if in_regex:
            if char == "/" and not escaped:
                in_regex = False
        elif in_single:
            if char == "'" and not escaped:
                in_single = False
        elif in_double:
            if char == '"' and not escaped:
                in_double = False
        elif in_template:
            if char == "`" and not escaped:
                in_template = False
        elif char == "'":
            in_single = True
        elif char == '"':
            in_double = True
        elif char == "`":
            in_template = True
        elif char == "/":
            if line[index + 1:index + 2] in ("/", "*"):
                return index
            if previous == "(":
                in_regex = True
        previous = char
    return None


def find_c_comment_index(line: str) -> Optional[int]:
    in_single = in_double = False
    previous = ""
    index = 0
    while index < len(line):
        char = line[index]
        escaped = previous == "\\"
        if in_single:
            if char == "'" and not escaped:
                in_single = False
        elif in_double:
            if char == '"' and not escaped:
                in_double = False
        elif char == "'":
            in_single = True
        elif char == '"':
            in_double = True
        elif line.startswith(("<<", ">>"), index):
            previous = line[index + 1]
            index += 2
            continue
        elif char == "/" and line[index + 1:index + 2] in ("/", "*"):
            return index
        previous = char
        index += 1
    return None


def find_python_comment_index(line: str) -> Optional[int]:
    in_single = in_double = False
    previous = ""
    for index, char in enumerate(line):
        escaped = previous == "\\"
        if in_single:
            if char == "'" and not escaped:
                in_single = False
        elif in_double:
            if char == '"' and not escaped:
                in_double = False
        elif char == "'":
            in_single = True
        elif char == '"':
            in_double = True
        elif char == "#":
            return index
        previous = char
    return None


def locate_comment_start(line: str, family: LanguageFamily) -> Optional[int]:
    """Return the index of the first comment marker outside any literal."""
    if family is LanguageFamily.JAVASCRIPT:
        return find_js_comment_index(line)
    if family is LanguageFamily.C_FAMILY:
        return find_c_comment_index(line)
    if family is LanguageFamily.PYTHON:
        return find_python_comment_index(line)
    return None


def split_comment(line: str, family: LanguageFamily) -> LineSegments:
    index = locate_comment_start(line, family)
    if index is None:
        return LineSegments(code=line)
    return LineSegments(code=line[:index].rstrip(), comment=line[index:])


def is_block_comment_line(trimmed: str) -> bool:
    """Block comment openers, closers and ``*`` continuation lines."""
    return (
        trimmed.startswith(("/*", "*/", "* "))
        or trimmed == "*"
        or (trimmed.endswith("*/") and "/*" not in trimmed)
    )


def is_standalone_comment(trimmed: str, family: LanguageFamily) -> bool:
    marker = family.comment_marker
    if marker is None or not trimmed:
        return False
    if trimmed.startswith(marker):
        return not (family is LanguageFamily.PYTHON and trimmed.startswith("#!"))
    return False


def _literal_end(text: str, start: int) -> int:
    quote = text[start]
    index = start + 1
    while index < len(text):
        if text[index] == quote and text[index - 1] != "\\":
            return index + 1
        index += 1
    return len(text)


def _extra_patterns(family: LanguageFamily, language_id: Optional[str]) -> List[re.Pattern]:
    patterns: List[re.Pattern] = []
    if family is LanguageFamily.CSS:
        patterns.append(_CSS_URL_RE)
    if family in (LanguageFamily.JAVASCRIPT, LanguageFamily.PYTHON, LanguageFamily.C_FAMILY):
        patterns.append(_EXPONENT_RE)
    if language_id in _GENERIC_LANGUAGES:
        patterns.append(_GENERIC_RE)
    if family is LanguageFamily.C_FAMILY:
        patterns.append(_STREAM_RE)
    return patterns


def mask_literals(
    code: str,
    family: LanguageFamily,
    language_id: Optional[str] = None,
) -> Tuple[str, List[str]]:
    """
    Replace every literal span in ``code`` with an opaque sentinel.

    Quoted strings are always masked (an unterminated quote runs to the end
    of the line). JavaScript regex literals directly after ``(``, C-family
    stream operators, CSS ``url(...)`` values, numeric exponents and, for
    Java, C++ and TypeScript, generic argument lists are masked as well.

    Returns:
        The masked text and the list of original spans, indexed by sentinel.
    """
    literals: List[str] = []

    def stash(text: str) -> str:
        literals.append(text)
        return f"{LITERAL_OPEN}{len(literals) - 1}{LITERAL_CLOSE}"

    quotes = "'\"`" if family is LanguageFamily.JAVASCRIPT else "'\""
    pieces: List[str] = []
    index = 0
    while index < len(code):
        char = code[index]
        if char in quotes:
            end = _literal_end(code, index)
            pieces.append(stash(code[index:end]))
            index = end
            continue
        if (
            family is LanguageFamily.JAVASCRIPT
            and char == "/"
            and index > 0
            and code[index - 1] == "("
        ):
            end = _literal_end(code, index)
            while end < len(code) and code[end].isalpha():
                end += 1
            pieces.append(stash(code[index:end]))
            index = end
            continue
        pieces.append(char)
        index += 1

    masked = "".join(pieces)
    for pattern in _extra_patterns(family, language_id):
        masked = pattern.sub(lambda match: stash(match.group(0)), masked)
    return masked, literals


def unmask_literals(masked: str, literals: List[str]) -> str:
    text = masked
    # A masked span may itself contain an earlier sentinel.
    for _ in range(len(literals) + 1):
        if LITERAL_OPEN not in text:
            break
        text = _SENTINEL_RE.sub(lambda match: literals[int(match.group(1))], text)
    return text


def code_without_literals(trimmed: str, family: LanguageFamily) -> str:
    """The code part of a line with quoted spans masked, used for brace counting."""
    segments = split_comment(trimmed, family)
    masked, _ = mask_literals(segments.code, family)
    return masked


__all__ = [
    "LITERAL_OPEN",
    "LITERAL_CLOSE",
    "LineSegments",
    "find_js_comment_index",
    "find_c_comment_index",
    "find_python_comment_index",
    "locate_comment_start",
    "split_comment",
    "is_block_comment_line",
    "is_standalone_comment",
    "mask_literals",
    "unmask_literals",
    "code_without_literals",
]
