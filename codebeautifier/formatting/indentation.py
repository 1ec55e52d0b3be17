"""Indentation strategies: width ratio and brace depth."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .languages import LanguageFamily
from .scanner import code_without_literals


@dataclass(frozen=True)
class SourceLine:
    """One physical input line."""

    raw: str

    @property
    def trimmed(self) -> str:
        return self.raw.strip()

    @property
    def is_blank(self) -> bool:
        return not self.trimmed

    def width(self, unit_width: int) -> int:
        return leading_width(self.raw, unit_width)

    def level(self, unit_width: int) -> int:
        return ratio_level(self.raw, unit_width)


def leading_width(line: str, unit_width: int) -> int:
    """Leading whitespace in columns; a tab counts as one full indentation unit."""
    width = 0
    for char in line:
        if char == "\t":
            width += unit_width
        elif char.isspace():
            width += 1
        else:
            break
    return width


def ratio_level(line: str, unit_width: int) -> int:
    return leading_width(line, unit_width) // unit_width


def is_flat(lines: Iterable[str]) -> bool:
    """True when no non-blank line carries any leading whitespace."""
    return all(not line.strip() or line == line.lstrip() for line in lines)


class BraceDepthTracker:
    """
    Running brace depth threaded through the lines of one document.

    ``indent_for`` reports the level for a line before ``advance`` folds that
    line's braces into the running depth.
    """

    def __init__(self, family: LanguageFamily = LanguageFamily.C_FAMILY) -> None:
        self.family = family
        self.level = 0

    @staticmethod
    def is_directive(trimmed: str) -> bool:
        return trimmed.startswith("#")

    def indent_for(self, cleaned: str) -> int:
        if cleaned.startswith("}"):
            return max(self.level - 1, 0)
        return self.level

    def advance(self, trimmed: str) -> int:
        for char in code_without_literals(trimmed, self.family):
            if char == "{":
                self.level += 1
            elif char == "}":
                self.level = max(self.level - 1, 0)
        return self.level


__all__ = [
    "SourceLine",
    "leading_width",
    "ratio_level",
    "is_flat",
    "BraceDepthTracker",
]
