"""Document level state tracking for the codebeautifier language server."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from lsprotocol.types import Position
from pygls.uris import to_fs_path

from ..formatting.languages import is_supported, language_for_path, normalize_language_id


@dataclass
class DocumentState:
    """Text and metadata for one open document."""

    uri: str
    text: str
    version: int
    language_id: str = ""
    path: Path = field(init=False)
    lines: List[str] = field(init=False)
    _line_offsets: List[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.path = self._resolve_path()
        self.language_id = normalize_language_id(self.language_id)
        self._set_text(self.text)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def update(self, text: str, version: int) -> None:
        self._set_text(text)
        self.version = version

    def effective_language(self) -> Optional[str]:
        """Editor language id when supported, otherwise the one implied by the file suffix."""
        if is_supported(self.language_id):
            return self.language_id
        return language_for_path(self.path)

    def offset_at(self, position: Position) -> int:
        """
        Text offset of ``position``.

        Lines are taken from the offset table, so the empty line after a
        trailing newline is addressable. Out-of-range positions clamp to
        the end of the document or of their line.
        """
        last_line = len(self._line_offsets) - 1
        line_index = min(max(position.line, 0), last_line)
        start = self._line_offsets[line_index]
        end = self._line_offsets[line_index + 1] if line_index < last_line else len(self.text)
        line_length = len(self.text[start:end].rstrip("\r\n"))
        column = min(max(position.character, 0), line_length)
        return start + column

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _resolve_path(self) -> Path:
        try:
            return Path(to_fs_path(self.uri))
        except (TypeError, ValueError):
            return Path(self.uri)

    def _set_text(self, text: str) -> None:
        self.text = text
        self.lines = text.splitlines()
        if not self.lines:
            self.lines = [""]
        self._recompute_line_offsets()

    def _recompute_line_offsets(self) -> None:
        offsets: List[int] = [0]
        text = self.text
        idx = 0
        length = len(text)
        while idx < length:
            char = text[idx]
            if char == "\r":
                if idx + 1 < length and text[idx + 1] == "\n":
                    idx += 1
                offsets.append(idx + 1)
            elif char == "\n":
                offsets.append(idx + 1)
            idx += 1
        self._line_offsets = offsets


__all__ = ["DocumentState"]
