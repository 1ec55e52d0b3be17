"""Open-document tracking and formatting for the codebeautifier language server."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

from lsprotocol.types import (
    DocumentFormattingParams,
    Position,
    Range,
    TextDocumentContentChangeEvent,
    TextDocumentItem,
    TextEdit,
)

from ..formatting import CodeFormatter, FormattedResult, FormattingOptions
from ..formatting.languages import SUPPORTED_LANGUAGES
from .state import DocumentState


class WorkspaceIndex:
    """Keeps the text of every open document and formats it on request."""

    def __init__(self) -> None:
        self.logger = logging.getLogger("codebeautifier.lsp.workspace")
        self._open_documents: Dict[str, DocumentState] = {}
        self.last_errors: Dict[str, List[str]] = {}

    # ------------------------------------------------------------------
    # Document lifecycle
    # ------------------------------------------------------------------
    def did_open(self, item: TextDocumentItem) -> DocumentState:
        document = DocumentState(
            uri=item.uri,
            text=item.text,
            version=item.version,
            language_id=item.language_id,
        )
        self._open_documents[item.uri] = document
        if document.effective_language() is None:
            self.logger.debug("Opened %s with unsupported language %r", item.uri, item.language_id)
        return document

    def did_change(
        self,
        uri: str,
        version: int,
        changes: Sequence[TextDocumentContentChangeEvent],
    ) -> Optional[DocumentState]:
        document = self._open_documents.get(uri)
        if document is None:
            self.logger.debug("Change for unknown document %s ignored", uri)
            return None
        document.update(self._apply_content_changes(document, changes), version)
        return document

    def did_close(self, uri: str) -> None:
        self._open_documents.pop(uri, None)
        self.last_errors.pop(uri, None)

    def document(self, uri: str) -> Optional[DocumentState]:
        return self._open_documents.get(uri)

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------
    def format(self, uri: str, options: Optional[FormattingOptions] = None) -> Optional[FormattedResult]:
        """Format an open document; ``None`` when the document is unknown."""
        document = self.document(uri)
        if document is None:
            return None
        language = document.effective_language()
        if language is None:
            message = (
                f"Unsupported language: {document.language_id or document.path.suffix or 'unknown'}"
                f" (supported: {', '.join(SUPPORTED_LANGUAGES)})"
            )
            self.last_errors[uri] = [message]
            return FormattedResult(formatted_text=document.text, is_changed=False, errors=[message])

        result = CodeFormatter(options).format_document(document.text, language, str(document.path))
        if result.errors:
            self.last_errors[uri] = list(result.errors)
        else:
            self.last_errors.pop(uri, None)
        return result

    def edits_for(self, uri: str, result: Optional[FormattedResult]) -> List[TextEdit]:
        """A single whole-document replacement, or no edits when nothing changed."""
        document = self.document(uri)
        if document is None or result is None or not result.success() or not result.is_changed:
            return []
        total_range = Range(
            start=Position(line=0, character=0),
            end=Position(line=len(document.lines), character=0),
        )
        return [TextEdit(range=total_range, new_text=result.formatted_text)]

    def format_document(self, params: DocumentFormattingParams) -> List[TextEdit]:
        uri = params.text_document.uri
        options = options_from_editor(params.options)
        result = self.format(uri, options)
        return self.edits_for(uri, result)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _apply_content_changes(
        self,
        document: DocumentState,
        changes: Sequence[TextDocumentContentChangeEvent],
    ) -> str:
        text = document.text
        for change in changes:
            change_range = getattr(change, "range", None)
            if change_range is None:
                text = change.text
                document.update(text, document.version)
                continue
            start = document.offset_at(change_range.start)
            end = document.offset_at(change_range.end)
            text = text[:start] + change.text + text[end:]
            document.update(text, document.version)
        return text


def options_from_editor(options: Any) -> Optional[FormattingOptions]:
    """Translate LSP ``FormattingOptions`` (or a plain mapping) into formatter options."""
    if options is None:
        return None
    if isinstance(options, dict):
        tab_size = options.get("tabSize", options.get("tab_size", 4))
        insert_spaces = options.get("insertSpaces", options.get("insert_spaces", True))
        final_newline = options.get("insertFinalNewline", options.get("insert_final_newline"))
    else:
        tab_size = getattr(options, "tab_size", 4)
        insert_spaces = getattr(options, "insert_spaces", True)
        final_newline = getattr(options, "insert_final_newline", None)
    resolved = FormattingOptions.from_editor(tab_size, insert_spaces)
    resolved.insert_final_newline = bool(final_newline)
    return resolved


__all__ = ["WorkspaceIndex", "options_from_editor"]
