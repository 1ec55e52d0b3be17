"""Formatting handlers: textDocument/formatting and the beautify command."""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

from lsprotocol.types import DocumentFormattingParams, MessageType, TextEdit, WorkspaceEdit

from ..workspace import WorkspaceIndex, options_from_editor

BEAUTIFY_COMMAND = "codeBeautifier.beautify"


def _command_arguments(args: Any) -> Tuple[Optional[str], Any]:
    """Pull ``(uri, options)`` out of the command argument list."""
    if not args:
        return None, None
    first = args[0]
    options = args[1] if len(args) > 1 else None
    if isinstance(first, str):
        return first, options
    if isinstance(first, dict):
        return first.get("uri"), first.get("options", options)
    return getattr(first, "uri", None), options


def beautify(ls, workspace: WorkspaceIndex, args: List[Any]) -> bool:
    """Format the document named in ``args`` and apply the result as a workspace edit."""
    uri, raw_options = _command_arguments(args)
    if uri is None or workspace.document(uri) is None:
        ls.show_message("No open document to beautify", MessageType.Warning)
        return False

    result = workspace.format(uri, options_from_editor(raw_options))
    if result is None or result.errors:
        detail = "; ".join(result.errors) if result is not None else "document not found"
        ls.show_message(f"Beautification failed: {detail}", MessageType.Error)
        return False

    edits = workspace.edits_for(uri, result)
    if edits:
        ls.apply_edit(WorkspaceEdit(changes={uri: edits}))
    ls.show_message("Code beautified successfully!", MessageType.Info)
    return True


def document_formatting(ls, workspace: WorkspaceIndex, params: DocumentFormattingParams) -> List[TextEdit]:
    """Edits for a formatting request; failures are shown to the user."""
    edits = workspace.format_document(params)
    errors = workspace.last_errors.get(params.text_document.uri)
    if errors:
        ls.show_message(f"Beautification failed: {'; '.join(errors)}", MessageType.Error)
    return edits


def register(server) -> None:
    workspace: WorkspaceIndex = server.workspace_index

    @server.feature("textDocument/formatting")
    async def _format(ls, params: DocumentFormattingParams):
        return document_formatting(ls, workspace, params)

    @server.command(BEAUTIFY_COMMAND)
    def _beautify(ls, args):
        return beautify(ls, workspace, args)
