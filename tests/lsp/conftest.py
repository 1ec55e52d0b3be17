from __future__ import annotations

from typing import Callable

import pytest
from lsprotocol.types import TextDocumentItem

from codebeautifier.lsp.workspace import WorkspaceIndex


@pytest.fixture()
def workspace() -> WorkspaceIndex:
    return WorkspaceIndex()


@pytest.fixture()
def open_document(workspace: WorkspaceIndex) -> Callable[..., TextDocumentItem]:
    def _open(uri: str, text: str, language_id: str = "javascript", *, version: int = 1) -> TextDocumentItem:
        item = TextDocumentItem(uri=uri, language_id=language_id, version=version, text=text)
        workspace.did_open(item)
        return item

    return _open
