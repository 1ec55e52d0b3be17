"""pygls based Language Server entrypoint."""

from __future__ import annotations

import logging
import os

from pygls.server import LanguageServer

from .. import __version__
from .handlers import register_all
from .workspace import WorkspaceIndex

logger = logging.getLogger(__name__)


class CodeBeautifierLanguageServer(LanguageServer):
    """Concrete LanguageServer holding the open-document index."""

    def __init__(self) -> None:
        super().__init__(name="codebeautifier-lsp", version=__version__)
        self.workspace_index = WorkspaceIndex()
        register_all(self)


def create_server() -> CodeBeautifierLanguageServer:
    return CodeBeautifierLanguageServer()


def main() -> None:
    server = create_server()
    logger.info("Starting codebeautifier LSP (pid=%s)", os.getpid())
    server.start_io()


if __name__ == "__main__":  # pragma: no cover
    main()
