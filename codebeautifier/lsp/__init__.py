"""Language server exposing document formatting to editors."""

from .server import CodeBeautifierLanguageServer, create_server, main

__all__ = ["CodeBeautifierLanguageServer", "create_server", "main"]
