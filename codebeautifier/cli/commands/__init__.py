"""Command handlers for the codebeautifier CLI."""

from .tools import cmd_format, cmd_languages, cmd_lsp, collect_files

__all__ = ["cmd_format", "cmd_languages", "cmd_lsp", "collect_files"]
