"""
codebeautifier CLI entry point.

This module builds the argument parser, resolves the workspace
configuration and dispatches to the command modules.
"""

import argparse
import logging
import os
import sys
from typing import Optional

from .. import __version__
from ..formatting.languages import SUPPORTED_LANGUAGES
from .commands import cmd_format, cmd_languages, cmd_lsp
from .context import build_cli_context
from .errors import CLIError, handle_cli_exception


def _configure_logging(args) -> None:
    """Configure the codebeautifier logger from --log-level or CODEBEAUTIFIER_LOG_LEVEL."""
    log_level = (
        getattr(args, 'log_level', None) or
        os.getenv('CODEBEAUTIFIER_LOG_LEVEL', 'warning')
    ).lower()

    level_map = {
        'debug': logging.DEBUG,
        'info': logging.INFO,
        'warn': logging.WARNING,
        'warning': logging.WARNING,
        'error': logging.ERROR,
    }

    numeric_level = level_map.get(log_level, logging.WARNING)

    logger = logging.getLogger('codebeautifier')
    logger.setLevel(numeric_level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        # Keep messages off the root logger
        logger.propagate = False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Line-oriented source code beautifier",
        prog="codebeautifier"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        '--config',
        default=None,
        help='Path to a codebeautifier.toml or .codebeautifierrc file'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Print full tracebacks and detailed CLI errors (or set CODEBEAUTIFIER_VERBOSE=1)'
    )
    parser.add_argument(
        '--workspace',
        default=None,
        help='Workspace root directory (defaults to current working directory)'
    )
    parser.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warn', 'error'],
        default=None,
        help='Set logging level (or set CODEBEAUTIFIER_LOG_LEVEL)'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Format subcommand
    format_parser = subparsers.add_parser(
        'format',
        help='Beautify source files in place'
    )
    format_parser.add_argument(
        'paths',
        nargs='*',
        default=['.'],
        help='Files or directories to format (default: current directory)'
    )
    format_parser.add_argument(
        '--check',
        action='store_true',
        help='Check if files need formatting without making changes'
    )
    format_parser.add_argument(
        '--diff',
        action='store_true',
        help='Show diff of formatting changes instead of writing them'
    )
    format_parser.add_argument(
        '--language',
        default=None,
        metavar='ID',
        help=f"Force a language id ({', '.join(SUPPORTED_LANGUAGES)})"
    )
    format_parser.add_argument(
        '--stdin',
        action='store_true',
        help='Read source from stdin and write the result to stdout (requires --language)'
    )
    format_parser.add_argument(
        '--tab-size',
        type=int,
        default=None,
        help='Spaces per indentation level (default: from config, else 4)'
    )
    format_parser.add_argument(
        '--use-tabs',
        action='store_true',
        default=None,
        help='Indent with tab characters'
    )
    format_parser.set_defaults(func=cmd_format)

    # Languages subcommand
    languages_parser = subparsers.add_parser(
        'languages',
        help='List supported language identifiers'
    )
    languages_parser.set_defaults(func=cmd_languages)

    # LSP subcommand
    lsp_parser = subparsers.add_parser(
        'lsp',
        help='Start the formatting language server over stdio'
    )
    lsp_parser.set_defaults(func=cmd_lsp)

    return parser


def main(argv: Optional[list] = None) -> None:
    """
    Main CLI entrypoint with subcommand support.

    Args:
        argv: Command-line arguments (None uses sys.argv[1:])

    Examples:
        Format a directory in place:
        >>> main(['format', 'src'])  # doctest: +SKIP

        Check formatting without writing:
        >>> main(['format', '--check', 'app.js'])  # doctest: +SKIP
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)

    # If no command specified, print help
    if not hasattr(args, 'func'):
        parser.print_help()
        sys.exit(1)

    args.verbose = getattr(args, "verbose", False)
    _configure_logging(args)

    try:
        args.cli_context = build_cli_context(args.workspace, args.config)
    except CLIError as exc:
        handle_cli_exception(exc, verbose=args.verbose)

    args.func(args)


__all__ = ["main", "build_parser"]


if __name__ == '__main__':  # pragma: no cover
    main()
