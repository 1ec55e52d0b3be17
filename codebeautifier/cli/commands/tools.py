"""
Formatting and editor-integration commands.

This module handles the 'format', 'languages' and 'lsp' subcommands.
"""

import argparse
import difflib
import os
import sys
from pathlib import Path
from typing import List, Tuple

from ...formatting import CodeFormatter, FormattedResult
from ...formatting.languages import LANGUAGE_FAMILIES, SUPPORTED_LANGUAGES, is_supported
from ..context import CLIContext, get_cli_context
from ..errors import CLIRuntimeError, CLIValidationError, handle_cli_exception


def _unified_diff(path: str, original: str, formatted: str) -> str:
    return "".join(
        difflib.unified_diff(
            original.splitlines(keepends=True),
            formatted.splitlines(keepends=True),
            fromfile=f"{path} (original)",
            tofile=f"{path} (formatted)",
        )
    )


def collect_files(
    ctx: CLIContext,
    paths: List[str],
    language_override: str = None,
) -> Tuple[List[Tuple[Path, str]], List[str]]:
    """
    Expand command-line paths into (file, language) pairs.

    Directories are walked recursively and only files with a known suffix
    are kept. Files named explicitly must have a known suffix unless a
    language is forced.

    Returns:
        The files to format and a list of problems to report.
    """
    files: List[Tuple[Path, str]] = []
    problems: List[str] = []
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            for candidate in sorted(path.rglob("*")):
                if not candidate.is_file() or ctx.config.is_excluded(candidate):
                    continue
                language = language_override or ctx.config.language_for(candidate)
                if language:
                    files.append((candidate, language))
        elif path.is_file():
            language = language_override or ctx.config.language_for(path)
            if language:
                files.append((path, language))
            else:
                problems.append(f"Unsupported file type: {raw}")
        else:
            problems.append(f"Path not found: {raw}")
    return files, problems


def _format_stdin(args: argparse.Namespace, formatter: CodeFormatter) -> None:
    if not args.language:
        raise CLIValidationError(
            "--stdin requires --language",
            hint=f"Use one of: {', '.join(SUPPORTED_LANGUAGES)}",
        )
    content = sys.stdin.read()
    result = formatter.format_document(content, args.language, "<stdin>")
    if result.errors:
        raise CLIRuntimeError(result.errors[0])
    if args.check:
        if result.is_changed:
            print("Would reformat <stdin>", file=sys.stderr)
            raise SystemExit(1)
        return
    if args.diff:
        sys.stdout.write(_unified_diff("<stdin>", content, result.formatted_text))
        return
    sys.stdout.write(result.formatted_text)


def _report(file_path: Path, result: FormattedResult) -> None:
    for error in result.errors:
        print(f"Error formatting {file_path}: {error}", file=sys.stderr)
    for warning in result.warnings:
        print(f"Warning in {file_path}: {warning}")


def cmd_format(args: argparse.Namespace) -> None:
    """
    Handle the 'format' subcommand.

    Args:
        args: Parsed command-line arguments containing:
            - paths: Files or directories to format
            - check: Only report files that would change (exit 1 if any)
            - diff: Print a unified diff instead of writing
            - language: Force a language id for every input
            - stdin: Read from stdin and write the result to stdout
            - tab_size / use_tabs: Override the configured indentation

    Raises:
        SystemExit: If errors occur or check mode finds changes
    """
    try:
        ctx = get_cli_context(args)
        if args.language and not is_supported(args.language):
            raise CLIValidationError(
                f"Unsupported language: {args.language}",
                hint=f"Use one of: {', '.join(SUPPORTED_LANGUAGES)}",
            )
        formatter = CodeFormatter(
            ctx.config.formatting_options(tab_size=args.tab_size, use_tabs=args.use_tabs)
        )

        if args.stdin:
            _format_stdin(args, formatter)
            return

        files, problems = collect_files(ctx, args.paths, args.language)
        for problem in problems:
            print(problem, file=sys.stderr)
        error_count = len(problems)

        if not files:
            print("No files to format")
            if error_count:
                raise SystemExit(1)
            return

        changed_count = 0
        for file_path, language in files:
            try:
                content = file_path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                print(f"Error reading {file_path}: {exc}", file=sys.stderr)
                error_count += 1
                continue

            result = formatter.format_document(content, language, str(file_path))
            _report(file_path, result)
            if result.errors:
                error_count += 1
                continue
            if not result.is_changed:
                continue

            changed_count += 1
            if args.diff:
                sys.stdout.write(_unified_diff(str(file_path), content, result.formatted_text))
            if args.check:
                print(f"Would reformat {file_path}")
            elif not args.diff:
                file_path.write_text(result.formatted_text, encoding="utf-8")
                print(f"Formatted {file_path}")

        if args.check:
            if changed_count > 0:
                print(f"{changed_count} file(s) would be reformatted")
                raise SystemExit(1)
            print("All files are already formatted")
        elif changed_count > 0 and not args.diff:
            print(f"Formatted {changed_count} file(s) successfully")

        if error_count > 0:
            print(f"Encountered {error_count} error(s)", file=sys.stderr)
            raise SystemExit(1)

    except Exception as exc:
        handle_cli_exception(exc, verbose=getattr(args, "verbose", False))


def cmd_languages(args: argparse.Namespace) -> None:
    """Handle the 'languages' subcommand: list supported language ids."""
    for language in SUPPORTED_LANGUAGES:
        print(f"{language:<12} {LANGUAGE_FAMILIES[language].value}")


def cmd_lsp(args: argparse.Namespace) -> None:
    """
    Handle the 'lsp' subcommand to launch the language server over stdio.

    Raises:
        SystemExit: If the language server fails to start
    """
    try:
        get_cli_context(args)

        from ...lsp.server import create_server

        server = create_server()
        pid = os.getpid()
        print(f"Starting codebeautifier language server (pid={pid})", file=sys.stderr)

        try:
            server.start_io()
        except KeyboardInterrupt:
            print("Language server interrupted by user.", file=sys.stderr)
        except Exception as exc:
            raise CLIRuntimeError(
                f"Language server stopped unexpectedly: {exc}",
            ) from exc

    except Exception as exc:
        handle_cli_exception(exc, verbose=getattr(args, "verbose", False))
