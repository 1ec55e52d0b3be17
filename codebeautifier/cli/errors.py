"""
Error handling for the codebeautifier CLI.

Every CLI failure carries a code and, optionally, a hint and some context
values. ``handle_cli_exception`` is the single place that turns an
exception into stderr output and an exit status.
"""

import os
import sys
import traceback
from typing import Any, Dict, Optional

from ..errors import BeautifierError

_TRACE_LIMIT = 4000
_TRUTHY = frozenset({"1", "true", "yes", "on"})


class CLIError(Exception):
    """
    Base exception for CLI operations.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code (defaults to ``default_code``)
        hint: Optional suggestion for resolving the error
        context: Extra values shown in verbose mode
    """

    default_code = "CLI_ERROR"

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        hint: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.hint = hint
        self.context = dict(context or {})

    def __str__(self) -> str:
        return self.message


class CLIValidationError(CLIError):
    """Invalid command arguments or options."""

    default_code = "CLI_VALIDATION_ERROR"


class CLIRuntimeError(CLIError):
    """A command failed while running."""

    default_code = "CLI_RUNTIME_ERROR"


class CLIFileNotFoundError(CLIError):
    """A path given on the command line does not exist."""

    default_code = "CLI_FILE_NOT_FOUND"


class CLIConfigError(CLIError):
    """The workspace configuration could not be loaded."""

    default_code = "CLI_CONFIG_ERROR"


def _traceback_excerpt() -> str:
    trace = traceback.format_exc().strip()
    if len(trace) > _TRACE_LIMIT:
        trace = trace[:_TRACE_LIMIT - 3] + "..."
    return trace


def format_cli_error(
    exc: BaseException,
    *,
    verbose: bool = False,
    include_traceback: bool = False
) -> str:
    """
    Render an exception for stderr.

    Examples:
        >>> print(format_cli_error(CLIValidationError("No input", hint="Pass a path")))
        Error [CLI_VALIDATION_ERROR]: No input
        Hint: Pass a path
    """
    if isinstance(exc, CLIError):
        lines = [f"Error [{exc.code}]: {exc.message}"]
        if exc.hint:
            lines.append(f"Hint: {exc.hint}")
        if verbose and exc.context:
            lines.append("\nContext:")
            lines.extend(f"  {key}: {value}" for key, value in exc.context.items())
    elif isinstance(exc, BeautifierError):
        lines = [f"Error: {exc.format()}"]
    else:
        lines = [f"Error: {type(exc).__name__}: {exc}"]

    if include_traceback:
        lines.extend(["\nTraceback:", _traceback_excerpt()])
    return "\n".join(lines)


def _env_enabled(*names: str) -> bool:
    return any((os.getenv(name) or "").strip().lower() in _TRUTHY for name in names)


def handle_cli_exception(
    exc: BaseException,
    *,
    verbose: bool = False,
    exit_code: int = 1
) -> None:
    """
    Print ``exc`` to stderr and exit with ``exit_code``.

    ``CODEBEAUTIFIER_RERAISE`` or ``CODEBEAUTIFIER_DEBUG`` re-raise instead;
    ``CODEBEAUTIFIER_VERBOSE`` behaves like ``--verbose``.

    Note:
        This function calls sys.exit() and does not return.
    """
    if _env_enabled("CODEBEAUTIFIER_RERAISE", "CODEBEAUTIFIER_DEBUG"):
        raise exc

    detailed = verbose or _env_enabled("CODEBEAUTIFIER_VERBOSE", "CODEBEAUTIFIER_DEBUG")
    print(format_cli_error(exc, verbose=detailed, include_traceback=detailed), file=sys.stderr)
    sys.exit(exit_code)
