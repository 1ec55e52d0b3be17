"""Tests for CLI error rendering and exit handling."""

import argparse

import pytest

from codebeautifier.cli.context import get_cli_context
from codebeautifier.cli.errors import (
    CLIConfigError,
    CLIError,
    CLIRuntimeError,
    CLIValidationError,
    format_cli_error,
    handle_cli_exception,
)
from codebeautifier.errors import UnsupportedLanguageError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("CODEBEAUTIFIER_RERAISE", "CODEBEAUTIFIER_DEBUG", "CODEBEAUTIFIER_VERBOSE"):
        monkeypatch.delenv(name, raising=False)


class TestFormatCliError:
    def test_cli_error_with_hint(self):
        exc = CLIValidationError("No input", hint="Pass a path")

        assert format_cli_error(exc) == "Error [CLI_VALIDATION_ERROR]: No input\nHint: Pass a path"

    def test_context_only_in_verbose_mode(self):
        exc = CLIRuntimeError("Boom", context={"path": "a.js"})

        assert "Context" not in format_cli_error(exc)
        assert "  path: a.js" in format_cli_error(exc, verbose=True)

    def test_explicit_code_wins(self):
        assert CLIConfigError("x", code="CUSTOM").code == "CUSTOM"
        assert CLIError("x").code == "CLI_ERROR"

    def test_beautifier_error(self):
        exc = UnsupportedLanguageError("ruby", path="a.rb")

        assert format_cli_error(exc) == "Error: Unsupported language: ruby (a.rb; unsupported-language)"

    def test_unexpected_exception(self):
        assert format_cli_error(ValueError("bad")) == "Error: ValueError: bad"


class TestHandleCliException:
    def test_prints_and_exits(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(CLIRuntimeError("Boom"), exit_code=3)

        assert exc_info.value.code == 3
        assert capsys.readouterr().err.strip() == "Error [CLI_RUNTIME_ERROR]: Boom"

    def test_reraise_env(self, monkeypatch):
        monkeypatch.setenv("CODEBEAUTIFIER_RERAISE", "1")

        with pytest.raises(CLIRuntimeError):
            handle_cli_exception(CLIRuntimeError("Boom"))


def test_missing_cli_context():
    with pytest.raises(CLIConfigError) as exc_info:
        get_cli_context(argparse.Namespace())

    assert exc_info.value.code == "CLI_CONTEXT_NOT_INITIALIZED"
