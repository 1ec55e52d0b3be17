"""
Test suite for the codebeautifier command line.

Commands are run through main() against files under tmp_path.
"""

import io

import pytest

from codebeautifier.cli import main

UNFORMATTED_JS = "function f() {\nreturn 1;\n}\n"
FORMATTED_JS = "function f() {\n    return 1;\n}\n"


@pytest.fixture(autouse=True)
def _no_reraise(monkeypatch):
    for name in ("CODEBEAUTIFIER_RERAISE", "CODEBEAUTIFIER_DEBUG", "CODEBEAUTIFIER_VERBOSE"):
        monkeypatch.delenv(name, raising=False)


def run_cli(workspace, *args):
    main(["--workspace", str(workspace), *args])


class TestFormatCommand:
    """Test the 'format' subcommand."""

    def test_formats_file_in_place(self, tmp_path, capsys):
        source = tmp_path / "app.js"
        source.write_text(UNFORMATTED_JS, encoding="utf-8")

        run_cli(tmp_path, "format", str(source))

        assert source.read_text(encoding="utf-8") == FORMATTED_JS
        out = capsys.readouterr().out
        assert f"Formatted {source}" in out
        assert "Formatted 1 file(s) successfully" in out

    def test_check_reports_without_writing(self, tmp_path, capsys):
        source = tmp_path / "app.js"
        source.write_text(UNFORMATTED_JS, encoding="utf-8")

        with pytest.raises(SystemExit) as exc_info:
            run_cli(tmp_path, "format", "--check", str(source))

        assert exc_info.value.code == 1
        assert source.read_text(encoding="utf-8") == UNFORMATTED_JS
        out = capsys.readouterr().out
        assert f"Would reformat {source}" in out
        assert "1 file(s) would be reformatted" in out

    def test_check_passes_on_formatted_file(self, tmp_path, capsys):
        source = tmp_path / "app.js"
        source.write_text("function f() {\n  return 1;\n}\n", encoding="utf-8")

        run_cli(tmp_path, "format", "--check", "--tab-size", "2", str(source))

        assert "All files are already formatted" in capsys.readouterr().out

    def test_diff_prints_unified_diff(self, tmp_path, capsys):
        source = tmp_path / "app.js"
        source.write_text(UNFORMATTED_JS, encoding="utf-8")

        run_cli(tmp_path, "format", "--diff", str(source))

        out = capsys.readouterr().out
        assert "-return 1;" in out
        assert "+    return 1;" in out
        assert source.read_text(encoding="utf-8") == UNFORMATTED_JS

    def test_tab_options(self, tmp_path):
        source = tmp_path / "app.js"
        source.write_text(UNFORMATTED_JS, encoding="utf-8")

        run_cli(tmp_path, "format", "--use-tabs", str(source))

        assert source.read_text(encoding="utf-8") == "function f() {\n\treturn 1;\n}\n"

    def test_tab_size_option(self, tmp_path):
        source = tmp_path / "app.js"
        source.write_text(UNFORMATTED_JS, encoding="utf-8")

        run_cli(tmp_path, "format", "--tab-size", "2", str(source))

        assert source.read_text(encoding="utf-8") == "function f() {\n  return 1;\n}\n"

    def test_stdin(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO('{"a":1}'))

        run_cli(tmp_path, "format", "--stdin", "--language", "json")

        assert capsys.readouterr().out == '{ "a": 1 }'

    def test_stdin_requires_language(self, tmp_path, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("x"))

        with pytest.raises(SystemExit) as exc_info:
            run_cli(tmp_path, "format", "--stdin")

        assert exc_info.value.code == 1
        assert "--stdin requires --language" in capsys.readouterr().err

    def test_unknown_language(self, tmp_path, capsys):
        with pytest.raises(SystemExit):
            run_cli(tmp_path, "format", "--language", "ruby", str(tmp_path))

        err = capsys.readouterr().err
        assert "Error [CLI_VALIDATION_ERROR]: Unsupported language: ruby" in err

    def test_explicit_unsupported_file_is_an_error(self, tmp_path, capsys):
        notes = tmp_path / "notes.txt"
        notes.write_text("hello", encoding="utf-8")

        with pytest.raises(SystemExit) as exc_info:
            run_cli(tmp_path, "format", str(notes))

        assert exc_info.value.code == 1
        assert f"Unsupported file type: {notes}" in capsys.readouterr().err

    def test_language_override_formats_any_file(self, tmp_path):
        notes = tmp_path / "snippet.txt"
        notes.write_text("x=1\n", encoding="utf-8")

        run_cli(tmp_path, "format", "--language", "python", str(notes))

        assert notes.read_text(encoding="utf-8") == "x = 1\n"

    def test_missing_path_is_an_error(self, tmp_path, capsys):
        with pytest.raises(SystemExit):
            run_cli(tmp_path, "format", str(tmp_path / "missing.js"))

        assert "Path not found" in capsys.readouterr().err

    def test_directory_walk_respects_suffixes_and_excludes(self, tmp_path):
        (tmp_path / "codebeautifier.toml").write_text(
            'exclude = ["src/vendor/*"]\n', encoding="utf-8"
        )
        src = tmp_path / "src"
        (src / "vendor").mkdir(parents=True)
        (src / "a.py").write_text("x=1\n", encoding="utf-8")
        (src / "notes.txt").write_text("x=1\n", encoding="utf-8")
        (src / "vendor" / "lib.js").write_text("a=1;\n", encoding="utf-8")

        run_cli(tmp_path, "format", str(src))

        assert (src / "a.py").read_text(encoding="utf-8") == "x = 1\n"
        assert (src / "notes.txt").read_text(encoding="utf-8") == "x=1\n"
        assert (src / "vendor" / "lib.js").read_text(encoding="utf-8") == "a=1;\n"

    def test_config_tab_size_is_used(self, tmp_path):
        (tmp_path / "codebeautifier.toml").write_text(
            "[formatting]\ntab_size = 2\n", encoding="utf-8"
        )
        source = tmp_path / "app.js"
        source.write_text(UNFORMATTED_JS, encoding="utf-8")

        run_cli(tmp_path, "format", str(source))

        assert source.read_text(encoding="utf-8") == "function f() {\n  return 1;\n}\n"


class TestOtherCommands:
    """Test the remaining entry points."""

    def test_languages(self, tmp_path, capsys):
        run_cli(tmp_path, "languages")

        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 9
        assert lines[0].split() == ["javascript", "javascript"]
        assert lines[-1].split() == ["cpp", "c-family"]

    def test_no_command_prints_help(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            run_cli(tmp_path)

        assert exc_info.value.code == 1
        assert "usage:" in capsys.readouterr().out

    def test_invalid_config_is_reported(self, tmp_path, capsys):
        (tmp_path / "codebeautifier.toml").write_text(
            "[formatting]\ntab_size = 0\n", encoding="utf-8"
        )

        with pytest.raises(SystemExit) as exc_info:
            run_cli(tmp_path, "languages")

        assert exc_info.value.code == 1
        assert "CLI_CONFIG_ERROR" in capsys.readouterr().err

    def test_missing_explicit_config(self, tmp_path, capsys):
        with pytest.raises(SystemExit):
            main(["--workspace", str(tmp_path), "--config", str(tmp_path / "nope.toml"), "languages"])

        assert "CLI_FILE_NOT_FOUND" in capsys.readouterr().err
