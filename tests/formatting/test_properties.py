"""Behavioural guarantees that hold for every supported language."""

import pytest

from codebeautifier.errors import UnsupportedLanguageError
from codebeautifier.formatting import SUPPORTED_LANGUAGES, format_code
from codebeautifier.formatting.boundaries import ensure_css_block_spacing


def test_idempotence(sample):
    language, source, unit = sample

    once = format_code(source, language, unit)
    twice = format_code(once, language, unit)

    assert twice == once


def test_line_count_never_grows_outside_css(sample):
    language, source, unit = sample
    if language == "css":
        pytest.skip("CSS block spacing may insert blank lines")

    result = format_code(source, language, unit)

    assert len(result.split("\n")) <= len(source.split("\n"))


def test_css_growth_is_bounded(css_stylesheet):
    result = format_code(css_stylesheet, "css", "  ")

    # one closing brace followed by a block: at most 2 + 1 comment lines added
    assert len(result.split("\n")) <= len(css_stylesheet.split("\n")) + 3


@pytest.mark.parametrize("language", SUPPORTED_LANGUAGES)
def test_no_three_newline_runs(language):
    source = "a\n\n\n\n\nb\n\n\n\n}\n\n\n{"

    result = format_code(source, language, "  ")

    assert "\n\n\n" not in result


def test_comment_inside_string_is_not_a_comment():
    source = 'let x = "// not a comment";   //   real   comment'

    result = format_code(source, "javascript", "  ")

    assert result == 'let x = "// not a comment"; // real comment'


def test_bracket_depth_reindent(javascript_flat):
    lines = format_code(javascript_flat, "javascript", "  ").split("\n")

    assert lines[2] == "    doThing();"
    assert lines[3] == "  }"
    assert lines[4] == "}"


def test_css_block_spacing_before_collapse():
    lines = ["a {", "}", "/* note */", "b {", "}"]

    spaced = ensure_css_block_spacing(lines)

    assert spaced == ["a {", "}", "", "", "", "/* note */", "b {", "}"]


def test_css_block_spacing_after_formatting():
    result = format_code("a {\n}\n/* note */\nb {\n}", "css", "  ")

    assert result == "a {\n}\n\n/* note */\nb {\n}"


def test_unsupported_language_leaves_input_alone():
    source = "puts 'hello'\n"

    with pytest.raises(UnsupportedLanguageError):
        format_code(source, "ruby", "  ")

    assert source == "puts 'hello'\n"
