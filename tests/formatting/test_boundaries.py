"""Tests for blank-line and boundary normalisation."""

from codebeautifier.formatting.boundaries import (
    FunctionSpan,
    align_standalone_comments,
    collapse_blank_runs,
    drop_blank_between_closing_braces,
    ensure_css_block_spacing,
    find_function_boundaries,
    normalize_structure,
    squeeze_blank_lines,
)
from codebeautifier.formatting.languages import LanguageFamily


class TestBlankLines:
    def test_collapse_blank_runs(self):
        assert collapse_blank_runs("a\n\n\n\nb\n\n\nc\n\nd") == "a\n\nb\n\nc\n\nd"

    def test_squeeze(self):
        assert squeeze_blank_lines(["a", "", "", "b", ""]) == ["a", "", "b", ""]

    def test_drop_blank_between_closing_braces(self):
        lines = ["    }", "", "}", "", "next();"]
        assert drop_blank_between_closing_braces(lines) == ["    }", "}", "", "next();"]

    def test_blank_kept_when_only_one_side_closes(self):
        lines = ["}", "", "x();"]
        assert drop_blank_between_closing_braces(lines) == lines


class TestCommentAlignment:
    def test_comment_takes_indent_of_following_code(self):
        lines = ["def f():", "", "# note", "", "    return 1"]

        assert align_standalone_comments(lines, "#") == [
            "def f():",
            "",
            "    # note",
            "    return 1",
        ]

    def test_comment_run_aligns_as_block(self):
        lines = ["  // one", "      // two", "", "    call();"]

        assert align_standalone_comments(lines, "//") == [
            "    // one",
            "    // two",
            "    call();",
        ]

    def test_trailing_comment_without_code_is_left(self):
        lines = ["x = 1", "", "  # end"]
        assert align_standalone_comments(lines, "#") == lines

    def test_shebang_is_not_a_comment(self):
        lines = ["#!/usr/bin/env python", "", "import os"]
        assert align_standalone_comments(lines, "#") == lines


class TestCssBlockSpacing:
    def test_adjacent_blocks(self):
        lines = ["a {", "}", "b {", "}"]
        assert ensure_css_block_spacing(lines) == ["a {", "}", "", "", "b {", "}"]

    def test_existing_blank_lines_are_kept(self):
        lines = ["a {", "}", "", "", "", "", "b {", "}"]
        assert ensure_css_block_spacing(lines) == lines

    def test_nested_closing_brace_needs_no_gap(self):
        lines = ["@media print {", "a {", "}", "}"]
        assert ensure_css_block_spacing(lines) == lines

    def test_one_line_rules_are_not_block_ends(self):
        lines = ["a {color: red;}", "b {color: blue;}"]
        assert ensure_css_block_spacing(lines) == lines

    def test_block_after_one_line_rule_is_spaced_from_its_end(self):
        lines = ["a {color: red;}", "b {", "color: blue;", "}", "c {", "}"]
        assert ensure_css_block_spacing(lines) == [
            "a {color: red;}", "b {", "color: blue;", "}", "", "", "c {", "}",
        ]


class TestFunctionBoundaries:
    def test_javascript(self):
        lines = [
            "function a() {",
            "  return 1;",
            "}",
            "",
            "const b = () => {",
            "  return 2;",
            "}",
        ]

        spans = find_function_boundaries(lines, LanguageFamily.JAVASCRIPT)

        assert spans == [FunctionSpan(0, 2, "a"), FunctionSpan(4, 6, "b")]

    def test_python(self):
        lines = [
            "def a():",
            "    return 1",
            "",
            "def b(x):",
            "    if x:",
            "        return 2",
            "    return 3",
            "print(a())",
        ]

        spans = find_function_boundaries(lines, LanguageFamily.PYTHON)

        assert spans == [FunctionSpan(0, 1, "a"), FunctionSpan(3, 6, "b")]

    def test_java(self):
        lines = [
            "public class A {",
            "    public int get() {",
            "        return 1;",
            "    }",
            "}",
        ]

        spans = find_function_boundaries(lines, LanguageFamily.C_FAMILY, "java")

        assert spans == [FunctionSpan(1, 3, "get")]

    def test_c(self):
        lines = ["static int add(int a, int b) {", "    return a + b;", "}", "if (x) {", "}"]

        spans = find_function_boundaries(lines, LanguageFamily.C_FAMILY, "c")

        assert spans == [FunctionSpan(0, 2, "add")]

    def test_no_pattern_for_markup(self):
        assert find_function_boundaries(["a {", "}"], LanguageFamily.CSS) == []


class TestNormalizeStructure:
    def test_c_without_functions_only_squeezes(self):
        lines = ["struct s {", "", "", "  // field", "", "  int x;", "};"]

        result = normalize_structure(lines, LanguageFamily.C_FAMILY, "c")

        assert result == ["struct s {", "", "  // field", "", "  int x;", "};"]

    def test_c_with_function_aligns_comments(self):
        lines = ["int f() {", "// body", "", "  return 0;", "}"]

        result = normalize_structure(lines, LanguageFamily.C_FAMILY, "c")

        assert result == ["int f() {", "  // body", "  return 0;", "}"]

    def test_html_is_untouched(self):
        lines = ["<p>", "", "", "</p>"]
        assert normalize_structure(lines, LanguageFamily.HTML) == lines
