"""
Per-family line cleaners.

A cleaner rewrites the spacing of one trimmed line. Every family owns an
ordered tuple of small rules; each rule is a single text transform that can
be exercised on its own. Literals are masked before the rules run and are
restored afterwards, so no rule ever sees the inside of a string.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Callable, Dict, Iterable, List, Optional, Tuple, Union

from .languages import LanguageFamily
from .scanner import (
    LITERAL_CLOSE,
    LITERAL_OPEN,
    is_block_comment_line,
    mask_literals,
    split_comment,
    unmask_literals,
)


class CleanupRule(ABC):
    """Base class for a single spacing transform."""

    rule_id: str = ""
    description: str = ""

    @abstractmethod
    def apply(self, text: str) -> str:
        """Return ``text`` with this rule applied."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.rule_id!r})"


class RegexRule(CleanupRule):
    """A rule backed by one compiled pattern and its replacement."""

    def __init__(
        self,
        rule_id: str,
        pattern: str,
        replacement: Union[str, Callable[[re.Match], str]],
        description: str = "",
    ) -> None:
        self.rule_id = rule_id
        self.pattern = re.compile(pattern)
        self.replacement = replacement
        self.description = description

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


class WhitespaceRule(CleanupRule):
    rule_id = "collapse-whitespace"
    description = "Collapse runs of whitespace to one space and trim both ends"

    def apply(self, text: str) -> str:
        return " ".join(text.split())


class ObjectColonRule(CleanupRule):
    """
    Object-literal and annotation colons: no space before, one after.

    Colons that close a pending ``?`` keep their ternary spacing.
    """

    rule_id = "object-colon"
    description = "Write key colons as 'key: value' while leaving ternaries alone"

    _TOKENS = re.compile(r"(\?\?|\?\.|\?:|\?|:)")

    def apply(self, text: str) -> str:
        pieces: List[str] = []
        pending = 0
        tighten_next = False
        for part in self._TOKENS.split(text):
            if tighten_next:
                part = part.lstrip()
                if part:
                    part = " " + part
                tighten_next = False
            if part == "?":
                pending += 1
            elif part == ":" and pending:
                pending -= 1
            elif part in (":", "?:"):
                if pieces:
                    pieces[-1] = pieces[-1].rstrip()
                tighten_next = True
            pieces.append(part)
        return "".join(pieces)


class DeclarationColonRule(CleanupRule):
    """CSS colons get one trailing space, but only inside declarations."""

    rule_id = "css-declaration-colon"
    description = "Space 'property: value' pairs without touching selectors"

    _COLON = re.compile(r"\s*(?<!:):(?!:)\s*")

    def apply(self, text: str) -> str:
        if text.startswith("@"):
            return self._COLON.sub(": ", text)
        brace = text.rfind("{")
        if brace >= 0:
            return text[:brace + 1] + self._COLON.sub(": ", text[brace + 1:])
        if text.endswith(","):
            return text
        return self._COLON.sub(": ", text)


class SliceColonRule(CleanupRule):
    """Python slice colons are written tight: ``items[1:-1]``."""

    rule_id = "python-slice-colon"
    description = "Remove spaces around colons directly inside square brackets"

    def apply(self, text: str) -> str:
        stack: List[str] = []
        out: List[str] = []
        for char in text:
            if char in "([{":
                stack.append(char)
            elif char in ")]}" and stack:
                stack.pop()
            if char == ":" and stack and stack[-1] == "[":
                while out and out[-1] == " ":
                    out.pop()
                out.append(char)
                continue
            if char == " " and out and out[-1] == ":" and stack and stack[-1] == "[":
                continue
            out.append(char)
        return "".join(out)


class KeywordArgumentRule(CleanupRule):
    """
    Python keyword arguments and unannotated defaults bind tight: ``f(a=1)``.

    An argument that carries an annotation keeps ``x: int = 1``.
    """

    rule_id = "python-keyword-argument"
    description = "Drop spaces around '=' for keyword arguments inside parentheses"

    def apply(self, text: str) -> str:
        stack: List[str] = []
        annotated: List[bool] = []
        out: List[str] = []
        index = 0
        while index < len(text):
            char = text[index]
            if char in "([{":
                stack.append(char)
                annotated.append(False)
            elif char in ")]}" and stack:
                stack.pop()
                annotated.pop()
            elif stack and stack[-1] == "(":
                if char == ",":
                    annotated[-1] = False
                elif char == ":":
                    annotated[-1] = True
                elif (
                    text.startswith(" = ", index)
                    and not annotated[-1]
                    and out
                    and out[-1] not in "=!<>"
                ):
                    out.append("=")
                    index += 3
                    continue
            out.append(char)
            index += 1
        return "".join(out)


def _operator_rule(rule_id: str, operators: Iterable[str], singles: str) -> RegexRule:
    alternation = "|".join(
        re.escape(op) for op in sorted(operators, key=len, reverse=True)
    )
    return RegexRule(
        rule_id,
        rf"\s*({alternation}|[{singles}])\s*",
        r" \1 ",
        "One space on each side of every operator",
    )


def _unary_rule(rule_id: str, operators: str, keywords: Iterable[str]) -> RegexRule:
    keyword_lookbehinds = "".join(f"|(?<=\\b{word} )" for word in keywords)
    pattern = (
        r"(?<!\+\+ )(?<!-- )"
        r"(?:^|(?<=[(\[{])|(?<=[(\[{,;:?=<>!&|+\-*/%^~] )"
        + keyword_lookbehinds
        + rf")({operators}) (?=[\w{LITERAL_OPEN}(\[.!~$])"
    )
    return RegexRule(rule_id, pattern, r"\1", "Unary operators hug their operand")


_POSTFIX_RULE = RegexRule(
    "postfix-increment",
    rf"(?<=[\w{LITERAL_CLOSE})\]]) (\+\+|--)(?= ?(?:$|[);,\]}}:?=+\-*/%<>&|^!]))",
    r"\1",
    "Postfix ++/-- hug the preceding operand",
)

_COMMA_RULE = RegexRule("comma-spacing", r"\s*,\s*", ", ", "One space after a comma")
_SEMICOLON_RULE = RegexRule(
    "semicolon-spacing", r"\s*;\s*", "; ", "One space after a semicolon"
)
_OPEN_BRACKET_RULE = RegexRule(
    "open-bracket-tight", r"([(\[])\s+", r"\1", "No space after ( or ["
)
_CLOSE_BRACKET_RULE = RegexRule(
    "close-bracket-tight", r"\s+([)\]])", r"\1", "No space before ) or ]"
)
_WHITESPACE_RULE = WhitespaceRule()

JS_OPERATORS = (
    ">>>=", "===", "!==", "**=", "<<=", ">>=", ">>>", "&&=", "||=", "??=",
    "=>", "==", "!=", "<=", ">=", "&&", "||", "??", "?.", "++", "--",
    "+=", "-=", "*=", "/=", "%=", "&=", "|=", "^=", "**", "<<", ">>",
)
C_OPERATORS = (
    "==", "!=", "<=", ">=", "&&", "||", "++", "--", "+=", "-=", "*=", "/=",
    "%=", "&=", "|=", "^=", "->", "::",
)
PYTHON_OPERATORS = (
    "**=", "//=", ">>=", "<<=", "==", "!=", "<=", ">=", "->", ":=", "+=",
    "-=", "*=", "/=", "%=", "&=", "|=", "^=", "@=", "**", "//", "<<", ">>",
)

JS_UNARY_KEYWORDS = (
    "return", "case", "typeof", "void", "delete", "throw", "yield", "await", "in", "of",
)
C_UNARY_KEYWORDS = ("return", "case", "throw", "sizeof", "else")
PYTHON_UNARY_KEYWORDS = (
    "return", "yield", "in", "and", "or", "not", "if", "elif", "else", "while", "assert",
    "lambda",
)
PYTHON_KEYWORDS = (
    "and", "as", "assert", "async", "await", "del", "elif", "else", "except", "for",
    "from", "global", "if", "import", "in", "is", "lambda", "nonlocal", "not", "or",
    "raise", "return", "while", "with", "yield", "match", "case",
)
C_CONTROL_KEYWORDS = ("if", "for", "while", "switch", "catch", "return", "synchronized")


def _recombine_rules(prefix: str, joins: Iterable[Tuple[str, str]]) -> Tuple[RegexRule, ...]:
    rules = [
        RegexRule(
            f"{prefix}-strict-equality",
            r"([=!])\s+=\s+=",
            r"\1==",
            "Re-join '= = =' and '! = =' fragments",
        ),
        RegexRule(
            f"{prefix}-compound-assignment",
            r"([=!<>+\-*/%&|^])\s+=(?![=>])",
            r"\1=",
            "Re-join '= =', '! =', '< =', '+ =' and similar fragments",
        ),
    ]
    for index, (pattern, replacement) in enumerate(joins):
        rules.append(
            RegexRule(
                f"{prefix}-join-{index}",
                pattern,
                replacement,
                f"Re-join '{replacement}' fragments",
            )
        )
    return tuple(rules)


JS_RULES: Tuple[CleanupRule, ...] = (
    _operator_rule("js-operator-spacing", JS_OPERATORS, r"=+\-*/%&|^<>!?:"),
    *_recombine_rules(
        "js",
        (
            (r"&\s+&", "&&"),
            (r"\|\s+\|", "||"),
            (r"=\s+>", "=>"),
            (r"\?\s+\?", "??"),
            (r"(?<=\w)\s+\?\s+:", "?:"),
        ),
    ),
    _WHITESPACE_RULE,
    _POSTFIX_RULE,
    _unary_rule("js-unary", r"\+\+|--|[-+!~]", JS_UNARY_KEYWORDS),
    RegexRule("js-optional-chaining", r"\s*\?\.\s*", "?.", "Optional chaining is tight"),
    _COMMA_RULE,
    _SEMICOLON_RULE,
    _OPEN_BRACKET_RULE,
    _CLOSE_BRACKET_RULE,
    RegexRule("js-empty-braces", r"\{\s+\}", "{}", "Empty braces are tight"),
    RegexRule("js-open-brace", r"\{\s*(?=[^\s}])", "{ ", "One space after {"),
    RegexRule("js-close-brace", r"(?<=[^\s{])\s*\}", " }", "One space before }"),
    RegexRule(
        "js-keyword-paren",
        r"\b(if|for|while|switch|catch|with)\s*\(",
        r"\1 (",
        "Control keywords are followed by one space",
    ),
    ObjectColonRule(),
    _WHITESPACE_RULE,
)

C_RULES: Tuple[CleanupRule, ...] = (
    _operator_rule("c-operator-spacing", C_OPERATORS, r"=+\-*/%&|^<>!?:"),
    *_recombine_rules(
        "c",
        (
            (r"&\s+&", "&&"),
            (r"\|\s+\|", "||"),
            (r"-\s+>", "->"),
            (r":\s+:", "::"),
        ),
    ),
    _WHITESPACE_RULE,
    _POSTFIX_RULE,
    _unary_rule("c-unary", r"\+\+|--|[-+!~*&]", C_UNARY_KEYWORDS),
    RegexRule("c-scope-tight", r"\s*::\s*", "::", "Scope resolution is tight"),
    _COMMA_RULE,
    _SEMICOLON_RULE,
    _OPEN_BRACKET_RULE,
    _CLOSE_BRACKET_RULE,
    RegexRule("c-empty-brackets", r"\[\s*\]", "[]", "Empty brackets are tight"),
    RegexRule(
        "c-call-tight",
        r"\b(?!(?:%s)\b)(\w+)\s+\(" % "|".join(C_CONTROL_KEYWORDS),
        r"\1(",
        "No space between a name and its argument list",
    ),
    RegexRule(
        "c-keyword-paren",
        r"\b(%s)\s*\(" % "|".join(C_CONTROL_KEYWORDS),
        r"\1 (",
        "Control keywords are followed by one space",
    ),
    RegexRule("c-open-brace-before", r"\s*\{", " {", "One space before {"),
    RegexRule("c-empty-braces", r"\{\s+\}", "{}", "Empty braces are tight"),
    RegexRule("c-open-brace-after", r"\{\s*(?=[^\s}])", "{ ", "One space after {"),
    RegexRule("c-close-brace", r"(?<=[^\s{])\s*\}", " }", "One space before }"),
    _WHITESPACE_RULE,
    RegexRule("c-label-colon", r"\s+:$", ":", "Labels end in a tight colon"),
)

C_POINTER_RULES: Tuple[CleanupRule, ...] = (
    RegexRule("c-member-arrow", r"\s*->\s*", "->", "Pointer member access is tight"),
)

PYTHON_RULES: Tuple[CleanupRule, ...] = (
    _operator_rule("python-operator-spacing", PYTHON_OPERATORS, r"=+\-*/%&|^<>:"),
    *_recombine_rules(
        "python",
        (
            (r"-\s+>", "->"),
            (r":\s+=", ":="),
            (r"\*\s+\*", "**"),
            (r"/\s+/", "//"),
            (r"<\s+<", "<<"),
            (r">\s+>", ">>"),
        ),
    ),
    _WHITESPACE_RULE,
    _unary_rule("python-unary", r"\*\*|[-+~*]", PYTHON_UNARY_KEYWORDS),
    RegexRule("python-colon", r"\s*:(?!=)\s*", ": ", "One space after a colon, none before"),
    _COMMA_RULE,
    _SEMICOLON_RULE,
    RegexRule(
        "python-call-tight",
        r"\b(?!(?:%s)\b)(\w+)\s+\(" % "|".join(PYTHON_KEYWORDS),
        r"\1(",
        "No space between a callable and its argument list",
    ),
    RegexRule("python-open-bracket", r"([(\[{])\s+", r"\1", "No space after an opening bracket"),
    RegexRule("python-close-bracket", r"\s+([)\]}])", r"\1", "No space before a closing bracket"),
    _WHITESPACE_RULE,
    SliceColonRule(),
    KeywordArgumentRule(),
)

HTML_RULES: Tuple[CleanupRule, ...] = (
    RegexRule("html-attribute-equals", r"\s*=\s*", "=", "Attribute '=' is tight"),
    RegexRule("html-tag-name", r"<([a-zA-Z0-9]+)\s+", r"<\1 ", "One space after a tag name"),
    RegexRule("html-closing-tag", r"<\s*/\s*", "</", "Closing tags are tight"),
    RegexRule("html-self-closing", r"\s+/>", " />", "One space before />"),
    _WHITESPACE_RULE,
)

CSS_RULES: Tuple[CleanupRule, ...] = (
    DeclarationColonRule(),
    RegexRule("css-semicolon", r"\s*;\s*", "; ", "One space after ;"),
    RegexRule("css-open-brace", r"\s*\{\s*", " {", "One space before {, none after"),
    RegexRule("css-close-brace", r"\s*\}\s*", "}", "No space around }"),
    _COMMA_RULE,
    _WHITESPACE_RULE,
)

FAMILY_RULES: Dict[LanguageFamily, Tuple[CleanupRule, ...]] = {
    LanguageFamily.JAVASCRIPT: JS_RULES,
    LanguageFamily.C_FAMILY: C_RULES,
    LanguageFamily.PYTHON: PYTHON_RULES,
    LanguageFamily.HTML: HTML_RULES,
    LanguageFamily.CSS: CSS_RULES,
}


def rules_for(family: LanguageFamily, language_id: Optional[str] = None) -> Tuple[CleanupRule, ...]:
    rules = FAMILY_RULES[family]
    if family is LanguageFamily.C_FAMILY and language_id in ("c", "cpp"):
        return rules[:-2] + C_POINTER_RULES + rules[-2:]
    return rules


def apply_rules(text: str, rules: Iterable[CleanupRule]) -> str:
    for rule in rules:
        text = rule.apply(text)
    return text


_COMMENT_LEAD_RE = re.compile(r"^(//|#)\s+")
_RUN_RE = re.compile(r"\s{2,}")


def normalize_comment(comment: str) -> str:
    """Exactly one space after a leading ``//`` or ``#``; inner runs collapse."""
    text = _COMMENT_LEAD_RE.sub(lambda match: match.group(1) + " ", comment.strip())
    return _RUN_RE.sub(" ", text)


def clean_code(
    code: str,
    family: LanguageFamily,
    language_id: Optional[str] = None,
) -> str:
    """Clean a comment-free code fragment."""
    if not code.strip():
        return ""
    masked, literals = mask_literals(code.strip(), family, language_id)
    cleaned = apply_rules(masked, rules_for(family, language_id))
    return unmask_literals(cleaned, literals)


def clean_line(
    trimmed: str,
    family: LanguageFamily,
    language_id: Optional[str] = None,
) -> str:
    """
    Clean one trimmed line: its code, then its trailing comment.

    Whole-line comments are only normalised. HTML comment lines and CSS
    comment lines are returned unchanged.
    """
    text = trimmed.strip()
    if not text:
        return ""

    if family is LanguageFamily.HTML:
        if text.startswith("<!--") or "-->" in text:
            return text
        return clean_code(text, family, language_id)

    if family is LanguageFamily.CSS:
        if text.startswith("/*") or text.endswith("*/"):
            return text
        return clean_code(text, family, language_id)

    if family is not LanguageFamily.PYTHON and is_block_comment_line(text):
        return normalize_comment(text)

    segments = split_comment(text, family)
    code = clean_code(segments.code, family, language_id)
    if not segments.has_comment:
        return code
    comment = normalize_comment(segments.comment)
    return f"{code} {comment}" if code else comment


__all__ = [
    "CleanupRule",
    "RegexRule",
    "WhitespaceRule",
    "ObjectColonRule",
    "DeclarationColonRule",
    "SliceColonRule",
    "KeywordArgumentRule",
    "JS_RULES",
    "C_RULES",
    "C_POINTER_RULES",
    "PYTHON_RULES",
    "HTML_RULES",
    "CSS_RULES",
    "FAMILY_RULES",
    "rules_for",
    "apply_rules",
    "normalize_comment",
    "clean_code",
    "clean_line",
]
