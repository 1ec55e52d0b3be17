"""
Line-oriented source code beautifier.

The package reformats source text for javascript, typescript, json, html,
css, python, java, c and cpp without parsing it.  Each line is cleaned
with ordered regular-expression rules and then re-indented, either by
scaling its original indentation or by tracking brace depth.

The code is organised into several modules:

* ``formatting`` – the formatting engine: comment/literal scanners,
  per-family cleanup rules, indentation passes and blank-line
  normalisation.  ``format_code`` is the pure entry point.
* ``config`` – loading of ``codebeautifier.toml`` workspace settings.
* ``cli`` – the ``codebeautifier`` command line interface.
* ``lsp`` – a pygls language server exposing document formatting and
  the ``codeBeautifier.beautify`` command to editors.
"""

__version__ = "0.1.0"

from .errors import BeautifierError, FormattingConfigError, UnsupportedLanguageError
from .formatting import CodeFormatter, FormattedResult, FormattingOptions, format_code

__all__ = [
    "__version__",
    "BeautifierError",
    "CodeFormatter",
    "FormattedResult",
    "FormattingConfigError",
    "FormattingOptions",
    "UnsupportedLanguageError",
    "format_code",
]
