"""Preset formatting options."""

from __future__ import annotations

from .core import FormattingOptions, IndentStyle


class DefaultFormattingRules:
    """Named option presets for the CLI and tests."""

    @classmethod
    def standard(cls) -> FormattingOptions:
        """Four spaces per level."""
        return FormattingOptions(
            indent_style=IndentStyle.SPACES,
            tab_size=4,
            insert_final_newline=False,
        )

    @classmethod
    def compact(cls) -> FormattingOptions:
        """Two spaces per level, matching the width-ratio unit of most families."""
        return FormattingOptions(
            indent_style=IndentStyle.SPACES,
            tab_size=2,
            insert_final_newline=False,
        )

    @classmethod
    def tabs(cls) -> FormattingOptions:
        """One tab per level."""
        return FormattingOptions(
            indent_style=IndentStyle.TABS,
            tab_size=4,
            insert_final_newline=False,
        )
