"""Workspace configuration support for the codebeautifier CLI."""

from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass, field
from fnmatch import fnmatch
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .errors import FormattingConfigError
from .formatting.core import FormattingOptions, IndentStyle
from .formatting.languages import LANGUAGE_FAMILIES, language_for_path, normalize_language_id

CONFIG_FILE_NAMES = ("codebeautifier.toml", ".codebeautifierrc")


@dataclass
class FormattingDefaults:
    """Formatting values applied when the command line does not override them."""

    insert_spaces: bool = True
    tab_size: int = 4
    insert_final_newline: bool = False


@dataclass
class WorkspaceConfig:
    """Resolved workspace configuration."""

    root: Path
    formatting: FormattingDefaults = field(default_factory=FormattingDefaults)
    languages: Dict[str, str] = field(default_factory=dict)
    exclude: List[str] = field(default_factory=list)
    source: Optional[Path] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    def language_for(self, path: Union[str, Path]) -> Optional[str]:
        return language_for_path(path, self.languages)

    def is_excluded(self, path: Path) -> bool:
        try:
            relative = path.resolve().relative_to(self.root).as_posix()
        except ValueError:
            relative = path.as_posix()
        return any(
            fnmatch(relative, pattern) or fnmatch(path.name, pattern)
            for pattern in self.exclude
        )

    def formatting_options(
        self,
        *,
        tab_size: Optional[int] = None,
        use_tabs: Optional[bool] = None,
    ) -> FormattingOptions:
        insert_spaces = self.formatting.insert_spaces if use_tabs is None else not use_tabs
        return FormattingOptions(
            indent_style=IndentStyle.SPACES if insert_spaces else IndentStyle.TABS,
            tab_size=self.formatting.tab_size if tab_size is None else tab_size,
            insert_final_newline=self.formatting.insert_final_newline,
        )


def _read_json_config(path: Path) -> Dict[str, Any]:
    content = path.read_text(encoding="utf-8")
    return json.loads(content)


def _read_toml_config(path: Path) -> Dict[str, Any]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _expect_bool(section: Dict[str, Any], key: str, default: bool, path: Path) -> bool:
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise FormattingConfigError(
            f"'{key}' must be true or false, got {value!r}",
            path=str(path),
            hint=f"Set [formatting] {key} = true or false",
        )
    return value


def _parse_formatting(data: Dict[str, Any], path: Path) -> FormattingDefaults:
    section = data.get("formatting") or {}
    if not isinstance(section, dict):
        raise FormattingConfigError("[formatting] must be a table", path=str(path))
    tab_size = section.get("tab_size", 4)
    if isinstance(tab_size, bool) or not isinstance(tab_size, int) or tab_size < 1:
        raise FormattingConfigError(
            f"'tab_size' must be a positive integer, got {tab_size!r}",
            path=str(path),
        )
    return FormattingDefaults(
        insert_spaces=_expect_bool(section, "insert_spaces", True, path),
        tab_size=tab_size,
        insert_final_newline=_expect_bool(section, "insert_final_newline", False, path),
    )


def _parse_languages(data: Dict[str, Any], path: Path) -> Dict[str, str]:
    section = data.get("languages") or {}
    if not isinstance(section, dict):
        raise FormattingConfigError("[languages] must be a table", path=str(path))
    languages: Dict[str, str] = {}
    for suffix, language_id in section.items():
        language = normalize_language_id(str(language_id))
        if language not in LANGUAGE_FAMILIES:
            raise FormattingConfigError(
                f"Unsupported language '{language_id}' for suffix '{suffix}'",
                path=str(path),
                hint=f"Use one of: {', '.join(LANGUAGE_FAMILIES)}",
            )
        key = suffix.lower()
        if not key.startswith("."):
            key = f".{key}"
        languages[key] = language
    return languages


def _parse_exclude(data: Dict[str, Any]) -> List[str]:
    section = data.get("exclude") or []
    if isinstance(section, str):
        return [section]
    if isinstance(section, (list, tuple)):
        return [str(entry) for entry in section]
    return []


def locate_config_file(root: Path, explicit: Optional[Path] = None) -> Optional[Path]:
    if explicit is not None:
        return explicit if explicit.exists() else None
    for candidate in CONFIG_FILE_NAMES:
        path = root / candidate
        if path.exists():
            return path
    return None


def load_workspace_config(root: Path, explicit: Optional[Path] = None) -> WorkspaceConfig:
    """
    Load ``codebeautifier.toml`` or ``.codebeautifierrc`` from ``root``.

    Raises:
        FormattingConfigError: If the file cannot be parsed or holds invalid values.
    """
    root = root.resolve()
    config_path = locate_config_file(root, explicit)
    if config_path is None:
        return WorkspaceConfig(root=root)

    try:
        if config_path.suffix == ".toml":
            data = _read_toml_config(config_path)
        else:
            data = _read_json_config(config_path)
    except (tomllib.TOMLDecodeError, json.JSONDecodeError) as exc:
        raise FormattingConfigError(
            f"Could not parse configuration: {exc}",
            path=str(config_path),
        ) from exc

    return WorkspaceConfig(
        root=root,
        formatting=_parse_formatting(data, config_path),
        languages=_parse_languages(data, config_path),
        exclude=_parse_exclude(data),
        source=config_path,
        raw=data,
    )


__all__ = [
    "CONFIG_FILE_NAMES",
    "FormattingDefaults",
    "WorkspaceConfig",
    "locate_config_file",
    "load_workspace_config",
]
