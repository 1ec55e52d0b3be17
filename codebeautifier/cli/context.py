"""
CLI context and workspace resolution.

This module provides the CLIContext dataclass shared by every command of
one invocation.
"""

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..config import WorkspaceConfig, load_workspace_config
from ..errors import FormattingConfigError
from .errors import CLIConfigError, CLIFileNotFoundError


@dataclass
class CLIContext:
    """
    Shared context resolved from workspace configuration.

    Attributes:
        workspace_root: Root directory of the workspace
        config: Parsed workspace configuration
    """

    workspace_root: Path
    config: WorkspaceConfig


def build_cli_context(workspace: Optional[str], config_path: Optional[str]) -> CLIContext:
    """
    Resolve the workspace root and load its configuration.

    Raises:
        CLIFileNotFoundError: If an explicit config path does not exist
        CLIConfigError: If the configuration file is invalid
    """
    workspace_root = Path(workspace).resolve() if workspace else Path.cwd()
    explicit = Path(config_path).resolve() if config_path else None
    if explicit is not None and not explicit.exists():
        raise CLIFileNotFoundError(
            f"Configuration file not found: {config_path}",
            hint="Check the --config path",
            context={"path": str(explicit)},
        )
    try:
        config = load_workspace_config(workspace_root, explicit)
    except FormattingConfigError as exc:
        raise CLIConfigError(exc.format(), hint=exc.hint, context={"path": exc.path}) from exc
    return CLIContext(workspace_root=workspace_root, config=config)


def get_cli_context(args: argparse.Namespace) -> CLIContext:
    """
    Retrieve CLIContext from parsed arguments.

    Raises:
        CLIConfigError: If context was not initialized
    """
    ctx = getattr(args, "cli_context", None)
    if ctx is None:
        raise CLIConfigError(
            "CLI context was not initialized before command execution",
            hint="This is an internal error - please report it",
            code="CLI_CONTEXT_NOT_INITIALIZED"
        )
    return ctx
