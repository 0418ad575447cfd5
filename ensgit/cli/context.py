from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from ensgit.core.config import load_groups
from ensgit.core.errors import ErrorCode
from ensgit.core.groups import GroupRegistry
from ensgit.core.result import Err
from ensgit.output.console import ConsoleProtocol, RichConsole, Style
from ensgit.platform.paths import central_config_path, user_config_path


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    registry: GroupRegistry
    console: ConsoleProtocol


def build_context(*, root: Path, https: bool) -> CLIContext:
    """Read the configuration layers once and bundle what commands need."""
    console = RichConsole()

    result = load_groups(
        https=https,
        central_path=central_config_path(),
        user_path=user_config_path(),
    )
    if isinstance(result, Err):
        error = result.error
        console.error(f"invalid configuration: {error}")
        if error.source is not None:
            console.print(f"hint: fix or remove the {error.source} configuration file", Style.DIM)
        raise typer.Exit(code=int(ErrorCode.CONFIG_ERROR))

    return CLIContext(root=root, registry=result.value, console=console)
