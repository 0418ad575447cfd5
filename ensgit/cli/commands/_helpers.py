"""Shared helpers for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import click


def usage_error(message: str, hint: str | None = None) -> NoReturn:
    """Abort through Click's usage-error path (prints usage, exit code 2)."""
    if hint:
        message = f"{message}\n{hint}"
    raise click.UsageError(message)


def normalize_groups(names: list[str] | None) -> list[str]:
    """Lowercase group names, dropping blanks and duplicates but keeping order."""
    seen: set[str] = set()
    out: list[str] = []
    for raw in names or []:
        name = raw.strip().lower()
        if name and name not in seen:
            seen.add(name)
            out.append(name)
    return out


def resolve_root(directory: Path | None) -> Path:
    """Working root for module directories (default: current directory)."""
    if directory is None:
        return Path.cwd()
    try:
        root = directory.expanduser().resolve()
    except OSError as e:
        usage_error(f"invalid --dir: {e}")
    if not root.is_dir():
        usage_error(f"--dir '{directory}' is not a directory")
    return root
