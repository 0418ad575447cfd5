"""The git-ensembl command: act on groups of Ensembl repositories."""

from __future__ import annotations

from pathlib import Path

import typer

from ensgit import __version__
from ensgit.cli.commands._helpers import normalize_groups, resolve_root, usage_error
from ensgit.cli.context import build_context
from ensgit.core.errors import ErrorCode
from ensgit.core.groups import Group, format_listing
from ensgit.core.result import Err, Ok
from ensgit.output.console import Style
from ensgit.services.dispatch import Action, DispatchService

_ACTION_FLAGS = "--clone, --checkout, --pull, --fetch or --list"


def _selected_action(
    *,
    clone: bool,
    checkout: bool,
    pull: bool,
    fetch: bool,
    list_groups: bool,
) -> Action | None:
    """The single requested action; None means --list."""
    chosen = [
        action
        for action, flag in (
            (Action.CLONE, clone),
            (Action.CHECKOUT, checkout),
            (Action.PULL, pull),
            (Action.FETCH, fetch),
            (None, list_groups),
        )
        if flag
    ]
    if len(chosen) != 1:
        usage_error(f"exactly one of {_ACTION_FLAGS} is required")
    return chosen[0]


def ensembl(
    groups: list[str] | None = typer.Argument(
        None,
        help="Groups to act on (case-insensitive). Required unless --list is given.",
        show_default=False,
    ),
    clone: bool = typer.Option(False, "--clone", help="Clone every module of the groups."),
    checkout: bool = typer.Option(
        False, "--checkout", help="Switch every module to --branch, tracking origin."
    ),
    pull: bool = typer.Option(
        False, "--pull", help="Pull every module from origin (after switching to --branch if given)."
    ),
    fetch: bool = typer.Option(False, "--fetch", help="Fetch every module."),
    list_groups: bool = typer.Option(False, "--list", help="List known groups and their modules."),
    branch: str | None = typer.Option(
        None, "--branch", help="Branch for --checkout (required), --pull or --clone."
    ),
    directory: Path | None = typer.Option(
        None, "--dir", help="Directory holding the module checkouts (default: current directory)."
    ),
    https: bool = typer.Option(
        False, "--https", help="Use HTTPS remotes for built-in groups instead of SSH."
    ),
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    """Clone, check out, pull or fetch groups of Ensembl repositories."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=int(ErrorCode.OK))

    action = _selected_action(
        clone=clone,
        checkout=checkout,
        pull=pull,
        fetch=fetch,
        list_groups=list_groups,
    )
    names = normalize_groups(groups)

    if action is None:
        if branch:
            usage_error("--branch cannot be used with --list")
    else:
        if not names:
            usage_error(f"at least one group is required with --{action}")
        if action.requires_branch and not branch:
            usage_error(f"--{action} requires --branch")
        if branch and not action.accepts_branch:
            usage_error(f"--branch cannot be used with --{action}")

    root = resolve_root(directory)
    ctx = build_context(root=root, https=https)

    selected: list[Group] = []
    for name in names:
        match ctx.registry.modules_for(name):
            case Err(unknown):
                usage_error(unknown.message, unknown.hint)
            case Ok(_):
                group = ctx.registry.get(name)
                assert group is not None
                selected.append(group)

    if action is None:
        listings = ctx.registry.list_groups()
        if names:
            listings = [listing for listing in listings if listing.name in names]
        for line in format_listing(listings):
            ctx.console.print(line)
        return

    service = DispatchService(root=ctx.root, console=ctx.console)
    match service.run(action, selected, branch=branch):
        case Err(e):
            usage_error(e.message, e.hint)
        case Ok(report):
            ctx.console.print("")
            ctx.console.print(report.summary(), Style.DIM)
            if report.exit_code != ErrorCode.OK:
                raise typer.Exit(code=int(report.exit_code))
