from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Literal

from ensgit.core.errors import ErrorCode
from ensgit.core.groups import Group, ModuleEntry
from ensgit.core.result import Err, Ok, Result
from ensgit.git.repository import DEFAULT_REMOTE, GitError, Repository
from ensgit.output.console import ConsoleProtocol, Style

# -----------------------------------------------------------------------------
# Error Types
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class DispatchError:
    """The requested action cannot start at all."""

    kind: Literal["missing_branch", "branch_not_supported"]
    message: str
    hint: str | None = None


# -----------------------------------------------------------------------------
# Data Types
# -----------------------------------------------------------------------------


class Action(Enum):
    CLONE = "clone"
    CHECKOUT = "checkout"
    PULL = "pull"
    FETCH = "fetch"

    def __str__(self) -> str:
        return self.value

    @property
    def needs_existing_dir(self) -> bool:
        return self is not Action.CLONE

    @property
    def accepts_branch(self) -> bool:
        return self is not Action.FETCH

    @property
    def requires_branch(self) -> bool:
        return self is Action.CHECKOUT


class ModuleState(Enum):
    PENDING = "pending"
    SKIPPED = "skipped"
    ATTEMPTED = "attempted"


@dataclass(frozen=True, slots=True)
class ModuleOutcome:
    """What happened to one module.

    ``error`` is only set for ATTEMPTED modules whose git operation failed;
    ``skip_reason`` only for SKIPPED modules.
    """

    group: str
    module: str
    path: Path
    state: ModuleState
    error: GitError | None = None
    skip_reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.state is ModuleState.ATTEMPTED and self.error is None

    @property
    def failed(self) -> bool:
        return self.state is ModuleState.ATTEMPTED and self.error is not None

    @property
    def skipped(self) -> bool:
        return self.state is ModuleState.SKIPPED


def _empty_outcomes() -> list[ModuleOutcome]:
    return []


@dataclass
class DispatchReport:
    action: Action
    outcomes: list[ModuleOutcome] = field(default_factory=_empty_outcomes)

    @property
    def attempted(self) -> list[ModuleOutcome]:
        return [o for o in self.outcomes if o.state is ModuleState.ATTEMPTED]

    @property
    def skipped(self) -> list[ModuleOutcome]:
        return [o for o in self.outcomes if o.skipped]

    @property
    def failed(self) -> list[ModuleOutcome]:
        return [o for o in self.outcomes if o.failed]

    @property
    def exit_code(self) -> ErrorCode:
        """ACTION_FAILED if any attempted module failed; skips do not count."""
        return ErrorCode.ACTION_FAILED if self.failed else ErrorCode.OK

    def summary(self) -> str:
        ok = len(self.attempted) - len(self.failed)
        return f"{self.action}: {ok} ok, {len(self.failed)} failed, {len(self.skipped)} skipped"


# -----------------------------------------------------------------------------
# Service
# -----------------------------------------------------------------------------


class DispatchService:
    """Apply one action to every module of the requested groups.

    Policy:
    - Modules are processed one at a time in sorted name order.
    - A module whose directory precondition is not met is skipped with a
      warning; a module whose git operation fails is reported. Neither stops
      the remaining modules or groups.
    - Each module's directory is handed to git explicitly; the process
      working directory is never changed.
    """

    def __init__(
        self,
        *,
        root: Path,
        console: ConsoleProtocol,
        remote: str = DEFAULT_REMOTE,
    ) -> None:
        self._root = root
        self._console = console
        self._remote = remote

    def run(
        self,
        action: Action,
        groups: Iterable[Group],
        *,
        branch: str | None = None,
    ) -> Result[DispatchReport, DispatchError]:
        if action.requires_branch and not branch:
            return Err(
                DispatchError(
                    kind="missing_branch",
                    message=f"{action} requires a branch",
                    hint="pass --branch NAME",
                )
            )
        if branch and not action.accepts_branch:
            return Err(
                DispatchError(
                    kind="branch_not_supported",
                    message=f"{action} does not take a branch",
                )
            )

        report = DispatchReport(action=action)
        seen: set[str] = set()
        for group in groups:
            if group.name in seen:
                continue
            seen.add(group.name)

            self._console.header(f"{action} {group.name}")
            for entry in group.entries():
                outcome = self._dispatch_module(action, group.name, entry, branch)
                report.outcomes.append(outcome)

        return Ok(report)

    def _dispatch_module(
        self,
        action: Action,
        group: str,
        entry: ModuleEntry,
        branch: str | None,
    ) -> ModuleOutcome:
        dest = self._root / entry.name
        repo = Repository(dest)

        skip_reason = self._precondition_failure(action, repo)
        if skip_reason is not None:
            self._console.warning(f"skip {entry.name}: {skip_reason}")
            return ModuleOutcome(
                group=group,
                module=entry.name,
                path=dest,
                state=ModuleState.SKIPPED,
                skip_reason=skip_reason,
            )

        match action:
            case Action.CLONE:
                error = self._clone(entry, dest, branch)
            case Action.CHECKOUT:
                assert branch is not None
                error = self._checkout(repo, branch)
            case Action.PULL:
                error = self._pull(repo, branch)
            case Action.FETCH:
                error = self._fetch(repo)

        if error is None:
            self._console.success(entry.name)
        else:
            self._console.error(f"{entry.name}: git {error.command} failed (exit {error.returncode})")
            if error.message:
                self._console.print(error.message, Style.DIM)

        return ModuleOutcome(
            group=group,
            module=entry.name,
            path=dest,
            state=ModuleState.ATTEMPTED,
            error=error,
        )

    def _precondition_failure(self, action: Action, repo: Repository) -> str | None:
        if action.needs_existing_dir:
            if not repo.exists():
                return f"directory {repo.path} does not exist"
        elif repo.path.exists():
            return f"directory {repo.path} already exists"
        return None

    def _clone(self, entry: ModuleEntry, dest: Path, branch: str | None) -> GitError | None:
        self._console.print(f"clone {entry.url} -> {dest}", Style.DIM)
        match Repository.clone(entry.url, dest, branch=branch):
            case Err(e):
                return e
            case Ok(_):
                return None

    def _checkout(self, repo: Repository, branch: str) -> GitError | None:
        self._console.print(f"checkout {repo.name} {branch} ({self._remote}/{branch})", Style.DIM)
        match repo.checkout_tracking(branch, self._remote):
            case Err(e):
                return e
            case Ok(_):
                return None

    def _pull(self, repo: Repository, branch: str | None) -> GitError | None:
        if branch:
            error = self._checkout(repo, branch)
            if error is not None:
                return error

        self._console.print(f"pull {repo.name} from {self._remote}", Style.DIM)
        match repo.pull(self._remote):
            case Err(e):
                return e
            case Ok(_):
                return None

    def _fetch(self, repo: Repository) -> GitError | None:
        self._console.print(f"fetch {repo.name}", Style.DIM)
        match repo.fetch():
            case Err(e):
                return e
            case Ok(_):
                return None
