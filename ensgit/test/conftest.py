from __future__ import annotations

import subprocess
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path

import pytest

from ensgit.platform.paths import CENTRAL_CONFIG_ENV, USER_CONFIG_ENV, clear_caches


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point both configuration files at (absent) paths under tmp_path."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv(CENTRAL_CONFIG_ENV, str(config_dir / "central.json"))
    monkeypatch.setenv(USER_CONFIG_ENV, str(config_dir / "user.json"))
    clear_caches()
    yield config_dir
    clear_caches()


def _git(cwd: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=False,
    )
    if result.returncode != 0:
        raise RuntimeError(
            f"git {' '.join(args)} failed (code {result.returncode}): {result.stderr.strip()}"
        )
    return result.stdout.strip()


@dataclass
class RemoteRepo:
    """A bare repository plus the seed working copy used to push to it."""

    url: str
    seed: Path

    def commit(self, filename: str, content: str, *, branch: str = "main") -> None:
        _git(self.seed, "checkout", branch)
        (self.seed / filename).write_text(content, encoding="utf-8")
        _git(self.seed, "add", filename)
        _git(self.seed, "commit", "-m", f"update {filename}")
        _git(self.seed, "push", "origin", branch)


@pytest.fixture
def make_remote(tmp_path: Path) -> Callable[..., RemoteRepo]:
    """Factory for bare repos with a commit on main and optional extra branches."""
    base = tmp_path / "remotes"
    base.mkdir()

    def factory(name: str, branches: tuple[str, ...] = ()) -> RemoteRepo:
        remote = base / f"{name}.git"
        seed = base / f"{name}-seed"

        _git(base, "init", "--bare", "--initial-branch=main", str(remote))

        seed.mkdir()
        _git(seed, "init", "-b", "main")
        _git(seed, "config", "user.email", "test@example.com")
        _git(seed, "config", "user.name", "Test")

        (seed / "README").write_text(f"{name}\n", encoding="utf-8")
        _git(seed, "add", "README")
        _git(seed, "commit", "-m", "init")

        url = remote.as_uri()
        _git(seed, "remote", "add", "origin", url)
        _git(seed, "push", "-u", "origin", "main")
        for branch in branches:
            _git(seed, "branch", branch, "main")
            _git(seed, "push", "-u", "origin", branch)

        return RemoteRepo(url=url, seed=seed)

    return factory


@pytest.fixture
def branch_of() -> Callable[[Path], str]:
    """Name of the branch checked out in a working copy."""

    def current(path: Path) -> str:
        return _git(path, "rev-parse", "--abbrev-ref", "HEAD")

    return current
