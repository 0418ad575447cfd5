"""Git repository abstraction.

The version-control operations the dispatcher needs, run against an
explicit repository path (``git -C <path>``). All operations block until
git exits and return Result values; there are no timeouts or retries.

Usage:
    repo = Repository(root / "ensembl")
    match repo.checkout_tracking("release/110"):
        case Ok(_):
            print("switched")
        case Err(e):
            print(f"checkout failed: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ensgit.core.result import Err, Ok, Result
from ensgit.platform.process import ProcessError, run, run_streaming

__all__ = [
    "DEFAULT_REMOTE",
    "GitError",
    "Repository",
]

DEFAULT_REMOTE = "origin"


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git sub-command that failed (e.g. "pull origin")
        message: Error message, git's stderr when it was captured
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


def _git_error(command: str, error: ProcessError, fallback: str) -> GitError:
    message = error.stderr.strip() or error.stdout.strip() or fallback
    return GitError(command=command, message=message, returncode=error.returncode)


class Repository:
    """A git working copy at ``path``."""

    def __init__(self, path: Path) -> None:
        self.path = path

    @property
    def name(self) -> str:
        return self.path.name

    def exists(self) -> bool:
        """True if the working copy directory exists."""
        return self.path.is_dir()

    @classmethod
    def clone(
        cls,
        url: str,
        dest: Path,
        *,
        branch: str | None = None,
    ) -> Result[Repository, GitError]:
        """Clone ``url`` into ``dest``.

        Runs ``git clone [--branch B] <url> <dest name>`` from dest's parent
        directory; git's progress output streams to the terminal.
        """
        cmd = ["git", "clone"]
        if branch:
            cmd.extend(["--branch", branch])
        cmd.extend([url, dest.name])

        result = run_streaming(cmd, cwd=dest.parent)
        if isinstance(result, Err):
            return Err(_git_error("clone", result.error, f"clone of {url} failed"))
        return Ok(cls(dest))

    def has_local_branch(self, branch: str) -> bool:
        result = self._run(["show-ref", "--verify", "--quiet", f"refs/heads/{branch}"])
        return isinstance(result, Ok)

    def checkout_tracking(
        self,
        branch: str,
        remote: str = DEFAULT_REMOTE,
    ) -> Result[str, GitError]:
        """Switch to ``branch``, creating it to track ``remote/branch`` if needed.

        Returns:
            Ok(output) on success
            Err(GitError) if the branch exists neither locally nor on the remote
        """
        if self.has_local_branch(branch):
            args = ["checkout", branch]
        else:
            args = ["checkout", "--track", "-b", branch, f"{remote}/{branch}"]

        result = self._run(args)
        match result:
            case Err(e):
                return Err(_git_error(f"checkout {branch}", e, f"checkout of {branch} failed"))
            case Ok(stdout):
                return Ok(stdout.strip())

    def pull(self, remote: str = DEFAULT_REMOTE) -> Result[None, GitError]:
        """Pull the current branch from ``remote``."""
        result = self._stream(["pull", remote])
        if isinstance(result, Err):
            return Err(_git_error(f"pull {remote}", result.error, "pull failed"))
        return Ok(None)

    def fetch(self) -> Result[None, GitError]:
        """Fetch from the default remote(s)."""
        result = self._stream(["fetch"])
        if isinstance(result, Err):
            return Err(_git_error("fetch", result.error, "fetch failed"))
        return Ok(None)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        return run(["git", "-C", str(self.path), *args], cwd=self.path)

    def _stream(self, args: list[str]) -> Result[None, ProcessError]:
        return run_streaming(["git", "-C", str(self.path), *args], cwd=self.path)
