"""Git operations used by the dispatcher."""

from ensgit.git.repository import DEFAULT_REMOTE, GitError, Repository

__all__ = [
    "DEFAULT_REMOTE",
    "GitError",
    "Repository",
]
