"""Well-known configuration file locations.

Both files are optional. Environment variables take precedence so a site
install (or a test) can point at different files without touching the
defaults:

  GIT_ENSEMBL_CENTRAL_CONFIG  central file shared by all users of a machine
  GIT_ENSEMBL_USER_CONFIG     per-user file
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

__all__ = [
    "CENTRAL_CONFIG_ENV",
    "USER_CONFIG_ENV",
    "central_config_path",
    "clear_caches",
    "home",
    "user_config_path",
]

CENTRAL_CONFIG_ENV = "GIT_ENSEMBL_CENTRAL_CONFIG"
USER_CONFIG_ENV = "GIT_ENSEMBL_USER_CONFIG"

DEFAULT_CENTRAL_CONFIG = Path("/etc/git-ensembl.json")
USER_CONFIG_NAME = ".git-ensembl.json"


@lru_cache(maxsize=1)
def home() -> Path:
    """User's home directory, honouring HOME for CI/container scenarios."""
    home_env = os.environ.get("HOME")
    if home_env:
        return Path(home_env)
    return Path.home()


@lru_cache(maxsize=1)
def central_config_path() -> Path:
    override = os.environ.get(CENTRAL_CONFIG_ENV)
    if override:
        return Path(override).expanduser()
    return DEFAULT_CENTRAL_CONFIG


@lru_cache(maxsize=1)
def user_config_path() -> Path:
    override = os.environ.get(USER_CONFIG_ENV)
    if override:
        return Path(override).expanduser()
    return home() / USER_CONFIG_NAME


def clear_caches() -> None:
    """Clear all cached paths.

    Useful for testing when environment variables change.
    """
    home.cache_clear()
    central_config_path.cache_clear()
    user_config_path.cache_clear()
