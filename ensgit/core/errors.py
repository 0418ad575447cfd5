"""Exit codes for the git-ensembl command.

The numeric values are part of the command's contract with shell scripts
and should remain stable:
- 0: Success (skipped modules do not count as failures)
- 1: At least one module action was attempted and failed
- 2: Usage error (bad options, unknown group); matches Click's usage exit code
- 3: A configuration file could not be parsed or validated
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for git-ensembl."""

    OK = 0
    ACTION_FAILED = 1
    USAGE_ERROR = 2
    CONFIG_ERROR = 3

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
