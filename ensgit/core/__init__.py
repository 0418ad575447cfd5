"""Core domain types and logic."""

from .config import ConfigError, load_groups, parse_groups, read_groups_file
from .errors import ErrorCode
from .groups import (
    ConfigSource,
    Group,
    GroupListing,
    GroupRegistry,
    ModuleEntry,
    UnknownGroup,
    default_groups,
    format_listing,
    merge_groups,
    resolve,
)
from .result import Err, Ok, Result

__all__ = [
    # config
    "ConfigError",
    "load_groups",
    "parse_groups",
    "read_groups_file",
    # errors
    "ErrorCode",
    # groups
    "ConfigSource",
    "Group",
    "GroupListing",
    "GroupRegistry",
    "ModuleEntry",
    "UnknownGroup",
    "default_groups",
    "format_listing",
    "merge_groups",
    "resolve",
    # result
    "Err",
    "Ok",
    "Result",
]
