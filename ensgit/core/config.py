"""Loading group definitions from the central and user configuration files.

Both files are JSON5 documents (comments and trailing commas allowed) with
the same shape as the built-in groups:

    {
      // extra modules for my team
      "mygroup": {
        "desc": "Things I work on",
        "modules": {
          "ensembl": "git@github.com:Ensembl/ensembl.git",
        },
      },
    }

A missing file is an empty layer. A file that is present but unreadable,
not valid JSON5, or not of this shape fails the whole load.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import json5

from .groups import ConfigSource, Group, GroupRegistry, default_groups, resolve
from .result import Err, Ok, Result
from .structured import as_str_dict, describe_type, is_str_mapping

__all__ = [
    "ConfigError",
    "load_groups",
    "parse_groups",
    "read_groups_file",
]


@dataclass(frozen=True, slots=True)
class ConfigError:
    """A configuration file could not be read or does not have the expected shape."""

    message: str
    path: Path | None = None
    source: ConfigSource | None = None

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        return f"{self.path}: {self.message}"


def _is_module_name(name: str) -> bool:
    """Module names become directories directly under the working root."""
    return name not in {".", ".."} and "/" not in name and "\\" not in name


def parse_groups(
    data: object,
    *,
    path: Path | None = None,
    source: ConfigSource | None = None,
) -> Result[dict[str, Group], ConfigError]:
    """Validate parsed JSON5 data into groups.

    Group names are lowercased. ``desc`` is optional (empty description);
    ``modules`` is required and must map names to URLs; a module name is
    a single directory name, never a path.
    """

    def fail(message: str) -> Err[ConfigError]:
        return Err(ConfigError(message, path=path, source=source))

    root = as_str_dict(data)
    if root is None:
        return fail(f"top level must be an object, got {describe_type(data)}")

    groups: dict[str, Group] = {}
    for raw_name, raw_group in root.items():
        name = raw_name.strip().lower()
        if not name:
            return fail("group names must not be empty")
        if name in groups:
            return fail(f"group '{name}' is defined more than once")

        body = as_str_dict(raw_group)
        if body is None:
            return fail(f"group '{name}' must be an object, got {describe_type(raw_group)}")

        desc = body.get("desc", "")
        if not isinstance(desc, str):
            return fail(f"group '{name}': 'desc' must be a string, got {describe_type(desc)}")

        if "modules" not in body:
            return fail(f"group '{name}' has no 'modules'")
        modules = body["modules"]
        if not is_str_mapping(modules):
            return fail(
                f"group '{name}': 'modules' must map module names to remote URLs"
            )

        unknown = sorted(set(body) - {"desc", "modules"})
        if unknown:
            return fail(f"group '{name}': unexpected key(s): {', '.join(unknown)}")

        entries: dict[str, str] = {}
        for raw_module, url in modules.items():
            module = raw_module.strip()
            if not _is_module_name(module):
                return fail(
                    f"group '{name}': module name '{module}' must be a plain directory name"
                )
            if module in entries:
                return fail(f"group '{name}': module '{module}' is listed more than once")
            entries[module] = url.strip()

        groups[name] = Group(name=name, description=desc.strip(), modules=entries)

    return Ok(groups)


def read_groups_file(
    path: Path,
    source: ConfigSource | None = None,
) -> Result[dict[str, Group], ConfigError]:
    """Read one configuration layer; a missing file yields no groups."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Ok({})
    except PermissionError:
        return Err(ConfigError("permission denied", path=path, source=source))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"invalid UTF-8: {e}", path=path, source=source))
    except OSError as e:
        return Err(ConfigError(f"cannot read file: {e}", path=path, source=source))

    try:
        data: object = json5.loads(text, allow_duplicate_keys=False)
    except ValueError as e:
        return Err(ConfigError(f"invalid JSON5: {e}", path=path, source=source))

    return parse_groups(data, path=path, source=source)


def load_groups(
    *,
    https: bool = False,
    central_path: Path | None = None,
    user_path: Path | None = None,
) -> Result[GroupRegistry, ConfigError]:
    """Read every layer once and merge them.

    Args:
        https: Use HTTPS remotes for the built-in groups.
        central_path: Central file, or None to skip that layer.
        user_path: Per-user file, or None to skip that layer.

    Returns:
        Ok(GroupRegistry) on success, Err(ConfigError) naming the first bad file.
    """
    layers = [default_groups(https=https)]

    for source, path in ((ConfigSource.CENTRAL, central_path), (ConfigSource.USER, user_path)):
        if path is None:
            continue
        result = read_groups_file(path, source)
        if isinstance(result, Err):
            return result
        layers.append(result.value)

    return Ok(resolve(layers))
