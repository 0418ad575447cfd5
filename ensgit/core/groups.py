"""Repository groups and their layered resolution.

A group is a named bundle of modules (repositories) that are usually worked
on together, e.g. the Perl API repositories under ``api``. Groups come from
three layers, lowest priority first:

  1. the built-in defaults below,
  2. a central file shared by everyone on a machine,
  3. a per-user file.

A group defined in a higher layer replaces the lower layer's group of the
same name entirely; modules are never merged across layers.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum

from .result import Err, Ok, Result

__all__ = [
    "ConfigSource",
    "GITHUB_ORG",
    "Group",
    "GroupListing",
    "GroupRegistry",
    "ModuleEntry",
    "UnknownGroup",
    "default_groups",
    "format_listing",
    "github_url",
    "merge_groups",
    "resolve",
]

GITHUB_ORG = "Ensembl"

_SSH_URL = "git@github.com:{org}/{name}.git"
_HTTPS_URL = "https://github.com/{org}/{name}.git"

# (group, description, modules)
_DEFAULT_GROUPS: tuple[tuple[str, str, tuple[str, ...]], ...] = (
    (
        "api",
        "API module set used for querying and processing Ensembl data",
        ("ensembl", "ensembl-compara", "ensembl-variation", "ensembl-funcgen"),
    ),
    (
        "tools",
        "Ensembl command-line tools and the git helpers",
        ("ensembl-tools", "ensembl-git-tools"),
    ),
    (
        "production",
        "Modules used by the production and genebuild pipelines",
        ("ensembl-production", "ensembl-analysis", "ensembl-pipeline"),
    ),
    ("hive", "The eHive workflow management system", ("ensembl-hive",)),
    ("io", "File parsers and writers", ("ensembl-io",)),
    ("rest", "The Ensembl REST API server", ("ensembl-rest",)),
    (
        "web",
        "Modules needed to run the Ensembl website",
        ("ensembl-webcode", "public-plugins", "ensembl-orm"),
    ),
)


class ConfigSource(Enum):
    """Where a layer of groups comes from, lowest priority first."""

    DEFAULT = "default"
    CENTRAL = "central"
    USER = "user"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class ModuleEntry:
    """One repository within a group."""

    name: str
    url: str


@dataclass(frozen=True, slots=True)
class Group:
    """A named bundle of modules.

    Attributes:
        name: Lowercase group name
        description: Free text shown by ``--list``
        modules: Module name -> remote location (SSH or HTTPS git URL)
    """

    name: str
    description: str
    modules: Mapping[str, str] = field(default_factory=dict)

    def entries(self) -> list[ModuleEntry]:
        """Modules in sorted name order."""
        return [ModuleEntry(name, self.modules[name]) for name in sorted(self.modules)]

    @property
    def module_names(self) -> list[str]:
        return sorted(self.modules)


@dataclass(frozen=True, slots=True)
class UnknownGroup:
    """A requested group is not defined in any configuration layer."""

    name: str
    available: tuple[str, ...] = ()

    @property
    def message(self) -> str:
        return f"unknown group '{self.name}'"

    @property
    def hint(self) -> str | None:
        if not self.available:
            return None
        return f"available groups: {', '.join(self.available)}"


@dataclass(frozen=True, slots=True)
class GroupListing:
    """Display form of a group: sorted modules, no URLs."""

    name: str
    description: str
    modules: tuple[str, ...]


def github_url(name: str, *, https: bool = False, org: str = GITHUB_ORG) -> str:
    """Remote location of an Ensembl repository on GitHub."""
    template = _HTTPS_URL if https else _SSH_URL
    return template.format(org=org, name=name)


def default_groups(*, https: bool = False) -> dict[str, Group]:
    """The built-in groups.

    Args:
        https: Use read-only HTTPS remotes instead of SSH write remotes.
    """
    return {
        name: Group(
            name=name,
            description=description,
            modules={module: github_url(module, https=https) for module in modules},
        )
        for name, description, modules in _DEFAULT_GROUPS
    }


def merge_groups(layers: Iterable[Mapping[str, Group]]) -> dict[str, Group]:
    """Merge layers of groups, lowest priority first.

    A later layer's group replaces an earlier group of the same name as a
    whole. Inputs are not modified.
    """
    merged: dict[str, Group] = {}
    for layer in layers:
        merged.update(layer)
    return merged


class GroupRegistry:
    """The merged set of groups for one invocation."""

    def __init__(self, groups: Mapping[str, Group]) -> None:
        self._groups = dict(groups)

    @property
    def names(self) -> list[str]:
        return sorted(self._groups)

    def get(self, name: str) -> Group | None:
        return self._groups.get(name)

    def modules_for(self, name: str) -> Result[dict[str, str], UnknownGroup]:
        """Module name -> URL mapping for a group."""
        group = self._groups.get(name)
        if group is None:
            return Err(UnknownGroup(name=name, available=tuple(self.names)))
        return Ok(dict(group.modules))

    def list_groups(self) -> list[GroupListing]:
        """Every group sorted by name, each with its modules sorted."""
        return [
            GroupListing(
                name=name,
                description=self._groups[name].description,
                modules=tuple(self._groups[name].module_names),
            )
            for name in self.names
        ]


def resolve(layers: Iterable[Mapping[str, Group]]) -> GroupRegistry:
    """Build the registry for one invocation from ordered layers."""
    return GroupRegistry(merge_groups(layers))


def format_listing(listings: Iterable[GroupListing]) -> list[str]:
    """Render group listings as plain lines.

    Example:
        api - API module set used for querying and processing Ensembl data
          ensembl
          ensembl-compara
    """
    lines: list[str] = []
    for listing in listings:
        if listing.description:
            lines.append(f"{listing.name} - {listing.description}")
        else:
            lines.append(listing.name)
        lines.extend(f"  {module}" for module in listing.modules)
    return lines
