"""Tests for ensgit.core.groups module."""

from __future__ import annotations

import pytest

from ensgit.core.groups import (
    Group,
    GroupListing,
    GroupRegistry,
    ModuleEntry,
    UnknownGroup,
    default_groups,
    format_listing,
    github_url,
    merge_groups,
    resolve,
)
from ensgit.core.result import Err, Ok

API_MODULES = ["ensembl", "ensembl-compara", "ensembl-funcgen", "ensembl-variation"]


def _group(name: str, desc: str = "", **modules: str) -> Group:
    return Group(name=name, description=desc, modules=modules)


class TestDefaultGroups:
    """Built-in groups and their remote URLs."""

    def test_api_ssh_urls(self) -> None:
        api = default_groups()["api"]
        assert sorted(api.modules) == API_MODULES
        for name, url in api.modules.items():
            assert url == f"git@github.com:Ensembl/{name}.git"

    def test_api_https_urls(self) -> None:
        api = default_groups(https=True)["api"]
        assert sorted(api.modules) == API_MODULES
        for name, url in api.modules.items():
            assert url == f"https://github.com/Ensembl/{name}.git"

    def test_names_are_lowercase(self) -> None:
        for name, group in default_groups().items():
            assert name == name.lower()
            assert group.name == name

    def test_every_group_has_description_and_modules(self) -> None:
        for group in default_groups().values():
            assert group.description
            assert group.modules

    def test_fresh_mapping_each_call(self) -> None:
        first = default_groups()
        first.pop("api")
        assert "api" in default_groups()


class TestGithubUrl:
    def test_ssh(self) -> None:
        assert github_url("ensembl-io") == "git@github.com:Ensembl/ensembl-io.git"

    def test_https(self) -> None:
        assert github_url("ensembl-io", https=True) == "https://github.com/Ensembl/ensembl-io.git"

    def test_other_org(self) -> None:
        assert github_url("repo", org="me") == "git@github.com:me/repo.git"


class TestGroup:
    def test_entries_sorted(self) -> None:
        group = _group("g", zeta="z-url", alpha="a-url", mid="m-url")
        assert group.entries() == [
            ModuleEntry("alpha", "a-url"),
            ModuleEntry("mid", "m-url"),
            ModuleEntry("zeta", "z-url"),
        ]

    def test_frozen(self) -> None:
        group = _group("g")
        with pytest.raises(AttributeError):
            group.name = "other"  # type: ignore[misc]


class TestMergeGroups:
    """Layer precedence: later layers replace whole groups."""

    def test_higher_layer_wins(self) -> None:
        default = {"api": _group("api", "default", ensembl="d")}
        central = {"api": _group("api", "central", ensembl="c")}
        user = {"api": _group("api", "user", ensembl="u")}

        merged = merge_groups([default, central, user])

        assert merged["api"] is user["api"]

    def test_central_beats_default_when_user_silent(self) -> None:
        default = {"api": _group("api", "default", ensembl="d")}
        central = {"api": _group("api", "central", ensembl="c")}

        merged = merge_groups([default, central, {}])

        assert merged["api"] is central["api"]

    def test_replacement_is_whole_group(self) -> None:
        default = {"api": _group("api", "default", ensembl="d", extra="x")}
        user = {"api": _group("api", "", ensembl="u")}

        merged = merge_groups([default, user])

        assert dict(merged["api"].modules) == {"ensembl": "u"}
        assert merged["api"].description == ""

    def test_distinct_names_are_kept(self) -> None:
        merged = merge_groups([{"a": _group("a")}, {"b": _group("b")}, {"c": _group("c")}])
        assert sorted(merged) == ["a", "b", "c"]

    def test_inputs_not_modified(self) -> None:
        default = {"a": _group("a")}
        user = {"b": _group("b")}
        merge_groups([default, user])
        assert list(default) == ["a"]
        assert list(user) == ["b"]

    def test_empty_layers_yield_defaults_unchanged(self) -> None:
        defaults = default_groups()
        merged = merge_groups([defaults, {}, {}])
        assert merged == defaults


class TestGroupRegistry:
    def test_modules_for_known_group(self) -> None:
        registry = resolve([default_groups()])
        result = registry.modules_for("api")
        assert isinstance(result, Ok)
        assert sorted(result.value) == API_MODULES

    def test_modules_for_unknown_group(self) -> None:
        registry = resolve([default_groups()])
        result = registry.modules_for("doesnotexist")
        assert isinstance(result, Err)
        assert isinstance(result.error, UnknownGroup)
        assert result.error.name == "doesnotexist"
        assert "api" in result.error.available
        assert result.error.message == "unknown group 'doesnotexist'"

    def test_unknown_group_in_empty_registry_has_no_hint(self) -> None:
        result = GroupRegistry({}).modules_for("api")
        assert isinstance(result, Err)
        assert result.error.hint is None

    def test_modules_for_returns_copy(self) -> None:
        registry = resolve([{"g": _group("g", one="1")}])
        result = registry.modules_for("g")
        assert isinstance(result, Ok)
        result.value["two"] = "2"
        again = registry.modules_for("g")
        assert isinstance(again, Ok)
        assert again.value == {"one": "1"}

    def test_list_groups_sorted(self) -> None:
        registry = resolve(
            [
                {
                    "zeta": _group("zeta", "last", b="1", a="2"),
                    "alpha": _group("alpha", "first", y="1", x="2"),
                }
            ]
        )
        assert registry.list_groups() == [
            GroupListing(name="alpha", description="first", modules=("x", "y")),
            GroupListing(name="zeta", description="last", modules=("a", "b")),
        ]

    def test_list_groups_deterministic(self) -> None:
        first = format_listing(resolve([default_groups()]).list_groups())
        second = format_listing(resolve([default_groups()]).list_groups())
        assert "\n".join(first) == "\n".join(second)

    def test_names_and_get(self) -> None:
        registry = resolve([default_groups()])
        assert registry.names == sorted(default_groups())
        assert registry.get("api") == default_groups()["api"]
        assert registry.get("nope") is None


class TestFormatListing:
    def test_format(self) -> None:
        listings = [
            GroupListing(name="api", description="API", modules=("ensembl", "ensembl-compara")),
            GroupListing(name="bare", description="", modules=("x",)),
        ]
        assert format_listing(listings) == [
            "api - API",
            "  ensembl",
            "  ensembl-compara",
            "bare",
            "  x",
        ]

    def test_empty(self) -> None:
        assert format_listing([]) == []
