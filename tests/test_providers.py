"""Tests for rbaca.providers: StaticProvider and collect_roles."""

from __future__ import annotations

import json

import pytest
import yaml

from rbaca.interfaces import Provider
from rbaca.providers import Rules, StaticProvider, collect_roles


# -- collect_roles ---------------------------------------------------------------


@pytest.mark.asyncio
async def test_collect_builds_nested_tree():
    inherited = {"writer": ["reader"], "reader": ["guest"], "guest": None}
    tree = await collect_roles(["writer"], inherited.get)
    assert tree == {"writer": {"reader": {"guest": None}}}


@pytest.mark.asyncio
async def test_collect_empty_list_makes_empty_subtree():
    tree = await collect_roles(["a"], {"a": []}.get)
    assert tree == {"a": {}}


@pytest.mark.asyncio
async def test_collect_async_lookup():
    async def lookup(role):
        return {"admin": ["staff"]}.get(role)

    assert await collect_roles(["admin"], lookup) == {"admin": {"staff": None}}


@pytest.mark.asyncio
async def test_collect_skips_roles_known_shallower():
    inherited = {"a": ["b"], "b": ["c"], "c": None}
    tree = await collect_roles(["a", "c"], inherited.get)
    # c is direct, so it is not repeated under b
    assert tree == {"a": {"b": {}}, "c": None}


@pytest.mark.asyncio
async def test_collect_terminates_on_cycle():
    inherited = {"a": ["b"], "b": ["a"]}
    tree = await collect_roles(["a"], inherited.get)
    assert tree == {"a": {"b": {}}}


@pytest.mark.asyncio
async def test_collect_nothing():
    assert await collect_roles([], lambda role: None) == {}


# -- StaticProvider --------------------------------------------------------------


def test_static_provider_is_a_provider(static_provider):
    assert isinstance(static_provider, Provider)


@pytest.mark.asyncio
async def test_get_roles(static_provider):
    tree = await static_provider.get_roles("john.smith")
    assert tree == {"writer": {"reader": {"guest": None}}}


@pytest.mark.asyncio
async def test_get_roles_unknown_subject(static_provider):
    assert await static_provider.get_roles("nobody") == {}


@pytest.mark.asyncio
async def test_get_roles_by_string_form():
    provider = StaticProvider({"roles": {"admin": {}}, "users": {"123": ["admin"]}})
    assert await provider.get_roles(123) == {"admin": None}


@pytest.mark.asyncio
async def test_undefined_roles_are_dropped():
    provider = StaticProvider({
        "roles": {"editor": {"inherited": ["ghost", "viewer"]}, "viewer": {}},
        "users": {"amy": ["editor", "phantom"]},
    })
    assert await provider.get_roles("amy") == {"editor": {"viewer": None}}


def test_get_permissions_and_attributes():
    provider = StaticProvider({
        "roles": {"admin": {"permissions": ["manage"], "attributes": ["mfa"]}},
    })
    assert provider.get_permissions("admin") == ["manage"]
    assert provider.get_attributes("admin") == ["mfa"]
    assert provider.get_permissions("unknown") == []
    assert provider.get_attributes("unknown") == []


def test_empty_provider():
    provider = StaticProvider()
    assert provider.rules == Rules()


def test_invalid_rules_rejected():
    with pytest.raises(Exception):
        StaticProvider({"roles": {"admin": {"permissions": "manage"}}})


# -- Loading from files ----------------------------------------------------------


def test_from_json_file(tmp_path, sample_rules):
    path = tmp_path / "rules.json"
    path.write_text(json.dumps(sample_rules))

    provider = StaticProvider.from_file(path)
    assert provider.get_permissions("writer") == ["create"]


def test_from_yaml_file(tmp_path, sample_rules):
    path = tmp_path / "rules.yaml"
    path.write_text(yaml.safe_dump(sample_rules))

    provider = StaticProvider.from_file(str(path))
    assert provider.get_permissions("reader") == ["read"]
    assert provider.rules.users == {"john.smith": ["writer"]}


def test_from_empty_file(tmp_path):
    path = tmp_path / "rules.yml"
    path.write_text("")
    assert StaticProvider.from_file(path).rules == Rules()


def test_from_file_invalid_json(tmp_path):
    path = tmp_path / "rules.json"
    path.write_text("{not json")
    with pytest.raises(ValueError, match="Invalid rules file"):
        StaticProvider.from_file(path)


def test_from_file_invalid_rules(tmp_path):
    path = tmp_path / "rules.yaml"
    path.write_text("users:\n  bob: admin\n")
    with pytest.raises(ValueError, match="Invalid rules in"):
        StaticProvider.from_file(path)


def test_from_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        StaticProvider.from_file(tmp_path / "absent.yaml")
