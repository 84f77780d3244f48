"""Shared test fixtures for rbaca."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from rbaca.attributes import AttributeRegistry
from rbaca.interfaces import Provider
from rbaca.providers import StaticProvider


@pytest.fixture
def sample_rules():
    """guest <- reader <- writer, john.smith holds writer."""
    return {
        "roles": {
            "guest": {},
            "reader": {"permissions": ["read"], "inherited": ["guest"]},
            "writer": {"permissions": ["create"], "inherited": ["reader"]},
        },
        "users": {
            "john.smith": ["writer"],
        },
    }


@pytest.fixture
def static_provider(sample_rules):
    return StaticProvider(sample_rules)


@pytest.fixture
def registry():
    return AttributeRegistry()


@pytest.fixture
def make_provider():
    """Factory for mock providers serving fixed roles, permissions and attributes."""

    def _make(roles=None, permissions=None, attributes=None):
        permissions = permissions or {}
        attributes = attributes or {}
        provider = MagicMock(spec=Provider)
        provider.get_roles = AsyncMock(return_value=roles if roles is not None else {})
        provider.get_permissions = AsyncMock(side_effect=lambda role: permissions.get(role, []))
        provider.get_attributes = AsyncMock(side_effect=lambda role: attributes.get(role, []))
        return provider

    return _make
