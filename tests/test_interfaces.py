"""Tests for rbaca.interfaces and result models: structural subtyping, sentinels."""

from __future__ import annotations

import math

import pytest

from rbaca import DENIED, CheckError, CheckResult, ErrorSource, Provider, is_granted


class CompleteProvider:
    def get_roles(self, subject):
        return {}

    def get_permissions(self, role):
        return []

    def get_attributes(self, role):
        return []


class AsyncProvider:
    async def get_roles(self, subject):
        return {}

    async def get_permissions(self, role):
        return []

    async def get_attributes(self, role):
        return []


class PartialProvider:
    def get_roles(self, subject):
        return {}


class TestProviderProtocol:
    def test_sync_implementation(self):
        assert isinstance(CompleteProvider(), Provider)

    def test_async_implementation(self):
        assert isinstance(AsyncProvider(), Provider)

    def test_partial_implementation(self):
        assert not isinstance(PartialProvider(), Provider)


class TestPrioritySentinel:
    def test_denied_is_nan(self):
        assert math.isnan(DENIED)

    @pytest.mark.parametrize("priority, expected", [(1, True), (3.0, True), (DENIED, False), (0, False)])
    def test_is_granted(self, priority, expected):
        assert is_granted(priority) is expected


class TestCheckResult:
    def test_denied_result(self):
        result = CheckResult(priority=DENIED)
        assert not result.granted
        assert result.roles == {}
        assert result.errors == []

    def test_granted_result(self):
        assert CheckResult(priority=2, roles={"reader": 2}).granted


class TestCheckError:
    def test_fields(self):
        error = RuntimeError("boom")
        event = CheckError(error=error, subject=7, role="admin", source="predicate")
        assert event.error is error
        assert event.source is ErrorSource.predicate
        assert event.provider is None

    def test_source_values(self):
        assert {s.value for s in ErrorSource} == {"roles", "attributes", "permissions", "predicate"}
