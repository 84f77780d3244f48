"""Permission gathering and expression matching."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from rbaca.engine.expression import PermissionExpression
from rbaca.engine.models import (
    DENIED,
    CheckError,
    ErrorReporter,
    ErrorSource,
    maybe_await,
    provider_name,
)
from rbaca.interfaces.provider import Provider

logger = logging.getLogger(__name__)


def build_table(grants: Iterable[tuple[int, Iterable[str]]]) -> dict[str, int]:
    """Map each permission to the best depth of any role granting it.

    *grants* yields ``(depth, permissions)`` pairs, one per role/provider.
    """
    table: dict[str, int] = {}
    for depth, permissions in grants:
        for permission in permissions:
            current = table.get(permission)
            if current is None or depth < current:
                table[permission] = depth
    return table


class PermissionMatcher:
    """Collects permissions for resolved roles and evaluates an expression."""

    def __init__(self, providers: Sequence[Provider], report: ErrorReporter) -> None:
        self.providers = list(providers)
        self.report = report

    async def _fetch(self, provider: Provider, role: str, subject: Any) -> list[str]:
        try:
            permissions = await maybe_await(provider.get_permissions(role))
        except Exception as e:
            logger.warning(
                "Provider %s failed to return permissions for role %r: %s",
                provider_name(provider), role, e,
            )
            self.report(CheckError(
                error=e,
                subject=subject,
                role=role,
                source=ErrorSource.permissions,
                provider=provider_name(provider),
            ))
            return []
        if not permissions:
            return []
        if isinstance(permissions, str):
            return [permissions]
        return list(permissions)

    async def permissions_for(self, role: str, subject: Any = None) -> set[str]:
        """Union of *role*'s permissions across all providers."""
        lists = await asyncio.gather(*(self._fetch(p, role, subject) for p in self.providers))
        return {permission for permissions in lists for permission in permissions}

    async def table(self, priorities: Mapping[str, int], subject: Any = None) -> dict[str, int]:
        """Permission -> best depth for every role in *priorities*."""
        roles = list(priorities)
        granted = await asyncio.gather(*(self.permissions_for(role, subject) for role in roles))
        return build_table((priorities[role], perms) for role, perms in zip(roles, granted))

    async def match(
        self,
        priorities: Mapping[str, int],
        expression: PermissionExpression,
        subject: Any = None,
    ) -> float:
        """Best priority at which *expression* is satisfied, or ``DENIED``."""
        if not priorities or not self.providers:
            return DENIED
        table = await self.table(priorities, subject)
        priority = expression.evaluate(table)
        logger.debug("Matched %s against %d permissions: %s", expression, len(table), priority)
        return priority
