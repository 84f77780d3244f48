"""Role resolution: provider role trees flattened to role -> depth maps."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from rbaca.engine.models import (
    ANY_ROLE,
    CheckError,
    ErrorReporter,
    ErrorSource,
    maybe_await,
    provider_name,
)
from rbaca.interfaces.provider import Provider, RoleTree

if TYPE_CHECKING:
    from rbaca.engine.filter import AttributeFilter

logger = logging.getLogger(__name__)


def flatten(tree: RoleTree | None) -> dict[str, int]:
    """Flatten a role tree into role -> depth, keeping the shallowest depth.

    Directly assigned roles have depth 1. A role already recorded at the same
    or a shallower depth is not expanded again, which also stops cycles.
    """
    priorities: dict[str, int] = {}

    def _walk(level: Mapping[str, Any], depth: int) -> None:
        for role, inherited in level.items():
            known = priorities.get(role)
            if known is not None and known <= depth:
                continue
            priorities[role] = depth
            if isinstance(inherited, Mapping) and inherited:
                _walk(inherited, depth + 1)

    if isinstance(tree, Mapping):
        _walk(tree, 1)
    return priorities


def merge_priorities(*maps: Mapping[str, int]) -> dict[str, int]:
    """Merge role -> depth maps, keeping the minimum depth per role."""
    merged: dict[str, int] = {}
    for priorities in maps:
        for role, depth in priorities.items():
            current = merged.get(role)
            if current is None or depth < current:
                merged[role] = depth
    return merged


class RoleResolver:
    """Resolves a subject's roles across every provider.

    Each provider is queried in parallel. A provider that fails contributes
    no roles; the failure goes to *report*. When an attribute filter is given,
    each provider's tree is pruned with that provider's attributes before it
    is flattened.
    """

    def __init__(
        self,
        providers: Sequence[Provider],
        report: ErrorReporter,
        role_filter: AttributeFilter | None = None,
    ) -> None:
        self.providers = list(providers)
        self.report = report
        self.role_filter = role_filter

    async def fetch_tree(self, provider: Provider, subject: Any) -> RoleTree:
        """Ask *provider* for the subject's role tree; ``{}`` on failure."""
        try:
            tree = await maybe_await(provider.get_roles(subject))
            if tree is None:
                return {}
            if not isinstance(tree, Mapping):
                raise TypeError(
                    f"get_roles() must return a mapping, got {type(tree).__name__}"
                )
            return tree
        except Exception as e:
            logger.warning(
                "Provider %s failed to return roles for %r: %s",
                provider_name(provider), subject, e,
            )
            self.report(CheckError(
                error=e,
                subject=subject,
                role=ANY_ROLE,
                source=ErrorSource.roles,
                provider=provider_name(provider),
            ))
            return {}

    async def _resolve_one(
        self, provider: Provider, subject: Any, params: dict[Any, Any] | None
    ) -> dict[str, int]:
        tree = await self.fetch_tree(provider, subject)
        if tree and self.role_filter is not None:
            tree = await self.role_filter.filter(subject, tree, params, provider)
        return flatten(tree)

    async def resolve(self, subject: Any, params: dict[Any, Any] | None = None) -> dict[str, int]:
        """Role -> best depth for *subject*, merged across all providers."""
        if not self.providers:
            return {}
        maps = await asyncio.gather(
            *(self._resolve_one(p, subject, params) for p in self.providers)
        )
        priorities = merge_priorities(*maps)
        logger.debug("Resolved roles for %r: %s", subject, priorities)
        return priorities
