"""Attribute-based pruning of role trees."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from rbaca.attributes.models import AttributeContext
from rbaca.attributes.registry import AttributeRegistry
from rbaca.engine.models import (
    CheckError,
    ErrorReporter,
    ErrorSource,
    maybe_await,
    provider_name,
)
from rbaca.errors import UnknownAttributeError
from rbaca.interfaces.provider import Provider, RoleTree

logger = logging.getLogger(__name__)


class AttributeFilter:
    """Removes roles whose attributes do not all hold.

    A removed role takes its whole inherited subtree with it. Roles that pass
    still have their descendants checked. The input tree is never modified;
    a new tree is returned.
    """

    def __init__(self, registry: AttributeRegistry, report: ErrorReporter) -> None:
        self.registry = registry
        self.report = report

    async def filter(
        self,
        subject: Any,
        tree: RoleTree,
        params: Mapping[Any, Any] | None,
        provider: Provider,
    ) -> dict[str, Any]:
        """Return a pruned copy of *tree* for *subject*.

        Each role is evaluated at most once per call, however many branches
        reach it.
        """
        context_params = dict(params or {})
        outcomes: dict[str, asyncio.Future[bool]] = {}

        def _allowed(role: str) -> asyncio.Future[bool]:
            outcome = outcomes.get(role)
            if outcome is None:
                outcome = asyncio.ensure_future(
                    self._evaluate_role(subject, role, context_params, provider)
                )
                outcomes[role] = outcome
            return outcome

        expanded: dict[str, int] = {}

        async def _prune(level: Mapping[str, Any], depth: int) -> dict[str, Any]:
            entries = list(level.items())
            allowed = await asyncio.gather(*(_allowed(role) for role, _ in entries))
            kept = [entry for entry, ok in zip(entries, allowed) if ok]
            subtrees = await asyncio.gather(
                *(_subtree(role, inherited, depth) for role, inherited in kept)
            )
            return {role: sub for (role, _), sub in zip(kept, subtrees)}

        async def _subtree(role: str, inherited: Any, depth: int) -> dict[str, Any] | None:
            if not isinstance(inherited, Mapping) or not inherited:
                return None
            # expanded at the same or a shallower depth elsewhere, including cycles
            known = expanded.get(role)
            if known is not None and known <= depth:
                return None
            expanded[role] = depth
            return await _prune(inherited, depth + 1)

        return await _prune(tree, 1)

    async def _evaluate_role(
        self,
        subject: Any,
        role: str,
        params: dict[Any, Any],
        provider: Provider,
    ) -> bool:
        try:
            names = await maybe_await(provider.get_attributes(role))
        except Exception as e:
            logger.warning(
                "Provider %s failed to return attributes for role %r: %s",
                provider_name(provider), role, e,
            )
            self.report(CheckError(
                error=e,
                subject=subject,
                role=role,
                source=ErrorSource.attributes,
                provider=provider_name(provider),
            ))
            return False

        if not names:
            return True
        if isinstance(names, str):
            names = [names]

        context = AttributeContext(subject=subject, role=role, params=params)
        results = await asyncio.gather(
            *(self._validate(name, context, provider) for name in names)
        )
        if all(results):
            return True

        failed = [name for name, ok in zip(names, results) if not ok]
        logger.debug("Role %r removed for %r: attributes %s not satisfied", role, subject, failed)
        return False

    async def _validate(self, name: str, context: AttributeContext, provider: Provider) -> bool:
        try:
            return bool(await maybe_await(self.registry.validate(name, context)))
        except UnknownAttributeError:
            raise
        except Exception as e:
            logger.warning(
                "Attribute %r raised for role %r: %s", name, context.role, e,
            )
            self.report(CheckError(
                error=e,
                subject=context.subject,
                role=context.role,
                source=ErrorSource.predicate,
                provider=provider_name(provider),
            ))
            return False
