"""Permission checker: the public entry point of the engine."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from rbaca.attributes.registry import AttributeRegistry
from rbaca.engine.expression import PermissionExpression, PermissionsInput, parse_permissions
from rbaca.engine.filter import AttributeFilter
from rbaca.engine.matcher import PermissionMatcher
from rbaca.engine.models import DENIED, CheckError, CheckResult
from rbaca.engine.resolver import RoleResolver
from rbaca.errors import InvalidProviderError
from rbaca.interfaces.provider import Provider

logger = logging.getLogger(__name__)

ErrorListener = Callable[[CheckError], Any]


class PermissionChecker:
    """Checks a subject against a permission expression.

    Pipeline per check:
        expression parse -> role trees (per provider) -> attribute filter
        -> role/depth merge -> permission table -> expression match

    Provider and predicate failures never fail a check. They are passed to
    the registered error listeners and collected on ``CheckResult.errors``.
    """

    def __init__(
        self,
        attributes: AttributeRegistry | None = None,
        providers: Iterable[Provider] = (),
    ) -> None:
        if attributes is None:
            attributes = AttributeRegistry()
        elif not isinstance(attributes, AttributeRegistry):
            raise TypeError("Invalid attributes registry")
        self._attributes = attributes
        self._providers: list[Provider] = []
        self._listeners: list[ErrorListener] = []
        for provider in providers:
            self.add_provider(provider)

    @property
    def attributes(self) -> AttributeRegistry:
        return self._attributes

    @property
    def providers(self) -> list[Provider]:
        return list(self._providers)

    def add_provider(self, provider: Provider) -> None:
        """Register *provider*; registering the same instance twice is a no-op."""
        if not isinstance(provider, Provider):
            raise InvalidProviderError(provider)
        if not any(p is provider for p in self._providers):
            self._providers.append(provider)

    def remove_provider(self, provider: Provider) -> bool:
        for i, p in enumerate(self._providers):
            if p is provider:
                del self._providers[i]
                return True
        return False

    # -- Error channel ---------------------------------------------------------

    def add_error_listener(self, listener: ErrorListener) -> None:
        if not callable(listener):
            raise TypeError("Error listener must be callable")
        self._listeners.append(listener)

    def remove_error_listener(self, listener: ErrorListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, event: CheckError) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.warning("Error listener %r raised", listener, exc_info=True)

    # -- Checks ----------------------------------------------------------------

    async def evaluate(
        self,
        subject: Any,
        permissions: PermissionsInput | PermissionExpression,
        params: Mapping[Any, Any] | None = None,
    ) -> CheckResult:
        """Run a check and return the priority with its resolved roles and errors.

        Raises:
            ExpressionError: if *permissions* is malformed.
            UnknownAttributeError: if an unregistered attribute is met and the
                registry's policy is ``raise``.
        """
        expression = parse_permissions(permissions)
        if params is not None and not isinstance(params, Mapping):
            raise TypeError("params must be a mapping")

        providers = list(self._providers)
        if not providers:
            return CheckResult(priority=DENIED)

        errors: list[CheckError] = []

        def report(event: CheckError) -> None:
            errors.append(event)
            self._notify(event)

        resolver = RoleResolver(providers, report, AttributeFilter(self._attributes, report))
        roles = await resolver.resolve(subject, dict(params or {}))
        priority = await PermissionMatcher(providers, report).match(roles, expression, subject)

        logger.debug("Check %r for %s: %s", subject, expression, priority)
        return CheckResult(priority=priority, roles=roles, errors=errors)

    async def check(
        self,
        subject: Any,
        permissions: PermissionsInput | PermissionExpression,
        params: Mapping[Any, Any] | None = None,
    ) -> float:
        """Priority at which *subject* holds *permissions*, or ``DENIED`` (NaN).

        A lower priority means a more direct grant: 1 is a permission of a
        directly assigned role, 2 of a role it inherits, and so on.
        """
        result = await self.evaluate(subject, permissions, params)
        return result.priority
