"""Named attribute predicates and their validation."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from rbaca.attributes.models import AttributeContext, MissingAttributePolicy
from rbaca.errors import UnknownAttributeError

logger = logging.getLogger(__name__)

Predicate = Callable[[AttributeContext], Any]


class AttributeRegistry:
    """Maps attribute names to predicates.

    A predicate receives an ``AttributeContext`` and returns any value (or an
    awaitable resolving to one); the attribute filter coerces it with ``bool()``.

    The registry is read during checks but is not locked: mutating it while a
    check is in flight is the caller's responsibility.
    """

    def __init__(
        self,
        ignore_missing_attributes: bool = True,
        missing: MissingAttributePolicy | str | None = None,
    ) -> None:
        if missing is None:
            missing = (
                MissingAttributePolicy.deny
                if ignore_missing_attributes
                else MissingAttributePolicy.raise_
            )
        self.missing = MissingAttributePolicy(missing)
        self._attributes: dict[str, Predicate] = {}

    def set(self, name: str | Predicate, predicate: Predicate | None = None) -> AttributeRegistry:
        """Register a predicate under *name*, replacing any previous one.

        ``set(func)`` registers *func* under its ``__name__``.
        """
        if callable(name) and predicate is None:
            predicate = name
            name = getattr(predicate, "__name__", "")

        if not callable(predicate):
            raise TypeError("Attribute predicate must be callable")
        if not isinstance(name, str) or not name or name == "<lambda>":
            raise ValueError("Attribute name cannot be anonymous or empty")

        self._attributes[name] = predicate
        return self

    def remove(self, attribute: str | Predicate) -> Predicate | None:
        """Unregister by name or by predicate; returns the removed predicate, if any."""
        if isinstance(attribute, str):
            return self._attributes.pop(attribute, None)
        if callable(attribute):
            names = [n for n, p in self._attributes.items() if p is attribute]
            for n in names:
                del self._attributes[n]
            return attribute if names else None
        raise TypeError("Attribute must be a string or a callable")

    def get(self, name: str) -> Predicate | None:
        return self._attributes.get(name)

    def names(self) -> list[str]:
        return sorted(self._attributes)

    def __contains__(self, name: object) -> bool:
        return name in self._attributes

    def __len__(self) -> int:
        return len(self._attributes)

    def validate(self, name: str, context: AttributeContext) -> Any:
        """Run the predicate registered as *name* against *context*.

        Unknown names follow ``self.missing``: ``deny`` returns False, ``skip``
        returns True, ``raise`` raises ``UnknownAttributeError``.
        """
        if not isinstance(name, str):
            raise TypeError("Attribute name must be a string")
        if not name:
            raise ValueError("Attribute name cannot be empty")

        predicate = self._attributes.get(name)
        if predicate is None:
            if self.missing is MissingAttributePolicy.raise_:
                raise UnknownAttributeError(name)
            logger.debug("Unknown attribute %r (policy: %s)", name, self.missing.value)
            return self.missing is MissingAttributePolicy.skip

        return predicate(context)
