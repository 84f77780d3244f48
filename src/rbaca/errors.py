"""Exceptions raised by rbaca for caller-side mistakes.

Collaborator failures (a provider or attribute predicate raising) are never
raised from a check; they are reported as ``CheckError`` events instead.
"""

from __future__ import annotations

from typing import Any


class RBACError(Exception):
    """Base class for every error raised by rbaca."""


class ExpressionError(RBACError, ValueError):
    """Raised when a permission expression is malformed or empty."""

    def __init__(self, message: str, expression: Any = None) -> None:
        self.expression = expression
        super().__init__(message)


class InvalidProviderError(RBACError, TypeError):
    """Raised when an object that does not implement Provider is registered."""

    def __init__(self, provider: object) -> None:
        self.provider = provider
        super().__init__(
            f"Invalid provider: {type(provider).__name__!r} does not implement "
            "get_roles, get_permissions and get_attributes"
        )


class UnknownAttributeError(RBACError, LookupError):
    """Raised when an unregistered attribute is validated under the ``raise`` policy."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown attribute: {name!r}")


class PluginNotFoundError(RBACError):
    """Raised when a requested plugin cannot be found."""

    def __init__(self, plugin_type: str, name: str | None = None):
        self.plugin_type = plugin_type
        self.name = name
        msg = f"No {plugin_type} plugin found"
        if name:
            msg += f" with name '{name}'"
        super().__init__(msg)
