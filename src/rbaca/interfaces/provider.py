"""Provider interface and role tree types."""

from __future__ import annotations

from collections.abc import Awaitable, Mapping
from typing import Any, Protocol, TypeAlias, runtime_checkable

# role name -> inherited roles (None or {} for a leaf)
RoleTree: TypeAlias = Mapping[str, "RoleTree | None"]


@runtime_checkable
class Provider(Protocol):
    """Source of roles, permissions and attributes.

    Each method may return its value directly or an awaitable resolving to it.
    Unknown subjects and roles yield empty results, not errors.
    """

    def get_roles(self, subject: Any) -> RoleTree | None | Awaitable[RoleTree | None]: ...

    def get_permissions(self, role: str) -> list[str] | Awaitable[list[str]]: ...

    def get_attributes(self, role: str) -> list[str] | Awaitable[list[str]]: ...
