"""Build role trees from flat role lists and an inheritance lookup."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from typing import Any

from rbaca.engine.models import maybe_await

InheritedLookup = Callable[[str], "Iterable[str] | None | Awaitable[Iterable[str] | None]"]


async def collect_roles(roles: Iterable[str], get_inherited: InheritedLookup) -> dict[str, Any]:
    """Expand *roles* into a role tree suitable for ``Provider.get_roles``.

    *get_inherited* maps a role to the roles it inherits (sync or async). A
    ``None`` or non-list result makes the role a leaf. A role is expanded only
    at the shallowest depth it has been seen at, so diamonds are expanded once
    per depth and cycles stop.

    Example::

        await collect_roles(["writer"], {"writer": ["reader"], "reader": []}.get)
        # {"writer": {"reader": {}}}
    """
    depths: dict[str, int] = {}

    async def _collect(names: list[str], depth: int) -> dict[str, Any]:
        for name in names:
            depths[name] = min(depths.get(name, depth), depth)

        tree: dict[str, Any] = {}
        for name in names:
            if depths[name] < depth:
                continue
            inherited = await maybe_await(get_inherited(name))
            if isinstance(inherited, (list, tuple)):
                tree[name] = await _collect(list(inherited), depth + 1)
            else:
                tree[name] = None
        return tree

    return await _collect(list(roles), 1)
