"""Permission expression parsing and evaluation.

An expression is an OR of AND groups::

    "read, write && publish"  ->  (("read",), ("write", "publish"))

Groups are separated by ``,`` and tokens within a group by ``&&``. The
pre-structured form is a sequence whose items are either strings (split on
``&&``) or sequences of tokens.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import Union

from pydantic import BaseModel, ConfigDict

from rbaca.engine.models import DENIED
from rbaca.errors import ExpressionError

OR_SEPARATOR = ","
AND_SEPARATOR = "&&"

PermissionsInput = Union[str, Sequence[Union[str, Sequence[str]]]]


class PermissionExpression(BaseModel):
    """A normalized, non-empty OR-of-AND permission expression."""

    model_config = ConfigDict(frozen=True)

    groups: tuple[tuple[str, ...], ...]

    def __str__(self) -> str:
        return f"{OR_SEPARATOR} ".join(f" {AND_SEPARATOR} ".join(g) for g in self.groups)

    def tokens(self) -> set[str]:
        return {token for group in self.groups for token in group}

    def evaluate(self, table: Mapping[str, int]) -> float:
        """Best priority among satisfied groups, or ``DENIED``.

        A group is satisfied when every token is in *table*; it is only as
        specific as its least specific token.
        """
        best = DENIED
        for group in self.groups:
            if not all(token in table for token in group):
                continue
            priority = max(table[token] for token in group)
            if math.isnan(best) or priority < best:
                best = priority
        return best


def _split_group(group: str | Sequence[str], expression: PermissionsInput) -> tuple[str, ...]:
    parts = group.split(AND_SEPARATOR) if isinstance(group, str) else group
    if isinstance(parts, (bytes, Mapping)) or not isinstance(parts, Sequence):
        raise ExpressionError(f"Invalid permission group: {group!r}", expression)

    tokens = []
    for part in parts:
        if not isinstance(part, str):
            raise ExpressionError(f"Permission must be a string, got {part!r}", expression)
        token = part.strip()
        if token:
            tokens.append(token)
    return tuple(tokens)


def parse_permissions(permissions: PermissionsInput | PermissionExpression) -> PermissionExpression:
    """Parse *permissions* into a ``PermissionExpression``.

    Raises:
        ExpressionError: when the input is not a string or sequence, contains
            non-string tokens, or normalizes to an empty expression.
    """
    if isinstance(permissions, PermissionExpression):
        return permissions

    if isinstance(permissions, str):
        raw_groups: Sequence[str | Sequence[str]] = permissions.split(OR_SEPARATOR)
    elif isinstance(permissions, Sequence) and not isinstance(permissions, bytes):
        raw_groups = permissions
    else:
        raise ExpressionError(
            f"Permissions must be a string or a sequence, got {type(permissions).__name__}",
            permissions,
        )

    groups = tuple(g for g in (_split_group(raw, permissions) for raw in raw_groups) if g)
    if not groups:
        raise ExpressionError(f"Empty permission expression: {permissions!r}", permissions)
    return PermissionExpression(groups=groups)
