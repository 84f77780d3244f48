"""Result and diagnostic models for permission checks."""

from __future__ import annotations

import inspect
import math
from collections.abc import Callable
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Priority returned when access is denied.
DENIED: float = math.nan

# Role reported for failures that concern a subject's whole role set.
ANY_ROLE = "*"


def is_granted(priority: float) -> bool:
    """True for a finite positive priority, False for ``DENIED``."""
    return not math.isnan(priority) and priority > 0


class ErrorSource(str, Enum):
    """Which collaborator call failed."""

    roles = "roles"
    attributes = "attributes"
    permissions = "permissions"
    predicate = "predicate"


class CheckError(BaseModel):
    """An isolated collaborator failure observed during a check."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    error: BaseException
    subject: Any
    role: str
    source: ErrorSource
    provider: str | None = None


class CheckResult(BaseModel):
    """Full outcome of a check: priority plus the data that produced it."""

    model_config = ConfigDict(frozen=True)

    priority: float
    roles: dict[str, int] = Field(default_factory=dict)
    errors: list[CheckError] = Field(default_factory=list)

    @property
    def granted(self) -> bool:
        return is_granted(self.priority)


ErrorReporter = Callable[[CheckError], None]


async def maybe_await(value: Any) -> Any:
    """Await *value* if it is awaitable, else return it unchanged."""
    if inspect.isawaitable(value):
        return await value
    return value


def provider_name(provider: object) -> str:
    return type(provider).__name__
