"""Models shared by the attribute registry and the attribute filter."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class MissingAttributePolicy(str, Enum):
    """What happens when a role declares an attribute nobody registered."""

    deny = "deny"
    skip = "skip"
    raise_ = "raise"


class AttributeContext(BaseModel):
    """Arguments handed to an attribute predicate."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    subject: Any
    role: str
    params: dict[Any, Any] = Field(default_factory=dict)
