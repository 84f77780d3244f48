"""Provider backed by a static rules document (JSON or YAML)."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from rbaca.providers.collect import collect_roles

logger = logging.getLogger(__name__)


class RoleDefinition(BaseModel):
    permissions: list[str] = Field(default_factory=list)
    attributes: list[str] = Field(default_factory=list)
    inherited: list[str] | None = None


class Rules(BaseModel):
    """Roles and user assignments.

    Example (YAML)::

        roles:
          reader: {permissions: [read]}
          writer: {permissions: [create], inherited: [reader]}
        users:
          john.smith: [writer]
    """

    roles: dict[str, RoleDefinition] = Field(default_factory=dict)
    users: dict[str, list[str]] = Field(default_factory=dict)


class StaticProvider:
    """Serves roles, permissions and attributes from a ``Rules`` document.

    Subjects are looked up by their string form. Roles that are not defined
    under ``roles`` are left out of role trees.
    """

    def __init__(self, rules: Rules | Mapping[str, Any] | None = None) -> None:
        if rules is None:
            rules = Rules()
        elif not isinstance(rules, Rules):
            rules = Rules.model_validate(rules)
        self.rules = rules

    @classmethod
    def from_file(cls, path: str | Path) -> StaticProvider:
        """Load rules from a ``.json``, ``.yaml`` or ``.yml`` file."""
        path = Path(path)
        try:
            text = path.read_text()
            if path.suffix.lower() == ".json":
                raw = json.loads(text)
            else:
                raw = yaml.safe_load(text)
            return cls(Rules.model_validate(raw or {}))
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ValueError(f"Invalid rules file {path}: {e}") from e
        except ValidationError as e:
            raise ValueError(f"Invalid rules in {path}: {e}") from e

    def _inherited(self, role: str) -> list[str] | None:
        definition = self.rules.roles.get(role)
        if definition is None or definition.inherited is None:
            return None
        return [r for r in definition.inherited if r in self.rules.roles]

    async def get_roles(self, subject: Any) -> dict[str, Any]:
        assigned = [r for r in self.rules.users.get(str(subject), []) if r in self.rules.roles]
        if not assigned:
            logger.debug("No roles defined for %r", subject)
            return {}
        return await collect_roles(assigned, self._inherited)

    def get_permissions(self, role: str) -> list[str]:
        definition = self.rules.roles.get(role)
        return list(definition.permissions) if definition else []

    def get_attributes(self, role: str) -> list[str]:
        definition = self.rules.roles.get(role)
        return list(definition.attributes) if definition else []
