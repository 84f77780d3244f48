"""Ready-made providers and helpers for writing new ones."""

from rbaca.providers.collect import collect_roles
from rbaca.providers.static import RoleDefinition, Rules, StaticProvider

__all__ = ["RoleDefinition", "Rules", "StaticProvider", "collect_roles"]
