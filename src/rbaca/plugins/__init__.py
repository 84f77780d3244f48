"""Dynamic provider discovery and loading."""

from rbaca.errors import PluginNotFoundError
from rbaca.plugins.loader import PROVIDER_GROUP, PluginLoader

__all__ = ["PROVIDER_GROUP", "PluginLoader", "PluginNotFoundError"]
