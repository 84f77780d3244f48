"""Provider discovery and loading via entry points."""

from __future__ import annotations

import importlib.metadata
import logging
from typing import TYPE_CHECKING

from rbaca.errors import PluginNotFoundError
from rbaca.interfaces.provider import Provider

if TYPE_CHECKING:
    from rbaca.config.models import RBACConfig

logger = logging.getLogger(__name__)

PROVIDER_GROUP = "rbaca.providers"


class PluginLoader:
    """Finds provider classes registered under the ``rbaca.providers`` group."""

    def __init__(self, config: RBACConfig):
        self._config = config

    def discover(self) -> list[str]:
        """Names of every registered provider entry point."""
        return sorted(ep.name for ep in importlib.metadata.entry_points(group=PROVIDER_GROUP))

    def load_provider(self, name: str) -> type[Provider]:
        for ep in importlib.metadata.entry_points(group=PROVIDER_GROUP):
            if ep.name == name:
                logger.debug("Loading provider %r from %s", name, ep.value)
                return ep.load()
        raise PluginNotFoundError("provider", name)

    def load_providers(self) -> list[Provider]:
        """Instantiate every provider named in ``config.plugins.providers``."""
        return [self.load_provider(name)() for name in self._config.plugins.providers]
