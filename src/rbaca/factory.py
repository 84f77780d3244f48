"""Build a ready-to-use checker from configuration."""

from __future__ import annotations

import logging

from rbaca.attributes.registry import AttributeRegistry
from rbaca.config.models import RBACConfig
from rbaca.engine.checker import PermissionChecker
from rbaca.plugins.loader import PluginLoader
from rbaca.providers.static import StaticProvider

logger = logging.getLogger(__name__)


def create_checker(
    config: RBACConfig | None = None,
    attributes: AttributeRegistry | None = None,
) -> PermissionChecker:
    """Create a PermissionChecker from app-level config.

    Registers a StaticProvider when ``rules_file`` is set, then one instance
    of each provider named under ``plugins.providers``. When *attributes* is
    omitted a registry is created with the configured missing-attribute policy.
    """
    config = config or RBACConfig()
    if attributes is None:
        attributes = AttributeRegistry(missing=config.attributes.missing)

    checker = PermissionChecker(attributes)
    if config.rules_file:
        checker.add_provider(StaticProvider.from_file(config.rules_file))
    for provider in PluginLoader(config).load_providers():
        checker.add_provider(provider)

    logger.debug("Created checker with %d provider(s)", len(checker.providers))
    return checker
