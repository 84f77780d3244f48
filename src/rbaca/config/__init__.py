from .loader import DEFAULT_CONFIG_TEMPLATE, load_config
from .models import AttributeSettings, PluginsConfig, RBACConfig

__all__ = [
    "AttributeSettings",
    "DEFAULT_CONFIG_TEMPLATE",
    "PluginsConfig",
    "RBACConfig",
    "load_config",
]
