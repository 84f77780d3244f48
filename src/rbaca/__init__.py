"""rbaca - role-based access control with attributes, for asyncio applications."""

from rbaca.attributes import AttributeContext, AttributeRegistry, MissingAttributePolicy
from rbaca.config import RBACConfig, load_config
from rbaca.engine import (
    DENIED,
    CheckError,
    CheckResult,
    ErrorSource,
    PermissionChecker,
    PermissionExpression,
    is_granted,
    parse_permissions,
)
from rbaca.errors import (
    ExpressionError,
    InvalidProviderError,
    PluginNotFoundError,
    RBACError,
    UnknownAttributeError,
)
from rbaca.factory import create_checker
from rbaca.interfaces import Provider, RoleTree
from rbaca.providers import Rules, StaticProvider, collect_roles

__version__ = "0.1.0"

__all__ = [
    "DENIED",
    "AttributeContext",
    "AttributeRegistry",
    "CheckError",
    "CheckResult",
    "ErrorSource",
    "ExpressionError",
    "InvalidProviderError",
    "MissingAttributePolicy",
    "PermissionChecker",
    "PermissionExpression",
    "PluginNotFoundError",
    "Provider",
    "RBACConfig",
    "RBACError",
    "RoleTree",
    "Rules",
    "StaticProvider",
    "UnknownAttributeError",
    "collect_roles",
    "create_checker",
    "is_granted",
    "load_config",
    "parse_permissions",
]
