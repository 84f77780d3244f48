"""Permission check engine."""

from rbaca.engine.checker import ErrorListener, PermissionChecker
from rbaca.engine.expression import PermissionExpression, PermissionsInput, parse_permissions
from rbaca.engine.filter import AttributeFilter
from rbaca.engine.matcher import PermissionMatcher, build_table
from rbaca.engine.models import (
    ANY_ROLE,
    DENIED,
    CheckError,
    CheckResult,
    ErrorSource,
    is_granted,
)
from rbaca.engine.resolver import RoleResolver, flatten, merge_priorities

__all__ = [
    "ANY_ROLE",
    "DENIED",
    "AttributeFilter",
    "CheckError",
    "CheckResult",
    "ErrorListener",
    "ErrorSource",
    "PermissionChecker",
    "PermissionExpression",
    "PermissionMatcher",
    "PermissionsInput",
    "RoleResolver",
    "build_table",
    "flatten",
    "is_granted",
    "merge_priorities",
    "parse_permissions",
]
