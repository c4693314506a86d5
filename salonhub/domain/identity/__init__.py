"""Identity domain: users, sessions and authorization."""

from salonhub.domain.identity.authorization import (
    ROLE_PERMISSIONS,
    Action,
    AuthorizationPolicy,
    Permission,
    Resource,
    permissions_for,
)
from salonhub.domain.identity.entities.session import AuthSession
from salonhub.domain.identity.entities.user import MAX_FAILED_LOGINS, User, UserRole

__all__ = [
    "MAX_FAILED_LOGINS",
    "ROLE_PERMISSIONS",
    "Action",
    "AuthSession",
    "AuthorizationPolicy",
    "Permission",
    "Resource",
    "User",
    "UserRole",
    "permissions_for",
]
