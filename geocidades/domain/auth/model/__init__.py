"""Auth domain models."""

from .credentials import Credentials
from .identity import Anonymous, Identity
from .menu import MENU, MenuItem, has_access, menu_for
from .principal import Principal
from .role import ELEVATED_ROLES, STANDARD_ROLES, Role
from .role_assignment import RoleAssignment
from .user import User, UserAccount
from .value import Email, UserId, UserStatus

__all__ = [
    "Anonymous",
    "Credentials",
    "ELEVATED_ROLES",
    "Email",
    "Identity",
    "MENU",
    "MenuItem",
    "Principal",
    "Role",
    "RoleAssignment",
    "STANDARD_ROLES",
    "User",
    "UserAccount",
    "UserId",
    "UserStatus",
    "has_access",
    "menu_for",
]
