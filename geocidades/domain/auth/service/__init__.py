"""Auth domain services."""

from .token import TokenService
from .user import UserManagementService

__all__ = ["TokenService", "UserManagementService"]
