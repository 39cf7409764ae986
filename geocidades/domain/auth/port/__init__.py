"""Auth domain ports."""

from .repository import CredentialRepository, RoleRepository, UserRepository

__all__ = [
    "CredentialRepository",
    "RoleRepository",
    "UserRepository",
]
