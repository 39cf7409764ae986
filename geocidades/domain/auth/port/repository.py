"""Repository ports for the auth domain."""

from abc import abstractmethod
from typing import Protocol

from geocidades.domain.auth.model.credentials import Credentials
from geocidades.domain.auth.model.role import Role
from geocidades.domain.auth.model.role_assignment import RoleAssignment
from geocidades.domain.auth.model.user import User, UserAccount
from geocidades.domain.auth.model.value import Email, UserId, UserStatus
from geocidades.domain.shared.port import Port


class UserRepository(Port, Protocol):
    """Repository for User aggregate persistence (the profile store)."""

    @abstractmethod
    async def get(self, user_id: UserId) -> User | None:
        """Get a user by ID."""
        ...

    @abstractmethod
    async def get_by_email(self, email: Email) -> User | None:
        """Get a user by login email."""
        ...

    @abstractmethod
    async def search(
        self,
        *,
        text: str | None = None,
        role: Role | None = None,
        status: UserStatus | None = None,
    ) -> list[UserAccount]:
        """List users with their role, newest first.

        Args:
            text: Case-insensitive substring matched against name and email.
            role: Only users holding this role.
            status: Only users in this status.
        """
        ...

    @abstractmethod
    async def save(self, user: User) -> None:
        """Save a user (create or update)."""
        ...

    @abstractmethod
    async def delete(self, user_id: UserId) -> bool:
        """Delete a user. Returns True if deleted, False if not found."""
        ...


class RoleRepository(Port, Protocol):
    """Repository for the one RoleAssignment each user holds (the role store)."""

    @abstractmethod
    async def get(self, user_id: UserId) -> RoleAssignment | None:
        """Get the user's current role assignment, read fresh from storage."""
        ...

    @abstractmethod
    async def save(self, assignment: RoleAssignment) -> None:
        """Create or replace the user's role assignment."""
        ...

    @abstractmethod
    async def delete(self, user_id: UserId) -> bool:
        """Delete the user's role assignment. Returns True if deleted."""
        ...


class CredentialRepository(Port, Protocol):
    """Repository for password credentials."""

    @abstractmethod
    async def get(self, user_id: UserId) -> Credentials | None: ...

    @abstractmethod
    async def save(self, credentials: Credentials) -> None: ...

    @abstractmethod
    async def delete(self, user_id: UserId) -> bool: ...
