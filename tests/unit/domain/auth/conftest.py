"""In-memory stores and fixtures for auth domain tests."""

from unittest.mock import AsyncMock

import pytest

from geocidades.domain.auth.model.credentials import Credentials
from geocidades.domain.auth.model.principal import Principal
from geocidades.domain.auth.model.role import Role
from geocidades.domain.auth.model.role_assignment import RoleAssignment
from geocidades.domain.auth.model.user import User, UserAccount
from geocidades.domain.auth.model.value import Email, UserId, UserStatus
from geocidades.domain.auth.service.user import UserManagementService


class FakeUserRepository:
    def __init__(self, roles: "FakeRoleRepository") -> None:
        self.users: dict[UserId, User] = {}
        self._roles = roles

    async def get(self, user_id: UserId) -> User | None:
        return self.users.get(user_id)

    async def get_by_email(self, email: Email) -> User | None:
        return next((u for u in self.users.values() if u.email == email), None)

    async def search(self, *, text=None, role=None, status=None) -> list[UserAccount]:
        accounts = []
        for user in sorted(self.users.values(), key=lambda u: u.created_at, reverse=True):
            assignment = self._roles.assignments.get(user.id)
            if assignment is None:
                continue
            if text and text.lower() not in f"{user.full_name} {user.email}".lower():
                continue
            if role is not None and assignment.role is not role:
                continue
            if status is not None and user.status is not status:
                continue
            accounts.append(UserAccount(user=user, role=assignment.role))
        return accounts

    async def save(self, user: User) -> None:
        self.users[user.id] = user

    async def delete(self, user_id: UserId) -> bool:
        return self.users.pop(user_id, None) is not None


class FakeRoleRepository:
    def __init__(self) -> None:
        self.assignments: dict[UserId, RoleAssignment] = {}

    async def get(self, user_id: UserId) -> RoleAssignment | None:
        return self.assignments.get(user_id)

    async def save(self, assignment: RoleAssignment) -> None:
        self.assignments[assignment.user_id] = assignment

    async def delete(self, user_id: UserId) -> bool:
        return self.assignments.pop(user_id, None) is not None


class FakeCredentialRepository:
    def __init__(self) -> None:
        self.credentials: dict[UserId, Credentials] = {}

    async def get(self, user_id: UserId) -> Credentials | None:
        return self.credentials.get(user_id)

    async def save(self, credentials: Credentials) -> None:
        self.credentials[credentials.user_id] = credentials

    async def delete(self, user_id: UserId) -> bool:
        return self.credentials.pop(user_id, None) is not None


class UserStore:
    """The three fake repositories plus a helper to add users directly."""

    def __init__(self) -> None:
        self.roles = FakeRoleRepository()
        self.users = FakeUserRepository(self.roles)
        self.credentials = FakeCredentialRepository()

    async def add(
        self,
        role: Role,
        *,
        email: str | None = None,
        full_name: str = "Test User",
        password: str = "secret123",
        status: UserStatus = UserStatus.ACTIVE,
    ) -> Principal:
        user = User.create(
            email=Email(email or f"{role.value}-{UserId.generate()}@exemplo.com.br"),
            full_name=full_name,
            status=status,
        )
        await self.users.save(user)
        await self.credentials.save(Credentials.from_password(user.id, password))
        await self.roles.save(RoleAssignment.create(user_id=user.id, role=role, assigned_by=None))
        return Principal(user_id=user.id, role=role)


@pytest.fixture
def store() -> UserStore:
    return UserStore()


@pytest.fixture
def outbox() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def user_service(store: UserStore, outbox: AsyncMock) -> UserManagementService:
    return UserManagementService(
        _user_repo=store.users,
        _role_repo=store.roles,
        _credential_repo=store.credentials,
        _outbox=outbox,
    )
