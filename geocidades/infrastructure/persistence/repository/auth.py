"""SQL repository implementations for the auth domain."""

from uuid import UUID

from sqlalchemy import delete, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from geocidades.domain.auth.model.credentials import Credentials
from geocidades.domain.auth.model.role import Role
from geocidades.domain.auth.model.role_assignment import RoleAssignment
from geocidades.domain.auth.model.user import User, UserAccount
from geocidades.domain.auth.model.value import Email, UserId, UserStatus
from geocidades.domain.auth.port.repository import (
    CredentialRepository,
    RoleRepository,
    UserRepository,
)
from geocidades.infrastructure.persistence.tables import (
    credentials_table,
    user_roles_table,
    users_table,
)


def _contains_pattern(text: str) -> str:
    """Build a LIKE pattern matching ``text`` literally anywhere in the value."""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _row_to_user(row: dict) -> User:
    """Convert a database row to a User model."""
    return User(
        id=UserId(UUID(row["id"])),
        email=Email(row["email"]),
        full_name=row["full_name"],
        status=UserStatus(row["status"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _user_to_dict(user: User) -> dict:
    """Convert a User model to a database row dict."""
    return {
        "id": str(user.id),
        "email": str(user.email),
        "full_name": user.full_name,
        "status": user.status.value,
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }


def _row_to_role_assignment(row: dict) -> RoleAssignment:
    """Convert a database row to a RoleAssignment model."""
    return RoleAssignment(
        user_id=UserId(UUID(row["user_id"])),
        role=Role(row["role"]),
        assigned_by=UserId(UUID(row["assigned_by"])) if row["assigned_by"] else None,
        assigned_at=row["assigned_at"],
    )


def _role_assignment_to_dict(assignment: RoleAssignment) -> dict:
    """Convert a RoleAssignment model to a database row dict."""
    return {
        "user_id": str(assignment.user_id),
        "role": assignment.role.value,
        "assigned_by": str(assignment.assigned_by) if assignment.assigned_by else None,
        "assigned_at": assignment.assigned_at,
    }


class SqlUserRepository(UserRepository):
    """SQLAlchemy implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, user_id: UserId) -> User | None:
        stmt = select(users_table).where(users_table.c.id == str(user_id))
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_user(dict(row)) if row else None

    async def get_by_email(self, email: Email) -> User | None:
        stmt = select(users_table).where(users_table.c.email == str(email))
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_user(dict(row)) if row else None

    async def search(
        self,
        *,
        text: str | None = None,
        role: Role | None = None,
        status: UserStatus | None = None,
    ) -> list[UserAccount]:
        stmt = select(users_table, user_roles_table.c.role).join(
            user_roles_table, user_roles_table.c.user_id == users_table.c.id
        )
        if text:
            pattern = _contains_pattern(text)
            stmt = stmt.where(
                or_(
                    users_table.c.full_name.ilike(pattern, escape="\\"),
                    users_table.c.email.ilike(pattern, escape="\\"),
                )
            )
        if role is not None:
            stmt = stmt.where(user_roles_table.c.role == role.value)
        if status is not None:
            stmt = stmt.where(users_table.c.status == status.value)
        stmt = stmt.order_by(users_table.c.created_at.desc())

        result = await self.session.execute(stmt)
        return [
            UserAccount(user=_row_to_user(dict(row)), role=Role(row["role"]))
            for row in result.mappings().all()
        ]

    async def save(self, user: User) -> None:
        user_dict = _user_to_dict(user)
        existing = await self.get(user.id)

        if existing:
            stmt = update(users_table).where(users_table.c.id == str(user.id)).values(**user_dict)
        else:
            stmt = insert(users_table).values(**user_dict)

        await self.session.execute(stmt)
        await self.session.flush()

    async def delete(self, user_id: UserId) -> bool:
        stmt = delete(users_table).where(users_table.c.id == str(user_id))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0


class SqlRoleRepository(RoleRepository):
    """SQLAlchemy implementation of RoleRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, user_id: UserId) -> RoleAssignment | None:
        stmt = select(user_roles_table).where(user_roles_table.c.user_id == str(user_id))
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_role_assignment(dict(row)) if row else None

    async def save(self, assignment: RoleAssignment) -> None:
        assignment_dict = _role_assignment_to_dict(assignment)
        existing = await self.get(assignment.user_id)

        if existing:
            stmt = (
                update(user_roles_table)
                .where(user_roles_table.c.user_id == str(assignment.user_id))
                .values(**assignment_dict)
            )
        else:
            stmt = insert(user_roles_table).values(**assignment_dict)

        await self.session.execute(stmt)
        await self.session.flush()

    async def delete(self, user_id: UserId) -> bool:
        stmt = delete(user_roles_table).where(user_roles_table.c.user_id == str(user_id))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0


class SqlCredentialRepository(CredentialRepository):
    """SQLAlchemy implementation of CredentialRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, user_id: UserId) -> Credentials | None:
        stmt = select(credentials_table).where(credentials_table.c.user_id == str(user_id))
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        if row is None:
            return None
        return Credentials(
            user_id=UserId(UUID(row["user_id"])),
            password_hash=row["password_hash"],
        )

    async def save(self, credentials: Credentials) -> None:
        values = {
            "user_id": str(credentials.user_id),
            "password_hash": credentials.password_hash,
        }
        await self.delete(credentials.user_id)
        await self.session.execute(insert(credentials_table).values(**values))
        await self.session.flush()

    async def delete(self, user_id: UserId) -> bool:
        stmt = delete(credentials_table).where(credentials_table.c.user_id == str(user_id))
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0
