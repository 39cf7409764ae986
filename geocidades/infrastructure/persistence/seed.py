"""Seed data for development and demo databases.

Seeding writes straight through the repositories: there is no acting
principal yet, so nothing here goes through the user-management guards.
"""

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from geocidades.domain.auth.model.credentials import Credentials
from geocidades.domain.auth.model.role import Role
from geocidades.domain.auth.model.role_assignment import RoleAssignment
from geocidades.domain.auth.model.user import User
from geocidades.domain.auth.model.value import Email
from geocidades.domain.shared.authorization.user_policy import validate_credentials
from geocidades.infrastructure.persistence.repository.auth import (
    SqlCredentialRepository,
    SqlRoleRepository,
    SqlUserRepository,
)

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "Test@123456"


@dataclass(frozen=True)
class SeedUser:
    email: str
    full_name: str
    role: Role


DEMO_USERS: tuple[SeedUser, ...] = (
    SeedUser("admin1@exemplo.com.br", "Admin User One", Role.ADMINISTRATOR),
    SeedUser("admin2@exemplo.com.br", "Admin User Two", Role.ADMINISTRATOR),
    SeedUser("admin3@exemplo.com.br", "Admin User Three", Role.ADMINISTRATOR),
    SeedUser("admin4@exemplo.com.br", "Admin User Four", Role.ADMINISTRATOR),
    SeedUser("admin5@exemplo.com.br", "Admin User Five", Role.ADMINISTRATOR),
)


async def ensure_user(session: AsyncSession, seed: SeedUser, password: str) -> bool:
    """Create the user unless the email is already registered.

    Returns True if a user was created. Idempotent.
    """
    validate_credentials(seed.email, password)
    users = SqlUserRepository(session)
    email = Email(seed.email)
    if await users.get_by_email(email) is not None:
        logger.debug("Seed user already present: %s", email)
        return False

    user = User.create(email=email, full_name=seed.full_name)
    await users.save(user)
    await SqlCredentialRepository(session).save(Credentials.from_password(user.id, password))
    await SqlRoleRepository(session).save(
        RoleAssignment.create(user_id=user.id, role=seed.role, assigned_by=None)
    )
    logger.info("Seeded user %s (role=%s)", email, seed.role)
    return True


async def seed_demo_users(session: AsyncSession, password: str = DEMO_PASSWORD) -> list[str]:
    """Create the demo administrators. Returns the emails that were created."""
    created = []
    for seed in DEMO_USERS:
        if await ensure_user(session, seed, password):
            created.append(seed.email)
    return created


async def ensure_superadmin(
    session: AsyncSession, email: str, password: str, full_name: str = "Superadmin"
) -> bool:
    """Bootstrap a superadmin. Only superadmins can create other elevated users."""
    return await ensure_user(session, SeedUser(email, full_name, Role.SUPERADMIN), password)
