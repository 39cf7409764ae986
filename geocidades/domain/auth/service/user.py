"""User management service: the authoritative enforcement point.

Every mutating operation re-reads the acting principal's role and the
target's role from the role store, runs the matching ``authorize_*`` guard
and only then touches storage. The read and the write share the unit of
work's session, so the check and the mutation see the same data.
"""

import logging

from geocidades.domain.auth.event import UserCreated, UserDeleted, UserUpdated
from geocidades.domain.auth.model.credentials import Credentials
from geocidades.domain.auth.model.principal import Principal
from geocidades.domain.auth.model.role import Role
from geocidades.domain.auth.model.role_assignment import RoleAssignment
from geocidades.domain.auth.model.user import User, UserAccount
from geocidades.domain.auth.model.value import Email, UserId, UserStatus
from geocidades.domain.auth.port.repository import (
    CredentialRepository,
    RoleRepository,
    UserRepository,
)
from geocidades.domain.shared.authorization.user_policy import (
    authorize_user_create,
    authorize_user_delete,
    authorize_user_update,
)
from geocidades.domain.shared.error import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from geocidades.domain.shared.outbox import Outbox
from geocidades.domain.shared.service import Service

logger = logging.getLogger(__name__)


def _require_name(full_name: str) -> str:
    name = full_name.strip()
    if not name:
        raise ValidationError("Full name is required", field="full_name", code="missing_name")
    return name


class UserManagementService(Service):
    """Creates, edits, deletes and lists dashboard users."""

    _user_repo: UserRepository
    _role_repo: RoleRepository
    _credential_repo: CredentialRepository
    _outbox: Outbox

    async def create_user(
        self,
        actor: Principal,
        *,
        email: str,
        password: str,
        full_name: str,
        role: Role,
        status: UserStatus = UserStatus.ACTIVE,
    ) -> UserAccount:
        """Create a user, their credentials and their role in one unit of work.

        Raises:
            InsufficientPrivilege / PrivilegeEscalation: see ``authorize_user_create``.
            ValidationError: malformed email, short password or empty name.
            ConflictError: the email is already registered.
        """
        acting_role = await self._current_role(actor)
        try:
            authorize_user_create(acting_role, role, email=email, password=password)
        except AuthorizationError as e:
            self._log_denial("create", actor, None, e)
            raise

        name = _require_name(full_name)
        login = Email(email)
        if await self._user_repo.get_by_email(login) is not None:
            raise ConflictError(f"Email already registered: {login}", code="email_taken")

        user = User.create(email=login, full_name=name, status=status)
        await self._user_repo.save(user)
        await self._credential_repo.save(Credentials.from_password(user.id, password))
        await self._role_repo.save(
            RoleAssignment.create(user_id=user.id, role=role, assigned_by=actor.user_id)
        )
        logger.info(
            "User created: user_id=%s role=%s by=%s", user.id, role, actor.user_id
        )

        await self._outbox.append(
            UserCreated(
                user_id=str(user.id),
                full_name=user.full_name,
                email=str(user.email),
                role=role.value,
                created_by=str(actor.user_id),
            )
        )
        return UserAccount(user=user, role=role)

    async def update_user(
        self,
        actor: Principal,
        user_id: UserId,
        *,
        full_name: str | None = None,
        status: UserStatus | None = None,
        role: Role | None = None,
    ) -> UserAccount:
        """Change another user's name, status and/or role.

        Raises:
            NotFoundError: no such user.
            InsufficientPrivilege / PrivilegeEscalation: see ``authorize_user_update``.
            ValidationError: empty name.
        """
        acting_role = await self._current_role(actor)
        user = await self._get_user(user_id)
        assignment = await self._get_assignment(user_id)

        try:
            authorize_user_update(
                acting_role,
                assignment.role,
                role,
                acting_user_id=actor.user_id,
                target_user_id=user_id,
            )
        except AuthorizationError as e:
            self._log_denial("update", actor, user_id, e)
            raise

        changes: list[str] = []
        if full_name is not None:
            name = _require_name(full_name)
            if name != user.full_name:
                user.rename(name)
                changes.append("full_name")
        if status is not None and status is not user.status:
            user.set_status(status)
            changes.append("status")
        if role is not None and role is not assignment.role:
            assignment.reassign(role, assigned_by=actor.user_id)
            await self._role_repo.save(assignment)
            user.touch()
            changes.append("role")

        if not changes:
            return UserAccount(user=user, role=assignment.role)

        await self._user_repo.save(user)
        logger.info(
            "User updated: user_id=%s changes=%s by=%s", user_id, changes, actor.user_id
        )
        await self._outbox.append(
            UserUpdated(
                user_id=str(user.id),
                full_name=user.full_name,
                email=str(user.email),
                role=assignment.role.value,
                updated_by=str(actor.user_id),
                changes=changes,
            )
        )
        return UserAccount(user=user, role=assignment.role)

    async def delete_user(self, actor: Principal, user_id: UserId) -> None:
        """Delete another user together with their role and credentials.

        Raises:
            SelfDeletionForbidden: the actor targeted themselves.
            NotFoundError: no such user.
            InsufficientPrivilege: see ``authorize_user_delete``.
        """
        acting_role = await self._current_role(actor)
        user = await self._get_user(user_id)
        assignment = await self._get_assignment(user_id)

        try:
            authorize_user_delete(acting_role, assignment.role, actor.user_id, user_id)
        except AuthorizationError as e:
            self._log_denial("delete", actor, user_id, e)
            raise

        await self._role_repo.delete(user_id)
        await self._credential_repo.delete(user_id)
        await self._user_repo.delete(user_id)
        logger.info("User deleted: user_id=%s by=%s", user_id, actor.user_id)

        await self._outbox.append(
            UserDeleted(
                user_id=str(user.id),
                full_name=user.full_name,
                email=str(user.email),
                deleted_by=str(actor.user_id),
            )
        )

    async def get_user(self, user_id: UserId) -> UserAccount:
        user = await self._get_user(user_id)
        assignment = await self._get_assignment(user_id)
        return UserAccount(user=user, role=assignment.role)

    async def list_users(
        self,
        *,
        search: str | None = None,
        role: Role | None = None,
        status: UserStatus | None = None,
    ) -> list[UserAccount]:
        text = search.strip() if search else None
        return await self._user_repo.search(text=text or None, role=role, status=status)

    async def update_profile(self, actor: Principal, *, full_name: str) -> UserAccount:
        """Self-service: the actor renames themselves. Nothing else is editable here."""
        user = await self._get_user(actor.user_id)
        acting_role = await self._current_role(actor)
        name = _require_name(full_name)
        if name != user.full_name:
            user.rename(name)
            await self._user_repo.save(user)
            await self._outbox.append(
                UserUpdated(
                    user_id=str(user.id),
                    full_name=user.full_name,
                    email=str(user.email),
                    role=acting_role.value,
                    updated_by=str(actor.user_id),
                    changes=["full_name"],
                )
            )
        return UserAccount(user=user, role=acting_role)

    async def authenticate(self, email: str, password: str) -> UserAccount:
        """Check a login. Raises AuthorizationError on bad credentials or inactive users."""
        invalid = AuthorizationError("Invalid email or password", code="invalid_credentials")
        try:
            login = Email(email)
        except ValueError:
            raise invalid from None

        user = await self._user_repo.get_by_email(login)
        credentials = await self._credential_repo.get(user.id) if user else None
        if user is None or credentials is None or not credentials.verify(password):
            logger.warning("Login failed for %s", login)
            raise invalid
        if not user.is_active:
            logger.warning("Login refused for inactive user %s", user.id)
            raise AuthorizationError("Account is inactive", code="account_inactive")

        assignment = await self._get_assignment(user.id)
        return UserAccount(user=user, role=assignment.role)

    async def _current_role(self, actor: Principal) -> Role:
        """Re-read the actor's role from the role store. Never trusts ``actor.role``."""
        assignment = await self._role_repo.get(actor.user_id)
        if assignment is None:
            raise AuthorizationError("Authentication required", code="missing_token")
        if assignment.role is not actor.role:
            logger.info(
                "Role of %s changed from %s to %s during request",
                actor.user_id,
                actor.role,
                assignment.role,
            )
        return assignment.role

    async def _get_user(self, user_id: UserId) -> User:
        user = await self._user_repo.get(user_id)
        if user is None:
            raise NotFoundError(f"User not found: {user_id}", code="user_not_found")
        return user

    async def _get_assignment(self, user_id: UserId) -> RoleAssignment:
        assignment = await self._role_repo.get(user_id)
        if assignment is None:
            raise NotFoundError(f"User has no role: {user_id}", code="role_not_found")
        return assignment

    @staticmethod
    def _log_denial(
        action: str,
        actor: Principal,
        target: UserId | None,
        error: AuthorizationError,
    ) -> None:
        logger.warning(
            "User management denied: action=%s actor=%s target=%s code=%s",
            action,
            actor.user_id,
            target,
            error.code,
        )
