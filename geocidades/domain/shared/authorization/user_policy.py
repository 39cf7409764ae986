"""User-management authorization rules.

The single source of truth for who may create, modify, delete and assign
roles to which users. Every function here is pure: it only looks at the
arguments, holds no state and performs no I/O. Callers must pass the acting
role freshly read from the role store; nothing is cached between calls.

The boolean predicates (``can_*``) are what a UI uses to decide what to
enable. The ``authorize_*`` guards are what the server runs before every
mutation; they return ``None`` when allowed and raise a typed
``AuthorizationError`` (or ``ValidationError``) when not.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from geocidades.domain.auth.model.role import Role
from geocidades.domain.auth.model.value import EMAIL_PATTERN, MIN_PASSWORD_LENGTH
from geocidades.domain.shared.error import (
    InsufficientPrivilege,
    PrivilegeEscalation,
    SelfDeletionForbidden,
    ValidationError,
)

if TYPE_CHECKING:
    from geocidades.domain.auth.model.value import UserId


def can_modify(acting_role: Role, target_role: Role) -> bool:
    """Whether a user holding ``acting_role`` may edit or delete a ``target_role`` user.

    Superadmins may modify anyone. Nobody else may touch an administrator or
    superadmin. Administrators may modify standard users; standard roles may
    modify no one.
    """
    if acting_role is Role.SUPERADMIN:
        return True
    if target_role.is_elevated:
        return False
    return acting_role is Role.ADMINISTRATOR


def can_delete(
    acting_role: Role,
    target_role: Role,
    acting_user_id: UserId,
    target_user_id: UserId,
) -> bool:
    """Like ``can_modify``, but self-deletion is always denied."""
    if acting_user_id == target_user_id:
        return False
    return can_modify(acting_role, target_role)


def can_assign_role(acting_role: Role, role_being_assigned: Role) -> bool:
    """Whether ``acting_role`` may grant ``role_being_assigned`` to a new or existing user.

    Only superadmins may grant elevated roles; administrators and superadmins
    may grant standard roles.
    """
    if role_being_assigned.is_elevated:
        return acting_role is Role.SUPERADMIN
    return acting_role.is_elevated


def _modify_denied(target_role: Role, verb: str) -> InsufficientPrivilege:
    if target_role.is_elevated:
        return InsufficientPrivilege(f"Only superadmins may {verb} administrators")
    return InsufficientPrivilege(f"Only administrators may {verb} users")


def validate_credentials(email: str, password: str) -> None:
    """Raise ValidationError if the email is malformed or the password too short."""
    if not EMAIL_PATTERN.match(email.strip()):
        raise ValidationError("Invalid email format", field="email", code="invalid_email")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
            field="password",
            code="password_too_short",
        )


def authorize_user_create(
    acting_role: Role,
    new_user_role: Role,
    *,
    email: str | None = None,
    password: str | None = None,
) -> None:
    """Guard for creating a user with ``new_user_role``.

    Privilege is checked before the input, so a caller without rights learns
    nothing about the validity of what they sent.

    Raises:
        InsufficientPrivilege: the actor may not create users at all.
        PrivilegeEscalation: the actor may create users, but not with this role.
        ValidationError: malformed email or short password (when supplied).
    """
    if not acting_role.is_elevated:
        raise InsufficientPrivilege("Only administrators may create users")
    if not can_assign_role(acting_role, new_user_role):
        raise PrivilegeEscalation(
            f"Only superadmins may create users with role {new_user_role}"
        )
    if email is not None or password is not None:
        validate_credentials(email or "", password or "")


def authorize_user_update(
    acting_role: Role,
    target_role: Role,
    new_role: Role | None = None,
    *,
    acting_user_id: UserId | None = None,
    target_user_id: UserId | None = None,
) -> None:
    """Guard for editing a ``target_role`` user, optionally changing their role.

    Raises:
        InsufficientPrivilege: the actor may not modify this user (including themselves).
        PrivilegeEscalation: the actor may modify the user but not grant ``new_role``.
    """
    if acting_user_id is not None and acting_user_id == target_user_id:
        raise InsufficientPrivilege(
            "You cannot modify your own account here",
            code="self_modification_forbidden",
        )
    if not can_modify(acting_role, target_role):
        raise _modify_denied(target_role, "modify")
    if new_role is not None and new_role is not target_role:
        if not can_assign_role(acting_role, new_role):
            raise PrivilegeEscalation(
                "Only superadmins may promote users to administrator or superadmin"
            )


def authorize_user_delete(
    acting_role: Role,
    target_role: Role,
    acting_user_id: UserId,
    target_user_id: UserId,
) -> None:
    """Guard for deleting a ``target_role`` user.

    Raises:
        SelfDeletionForbidden: actor and target are the same user.
        InsufficientPrivilege: the actor may not delete this user.
    """
    if acting_user_id == target_user_id:
        raise SelfDeletionForbidden("You cannot delete your own account")
    if not can_modify(acting_role, target_role):
        raise _modify_denied(target_role, "delete")
