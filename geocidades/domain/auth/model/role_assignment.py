"""RoleAssignment entity: the one role a user currently holds."""

from datetime import UTC, datetime

from geocidades.domain.auth.model.role import Role
from geocidades.domain.auth.model.value import UserId
from geocidades.domain.shared.model.entity import Entity


class RoleAssignment(Entity):
    """Association between a user and their role. Exactly one per user."""

    user_id: UserId
    role: Role
    assigned_by: UserId | None
    assigned_at: datetime

    @classmethod
    def create(
        cls,
        user_id: UserId,
        role: Role,
        assigned_by: UserId | None,
    ) -> "RoleAssignment":
        return cls(
            user_id=user_id,
            role=role,
            assigned_by=assigned_by,
            assigned_at=datetime.now(UTC),
        )

    def reassign(self, role: Role, assigned_by: UserId) -> None:
        self.role = role
        self.assigned_by = assigned_by
        self.assigned_at = datetime.now(UTC)
