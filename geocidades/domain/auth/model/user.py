"""User aggregate for the auth domain."""

from dataclasses import dataclass
from datetime import UTC, datetime

from geocidades.domain.auth.model.role import Role
from geocidades.domain.auth.model.value import Email, UserId, UserStatus
from geocidades.domain.shared.model.entity import Aggregate


class User(Aggregate):
    """A staff member of the dashboard (the "profile" record).

    The user's single role lives in a separate RoleAssignment, written in the
    same unit of work as the user.

    Invariants:
    - `id`, `email` and `created_at` are immutable after creation
    - `updated_at` is set on any modification
    """

    id: UserId
    email: Email
    full_name: str
    status: UserStatus = UserStatus.ACTIVE
    created_at: datetime
    updated_at: datetime | None = None

    @classmethod
    def create(
        cls,
        email: Email,
        full_name: str,
        status: UserStatus = UserStatus.ACTIVE,
    ) -> "User":
        return cls(
            id=UserId.generate(),
            email=email,
            full_name=full_name.strip(),
            status=status,
            created_at=datetime.now(UTC),
        )

    @property
    def is_active(self) -> bool:
        return self.status is UserStatus.ACTIVE

    def rename(self, full_name: str) -> None:
        self.full_name = full_name.strip()
        self.updated_at = datetime.now(UTC)

    def set_status(self, status: UserStatus) -> None:
        self.status = status
        self.updated_at = datetime.now(UTC)

    def touch(self) -> None:
        self.updated_at = datetime.now(UTC)


@dataclass(frozen=True)
class UserAccount:
    """Read model: a user together with the role they currently hold."""

    user: User
    role: Role
