"""Read DTO for a user as exposed to handlers and the API."""

from datetime import datetime

from pydantic import BaseModel

from geocidades.domain.auth.model.user import UserAccount


class UserView(BaseModel):
    id: str
    email: str
    full_name: str
    role: str
    status: str
    created_at: datetime
    updated_at: datetime | None = None

    @classmethod
    def from_account(cls, account: UserAccount) -> "UserView":
        user = account.user
        return cls(
            id=str(user.id),
            email=str(user.email),
            full_name=user.full_name,
            role=account.role.value,
            status=user.status.value,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
