"""Value objects for the auth domain."""

import re
from enum import StrEnum
from uuid import UUID, uuid4

from pydantic import RootModel, field_validator


class UserId(RootModel[UUID]):
    """Unique identifier for a User."""

    @classmethod
    def generate(cls) -> "UserId":
        return cls(uuid4())

    @classmethod
    def parse(cls, value: str) -> "UserId":
        """Parse a UUID string from the API. Raises ValidationError if malformed."""
        from geocidades.domain.shared.error import ValidationError

        try:
            return cls(UUID(value))
        except ValueError:
            raise ValidationError(
                f"Invalid user id: {value}", field="user_id", code="invalid_user_id"
            ) from None

    def __str__(self) -> str:
        return str(self.root)

    def __hash__(self) -> int:
        return hash(self.root)


class UserStatus(StrEnum):
    ACTIVE = "active"
    INACTIVE = "inactive"


EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MIN_PASSWORD_LENGTH = 6


class Email(RootModel[str]):
    """A login email. Stored lower-cased, immutable once the user exists."""

    @field_validator("root")
    @classmethod
    def validate_email_format(cls, v: str) -> str:
        v = v.strip().lower()
        if not EMAIL_PATTERN.match(v):
            raise ValueError(f"Invalid email format: {v}")
        return v

    def __str__(self) -> str:
        return self.root

    def __hash__(self) -> int:
        return hash(self.root)
