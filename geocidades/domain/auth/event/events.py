"""Domain events for the auth domain."""

from geocidades.domain.shared.event import Event


class UserCreated(Event):
    """Emitted after a user, their credentials and their role are saved."""

    user_id: str
    full_name: str
    email: str
    role: str
    created_by: str


class UserUpdated(Event):
    """Emitted after a user's name, status or role changes."""

    user_id: str
    full_name: str
    email: str
    role: str
    updated_by: str
    changes: list[str]


class UserDeleted(Event):
    """Emitted after a user is removed."""

    user_id: str
    full_name: str
    email: str
    deleted_by: str
