"""Auth domain events."""

from .events import UserCreated, UserDeleted, UserUpdated

__all__ = ["UserCreated", "UserDeleted", "UserUpdated"]
