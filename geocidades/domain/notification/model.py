"""Notification value objects."""

from pydantic import BaseModel


class Notification(BaseModel):
    """A rendered message about a user change, addressed to an administrator."""

    kind: str  # "created" | "updated" | "deleted"
    subject: str
    body: str
    recipient: str | None = None
