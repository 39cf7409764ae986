"""Base classes for domain entities and aggregates."""

from pydantic import BaseModel, ConfigDict


class Entity(BaseModel):
    """An object with identity. Fields are validated on assignment."""

    model_config = ConfigDict(validate_assignment=True)


class Aggregate(Entity):
    """Consistency boundary: repositories load and save whole aggregates."""
