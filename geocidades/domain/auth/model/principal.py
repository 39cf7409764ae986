"""Principal: authenticated identity with its role, resolved per-request."""

from dataclasses import dataclass

from geocidades.domain.auth.model.identity import Identity
from geocidades.domain.auth.model.role import Role
from geocidades.domain.auth.model.value import UserId


@dataclass(frozen=True)
class Principal(Identity):
    """The authenticated identity of the current requester.

    Resolved per-request from the JWT plus a fresh role lookup. Immutable after
    creation, never cached across requests, so a role change applies on the
    very next request.
    """

    user_id: UserId
    role: Role

    def has_role(self, role: Role) -> bool:
        """Check whether the principal's role meets ``role`` (hierarchy comparison)."""
        return self.role.satisfies(role)
