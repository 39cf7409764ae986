"""Policy types for handler-level authorization gates."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from geocidades.domain.auth.model.principal import Principal
    from geocidades.domain.auth.model.role import Role


class Policy(ABC):
    """Base class for handler authorization policies.

    Policies are evaluated at the handler level as a coarse pre-filter
    (role check only, no target loaded yet). Fine-grained user-management
    rules live in ``user_policy``.
    """

    @abstractmethod
    def evaluate(self, principal: "Principal") -> bool:
        """Return True if principal satisfies this policy."""
        ...


@dataclass(frozen=True)
class Authenticated(Policy):
    """Any authenticated principal, whatever the role."""

    def evaluate(self, principal: "Principal") -> bool:
        return True


@dataclass(frozen=True)
class RequiresRole(Policy):
    """Policy that checks principal's role meets the given role (hierarchy)."""

    role: "Role"

    def evaluate(self, principal: "Principal") -> bool:
        return principal.has_role(self.role)


_AUTHENTICATED = Authenticated()


def authenticated() -> Authenticated:
    """Factory: policy satisfied by any authenticated principal."""
    return _AUTHENTICATED


def requires_role(role: "Role") -> RequiresRole:
    """Factory: policy requiring at least the given role."""
    return RequiresRole(role=role)
