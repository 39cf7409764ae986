"""Role hierarchy for authorization."""

from enum import StrEnum


class Role(StrEnum):
    """The closed set of roles a user can hold. Every user holds exactly one.

    Hierarchy: ``SUPERADMIN > ADMINISTRATOR > {RESEARCHER, ANALYST, COORDINATOR}``.
    The three standard roles are peers with no privilege over each other.
    Values are the wire/storage names.
    """

    SUPERADMIN = "superadmin"
    ADMINISTRATOR = "administrator"
    RESEARCHER = "researcher"
    ANALYST = "analyst"
    COORDINATOR = "coordinator"

    @property
    def is_elevated(self) -> bool:
        """True for roles that carry privilege over other users."""
        return self in ELEVATED_ROLES

    def satisfies(self, required: "Role") -> bool:
        """Check whether holding this role meets a requirement for ``required``.

        A superadmin satisfies every requirement, an administrator satisfies
        administrator and the standard roles, a standard role only satisfies itself.
        """
        if self is required or self is Role.SUPERADMIN:
            return True
        return self is Role.ADMINISTRATOR and not required.is_elevated

    @classmethod
    def parse(cls, value: str) -> "Role":
        """Parse a role name from the API or storage. Raises ValidationError if unknown."""
        from geocidades.domain.shared.error import ValidationError

        try:
            return cls(value.strip().lower())
        except ValueError:
            allowed = ", ".join(r.value for r in cls)
            raise ValidationError(
                f"Invalid role '{value}'. Allowed: {allowed}",
                field="role",
                code="invalid_role",
            ) from None


ELEVATED_ROLES: frozenset[Role] = frozenset({Role.SUPERADMIN, Role.ADMINISTRATOR})
STANDARD_ROLES: frozenset[Role] = frozenset(
    {Role.RESEARCHER, Role.ANALYST, Role.COORDINATOR}
)
