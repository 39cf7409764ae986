"""Error hierarchy shared by the domain, infrastructure and API layers.

Every error carries a human-readable ``message`` and a machine-readable
``code``. The API layer maps error types to HTTP status codes; the domain
never decides on transport details.
"""


class GeoCidadesError(Exception):
    """Base class for all GeoCidades errors."""

    default_code: str = "error"

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code


class DomainError(GeoCidadesError):
    """A business rule was violated. Expected and recoverable."""

    default_code = "domain_error"


class ValidationError(DomainError):
    """Malformed input unrelated to privilege (email format, password length...)."""

    default_code = "validation_error"

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        code: str | None = None,
    ) -> None:
        super().__init__(message, code=code)
        self.field = field


class NotFoundError(DomainError):
    default_code = "not_found"


class ConflictError(DomainError):
    default_code = "conflict"


class AuthorizationError(DomainError):
    """The caller is not allowed to perform the requested action.

    ``code == "missing_token"`` means the caller is not authenticated at all.
    """

    default_code = "access_denied"


class InsufficientPrivilege(AuthorizationError):
    """The actor lacks the rank to modify or delete the target."""

    default_code = "insufficient_privilege"


class PrivilegeEscalation(AuthorizationError):
    """The actor tried to grant a role above their granting authority."""

    default_code = "privilege_escalation"


class SelfDeletionForbidden(AuthorizationError):
    """The actor targeted their own account for deletion."""

    default_code = "self_deletion_forbidden"


class InfrastructureError(GeoCidadesError):
    """A backing service (database, webhook...) failed."""

    default_code = "infrastructure_error"


class ConfigurationError(GeoCidadesError):
    """The application is wired or configured incorrectly. Raised at startup."""

    default_code = "configuration_error"
