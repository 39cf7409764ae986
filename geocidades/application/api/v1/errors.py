"""Centralized error transformation for API routes.

Maps GeoCidades errors (domain and infrastructure) to HTTPException responses.
"""

from typing import Any

from fastapi import HTTPException

from geocidades.domain.shared.error import (
    AuthorizationError,
    ConflictError,
    DomainError,
    GeoCidadesError,
    InfrastructureError,
    NotFoundError,
    ValidationError,
)

DOMAIN_ERROR_STATUS_MAP: dict[type[DomainError], int] = {
    NotFoundError: 404,
    ValidationError: 400,
    ConflictError: 409,
    AuthorizationError: 403,
}

# Authorization codes that mean "who are you?" rather than "you may not"
UNAUTHENTICATED_CODES = frozenset({"missing_token", "invalid_credentials"})


def _domain_status(error: DomainError) -> int:
    for cls in type(error).__mro__:
        if cls in DOMAIN_ERROR_STATUS_MAP:
            return DOMAIN_ERROR_STATUS_MAP[cls]
    return 400


def map_error(error: GeoCidadesError) -> HTTPException:
    """Map a GeoCidades error to an HTTPException.

    Args:
        error: The error to map.

    Returns:
        HTTPException with appropriate status code and detail.
    """
    detail: dict[str, Any] = {
        "code": error.code,
        "message": error.message,
    }

    if isinstance(error, InfrastructureError):
        # Infrastructure errors → 503 Service Unavailable
        return HTTPException(status_code=503, detail=detail)

    if isinstance(error, DomainError):
        if isinstance(error, ValidationError) and error.field is not None:
            detail["field"] = error.field
        # Distinguish 401 (unauthenticated) from 403 (unauthorized)
        if isinstance(error, AuthorizationError) and error.code in UNAUTHENTICATED_CODES:
            return HTTPException(
                status_code=401,
                detail=detail,
                headers={"WWW-Authenticate": "Bearer"},
            )
        return HTTPException(status_code=_domain_status(error), detail=detail)

    # Configuration errors and unknown subclasses
    return HTTPException(status_code=500, detail=detail)
