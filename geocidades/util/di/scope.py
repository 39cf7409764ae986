"""Custom Dishka scopes for GeoCidades."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """Dependency injection scopes.

    Hierarchy: APP -> UOW

    - APP: Application lifetime (singletons)
    - UOW: Unit of Work (one HTTP request, one DB transaction)
    """

    APP = new_scope("APP")
    UOW = new_scope("UOW")
