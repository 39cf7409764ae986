"""Base class for all DI providers."""

from dishka import Provider as DishkaProvider

from geocidades.util.di.scope import Scope


class Provider(DishkaProvider):
    """Dishka provider whose dependencies default to the unit-of-work scope."""

    scope = Scope.UOW
