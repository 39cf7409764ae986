from dishka import AsyncContainer, make_async_container

from geocidades.config import Config
from geocidades.domain.auth.util.di import AuthProvider
from geocidades.infrastructure.event.di import EventProvider
from geocidades.infrastructure.notification.di import NotificationProvider
from geocidades.infrastructure.persistence import PersistenceProvider
from geocidades.util.di.scope import Scope


def create_container(config: Config | None = None) -> AsyncContainer:
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    return make_async_container(
        PersistenceProvider(),
        NotificationProvider(),
        EventProvider(),
        AuthProvider(),
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
