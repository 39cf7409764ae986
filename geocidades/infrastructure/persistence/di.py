from typing import AsyncIterable

from dishka import from_context, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from geocidades.config import Config
from geocidades.domain.auth.port.repository import (
    CredentialRepository,
    RoleRepository,
    UserRepository,
)
from geocidades.domain.shared.event import EventRepository
from geocidades.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
)
from geocidades.infrastructure.persistence.repository.auth import (
    SqlCredentialRepository,
    SqlRoleRepository,
    SqlUserRepository,
)
from geocidades.infrastructure.persistence.repository.event import SqlEventRepository
from geocidades.util.di.base import Provider
from geocidades.util.di.scope import Scope


class PersistenceProvider(Provider):
    config = from_context(provides=Config, scope=Scope.APP)

    # APP-scoped factories
    @provide(scope=Scope.APP)
    async def get_engine(self, config: Config) -> AsyncIterable[AsyncEngine]:
        engine = create_db_engine(config)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(self, engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    # UOW-scoped session (one per unit of work)
    @provide(scope=Scope.UOW)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterable[AsyncSession]:
        async with session_factory() as session:
            yield session
            await session.commit()

    # UOW-scoped repositories
    user_repo = provide(SqlUserRepository, scope=Scope.UOW, provides=UserRepository)
    role_repo = provide(SqlRoleRepository, scope=Scope.UOW, provides=RoleRepository)
    credential_repo = provide(
        SqlCredentialRepository, scope=Scope.UOW, provides=CredentialRepository
    )
    event_repo = provide(SqlEventRepository, scope=Scope.UOW, provides=EventRepository)
