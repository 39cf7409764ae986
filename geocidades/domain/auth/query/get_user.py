"""GetUser and GetCurrentUser queries."""

import logfire

from geocidades.domain.auth.model.principal import Principal
from geocidades.domain.auth.model.role import Role
from geocidades.domain.auth.model.value import UserId
from geocidades.domain.auth.query.user_view import UserView
from geocidades.domain.auth.service.user import UserManagementService
from geocidades.domain.shared.authorization.policy import authenticated, requires_role
from geocidades.domain.shared.query import Query, QueryHandler, Result


class GetUser(Query):
    user_id: str  # UUID as string from API


class GetCurrentUser(Query):
    pass


class UserResult(Result):
    user: UserView


class GetUserHandler(QueryHandler[GetUser, UserResult]):
    __auth__ = requires_role(Role.ADMINISTRATOR)
    principal: Principal
    user_service: UserManagementService

    async def run(self, query: GetUser) -> UserResult:
        with logfire.span("GetUser"):
            account = await self.user_service.get_user(UserId.parse(query.user_id))
            return UserResult(user=UserView.from_account(account))


class GetCurrentUserHandler(QueryHandler[GetCurrentUser, UserResult]):
    __auth__ = authenticated()
    principal: Principal
    user_service: UserManagementService

    async def run(self, query: GetCurrentUser) -> UserResult:
        with logfire.span("GetCurrentUser"):
            account = await self.user_service.get_user(self.principal.user_id)
            return UserResult(user=UserView.from_account(account))
