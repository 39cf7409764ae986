"""ListUsers query and handler."""

import logfire

from geocidades.domain.auth.model.principal import Principal
from geocidades.domain.auth.model.role import Role
from geocidades.domain.auth.model.value import UserStatus
from geocidades.domain.auth.query.user_view import UserView
from geocidades.domain.auth.service.user import UserManagementService
from geocidades.domain.shared.authorization.policy import requires_role
from geocidades.domain.shared.query import Query, QueryHandler, Result


class ListUsers(Query):
    """Filter users by free text (name or email), role and status."""

    search: str | None = None
    role: str | None = None
    status: UserStatus | None = None


class ListUsersResult(Result):
    users: list[UserView]


class ListUsersHandler(QueryHandler[ListUsers, ListUsersResult]):
    __auth__ = requires_role(Role.ADMINISTRATOR)
    principal: Principal
    user_service: UserManagementService

    async def run(self, query: ListUsers) -> ListUsersResult:
        with logfire.span("ListUsers"):
            accounts = await self.user_service.list_users(
                search=query.search,
                role=Role.parse(query.role) if query.role else None,
                status=query.status,
            )
            return ListUsersResult(users=[UserView.from_account(a) for a in accounts])
