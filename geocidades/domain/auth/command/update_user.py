"""UpdateUser command and handler."""

import logfire

from geocidades.domain.auth.model.principal import Principal
from geocidades.domain.auth.model.role import Role
from geocidades.domain.auth.model.value import UserId, UserStatus
from geocidades.domain.auth.query.user_view import UserView
from geocidades.domain.auth.service.user import UserManagementService
from geocidades.domain.shared.authorization.policy import requires_role
from geocidades.domain.shared.command import Command, CommandHandler, Result


class UpdateUser(Command):
    """Command to change another user's name, status and/or role. Omitted fields stay."""

    user_id: str  # UUID as string from API
    full_name: str | None = None
    status: UserStatus | None = None
    role: str | None = None


class UpdateUserResult(Result):
    user: UserView


class UpdateUserHandler(CommandHandler[UpdateUser, UpdateUserResult]):
    __auth__ = requires_role(Role.ADMINISTRATOR)
    principal: Principal
    user_service: UserManagementService

    async def run(self, cmd: UpdateUser) -> UpdateUserResult:
        with logfire.span("UpdateUser"):
            account = await self.user_service.update_user(
                self.principal,
                UserId.parse(cmd.user_id),
                full_name=cmd.full_name,
                status=cmd.status,
                role=Role.parse(cmd.role) if cmd.role is not None else None,
            )
            return UpdateUserResult(user=UserView.from_account(account))
