"""DeleteUser command and handler."""

import logfire

from geocidades.domain.auth.model.principal import Principal
from geocidades.domain.auth.model.role import Role
from geocidades.domain.auth.model.value import UserId
from geocidades.domain.auth.service.user import UserManagementService
from geocidades.domain.shared.authorization.policy import requires_role
from geocidades.domain.shared.command import Command, CommandHandler, Result


class DeleteUser(Command):
    user_id: str  # UUID as string from API


class DeleteUserResult(Result):
    pass


class DeleteUserHandler(CommandHandler[DeleteUser, DeleteUserResult]):
    __auth__ = requires_role(Role.ADMINISTRATOR)
    principal: Principal
    user_service: UserManagementService

    async def run(self, cmd: DeleteUser) -> DeleteUserResult:
        with logfire.span("DeleteUser"):
            await self.user_service.delete_user(self.principal, UserId.parse(cmd.user_id))
            return DeleteUserResult()
