"""CreateUser command and handler."""

import logfire

from geocidades.domain.auth.model.principal import Principal
from geocidades.domain.auth.model.role import Role
from geocidades.domain.auth.model.value import UserStatus
from geocidades.domain.auth.query.user_view import UserView
from geocidades.domain.auth.service.user import UserManagementService
from geocidades.domain.shared.authorization.policy import requires_role
from geocidades.domain.shared.command import Command, CommandHandler, Result


class CreateUser(Command):
    """Command to create a user with an initial role."""

    email: str
    password: str
    full_name: str
    role: str  # Role name from API
    status: UserStatus = UserStatus.ACTIVE


class CreateUserResult(Result):
    user: UserView


class CreateUserHandler(CommandHandler[CreateUser, CreateUserResult]):
    __auth__ = requires_role(Role.ADMINISTRATOR)
    principal: Principal
    user_service: UserManagementService

    async def run(self, cmd: CreateUser) -> CreateUserResult:
        with logfire.span("CreateUser"):
            account = await self.user_service.create_user(
                self.principal,
                email=cmd.email,
                password=cmd.password,
                full_name=cmd.full_name,
                role=Role.parse(cmd.role),
                status=cmd.status,
            )
            return CreateUserResult(user=UserView.from_account(account))
