"""Login command and handler: email/password in, access token out."""

import logfire

from geocidades.domain.auth.service.token import TokenService
from geocidades.domain.auth.service.user import UserManagementService
from geocidades.domain.shared.command import Command, CommandHandler, Result


class Login(Command):
    __public__ = True

    email: str
    password: str


class LoginResult(Result):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user_id: str
    role: str


class LoginHandler(CommandHandler[Login, LoginResult]):
    user_service: UserManagementService
    token_service: TokenService

    async def run(self, cmd: Login) -> LoginResult:
        with logfire.span("Login"):
            account = await self.user_service.authenticate(cmd.email, cmd.password)
            token = self.token_service.create_access_token(
                user_id=account.user.id,
                email=str(account.user.email),
            )
            return LoginResult(
                access_token=token,
                expires_in=self.token_service.access_token_expire_seconds,
                user_id=str(account.user.id),
                role=account.role.value,
            )
