"""UpdateProfile command and handler: self-service display name change."""

import logfire

from geocidades.domain.auth.model.principal import Principal
from geocidades.domain.auth.query.user_view import UserView
from geocidades.domain.auth.service.user import UserManagementService
from geocidades.domain.shared.authorization.policy import authenticated
from geocidades.domain.shared.command import Command, CommandHandler, Result


class UpdateProfile(Command):
    full_name: str


class UpdateProfileResult(Result):
    user: UserView


class UpdateProfileHandler(CommandHandler[UpdateProfile, UpdateProfileResult]):
    __auth__ = authenticated()
    principal: Principal
    user_service: UserManagementService

    async def run(self, cmd: UpdateProfile) -> UpdateProfileResult:
        with logfire.span("UpdateProfile"):
            account = await self.user_service.update_profile(
                self.principal, full_name=cmd.full_name
            )
            return UpdateProfileResult(user=UserView.from_account(account))
