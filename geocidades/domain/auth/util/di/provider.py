"""DI provider for auth domain."""

import logging

import jwt
from dishka import from_context, provide
from starlette.requests import Request

from geocidades.config import Config
from geocidades.domain.auth.command.create_user import CreateUserHandler
from geocidades.domain.auth.command.delete_user import DeleteUserHandler
from geocidades.domain.auth.command.login import LoginHandler
from geocidades.domain.auth.command.update_profile import UpdateProfileHandler
from geocidades.domain.auth.command.update_user import UpdateUserHandler
from geocidades.domain.auth.model.identity import Anonymous, Identity
from geocidades.domain.auth.model.principal import Principal
from geocidades.domain.auth.model.value import UserId
from geocidades.domain.auth.port.repository import (
    CredentialRepository,
    RoleRepository,
    UserRepository,
)
from geocidades.domain.auth.query.get_menu import GetMenuHandler
from geocidades.domain.auth.query.get_user import GetCurrentUserHandler, GetUserHandler
from geocidades.domain.auth.query.list_users import ListUsersHandler
from geocidades.domain.auth.service.token import TokenService
from geocidades.domain.auth.service.user import UserManagementService
from geocidades.domain.shared.error import AuthorizationError, ValidationError
from geocidades.domain.shared.outbox import Outbox
from geocidades.util.di.base import Provider
from geocidades.util.di.scope import Scope

logger = logging.getLogger(__name__)


def _bearer_token(request: Request) -> str | None:
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        return None
    return auth_header[7:]  # Remove "Bearer " prefix


class AuthProvider(Provider):
    """DI provider for auth domain services and handlers."""

    request = from_context(provides=Request, scope=Scope.UOW)

    # Command Handlers
    create_user_handler = provide(CreateUserHandler, scope=Scope.UOW)
    update_user_handler = provide(UpdateUserHandler, scope=Scope.UOW)
    delete_user_handler = provide(DeleteUserHandler, scope=Scope.UOW)
    update_profile_handler = provide(UpdateProfileHandler, scope=Scope.UOW)
    login_handler = provide(LoginHandler, scope=Scope.UOW)

    # Query Handlers
    list_users_handler = provide(ListUsersHandler, scope=Scope.UOW)
    get_user_handler = provide(GetUserHandler, scope=Scope.UOW)
    get_current_user_handler = provide(GetCurrentUserHandler, scope=Scope.UOW)
    get_menu_handler = provide(GetMenuHandler, scope=Scope.UOW)

    @provide(scope=Scope.UOW)
    def get_token_service(self, config: Config) -> TokenService:
        """Provide TokenService."""
        return TokenService(_config=config.auth.jwt)

    @provide(scope=Scope.UOW)
    def get_user_service(
        self,
        user_repo: UserRepository,
        role_repo: RoleRepository,
        credential_repo: CredentialRepository,
        outbox: Outbox,
    ) -> UserManagementService:
        """Provide UserManagementService."""
        return UserManagementService(
            _user_repo=user_repo,
            _role_repo=role_repo,
            _credential_repo=credential_repo,
            _outbox=outbox,
        )

    @provide(scope=Scope.UOW)
    async def get_identity(
        self,
        request: Request,
        token_service: TokenService,
        user_repo: UserRepository,
        role_repo: RoleRepository,
    ) -> Identity:
        """Resolve Identity from JWT + role lookup.

        Returns Anonymous for unauthenticated requests, Principal for
        authenticated ones. The role always comes from the role store, never
        from the token, and inactive or removed users resolve to Anonymous.
        """
        token = _bearer_token(request)
        if token is None:
            return Anonymous()

        try:
            payload = token_service.validate_access_token(token)
            user_id = UserId.parse(payload["sub"])
        except (jwt.InvalidTokenError, KeyError, ValidationError):
            logger.debug("Rejected bearer token")
            return Anonymous()

        user = await user_repo.get(user_id)
        if user is None or not user.is_active:
            logger.info("Token for missing or inactive user %s", user_id)
            return Anonymous()

        assignment = await role_repo.get(user_id)
        if assignment is None:
            logger.warning("User %s has no role assignment", user_id)
            return Anonymous()

        logger.debug("Identity resolved: user_id=%s, role=%s", user_id, assignment.role)
        return Principal(user_id=user_id, role=assignment.role)

    @provide(scope=Scope.UOW)
    def get_principal(self, identity: Identity) -> Principal:
        """Extract Principal from Identity. Raises if not authenticated."""
        if isinstance(identity, Principal):
            return identity
        raise AuthorizationError("Authentication required", code="missing_token")
