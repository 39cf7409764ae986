"""Unit tests for user-management command and query handlers."""

from unittest.mock import patch

import pytest

from geocidades.config import JwtConfig
from geocidades.domain.auth.command import (
    CreateUser,
    CreateUserHandler,
    DeleteUser,
    DeleteUserHandler,
    Login,
    LoginHandler,
    UpdateProfile,
    UpdateProfileHandler,
    UpdateUser,
    UpdateUserHandler,
)
from geocidades.domain.auth.model.role import Role
from geocidades.domain.auth.query import (
    GetCurrentUser,
    GetCurrentUserHandler,
    GetMenu,
    GetMenuHandler,
    GetUser,
    GetUserHandler,
    ListUsers,
    ListUsersHandler,
)
from geocidades.domain.auth.service.token import TokenService
from geocidades.domain.shared.error import (
    AuthorizationError,
    PrivilegeEscalation,
    SelfDeletionForbidden,
    ValidationError,
)


def make_token_service() -> TokenService:
    """Create a TokenService with test config."""
    config = JwtConfig(
        secret="test-secret-key-256-bits-long-xx",
        algorithm="HS256",
        access_token_expire_minutes=60,
    )
    return TokenService(_config=config)


class TestCreateUserHandler:
    @pytest.mark.asyncio
    async def test_creates_user_from_role_name(self, store, user_service):
        admin = await store.add(Role.ADMINISTRATOR)
        handler = CreateUserHandler(principal=admin, user_service=user_service)

        result = await handler.run(
            CreateUser(
                email="pesquisa@exemplo.com.br",
                password="secret123",
                full_name="Pesquisa",
                role="Researcher",
            )
        )

        assert result.user.role == "researcher"
        assert result.user.status == "active"
        assert result.user.email == "pesquisa@exemplo.com.br"

    @pytest.mark.asyncio
    async def test_unknown_role_name_rejected(self, store, user_service):
        admin = await store.add(Role.ADMINISTRATOR)
        handler = CreateUserHandler(principal=admin, user_service=user_service)

        with pytest.raises(ValidationError) as exc_info:
            await handler.run(
                CreateUser(
                    email="x@exemplo.com.br",
                    password="secret123",
                    full_name="X",
                    role="owner",
                )
            )

        assert exc_info.value.code == "invalid_role"

    @pytest.mark.asyncio
    async def test_gate_rejects_standard_role_before_service(self, store, user_service):
        coordinator = await store.add(Role.COORDINATOR)
        handler = CreateUserHandler(principal=coordinator, user_service=user_service)

        with pytest.raises(AuthorizationError) as exc_info:
            await handler.run(
                CreateUser(
                    email="x@exemplo.com.br",
                    password="secret123",
                    full_name="X",
                    role="analyst",
                )
            )

        assert exc_info.value.code == "access_denied"


class TestUpdateUserHandler:
    @pytest.mark.asyncio
    async def test_administrator_cannot_promote(self, store, user_service):
        admin = await store.add(Role.ADMINISTRATOR)
        analyst = await store.add(Role.ANALYST)
        handler = UpdateUserHandler(principal=admin, user_service=user_service)

        with pytest.raises(PrivilegeEscalation):
            await handler.run(UpdateUser(user_id=str(analyst.user_id), role="administrator"))

    @pytest.mark.asyncio
    async def test_malformed_user_id(self, store, user_service):
        admin = await store.add(Role.ADMINISTRATOR)
        handler = UpdateUserHandler(principal=admin, user_service=user_service)

        with pytest.raises(ValidationError) as exc_info:
            await handler.run(UpdateUser(user_id="not-a-uuid", full_name="X"))

        assert exc_info.value.code == "invalid_user_id"

    @pytest.mark.asyncio
    async def test_superadmin_promotes(self, store, user_service):
        root = await store.add(Role.SUPERADMIN)
        analyst = await store.add(Role.ANALYST)
        handler = UpdateUserHandler(principal=root, user_service=user_service)

        result = await handler.run(UpdateUser(user_id=str(analyst.user_id), role="administrator"))

        assert result.user.role == "administrator"


class TestDeleteUserHandler:
    @pytest.mark.asyncio
    async def test_self_deletion(self, store, user_service):
        root = await store.add(Role.SUPERADMIN)
        handler = DeleteUserHandler(principal=root, user_service=user_service)

        with pytest.raises(SelfDeletionForbidden):
            await handler.run(DeleteUser(user_id=str(root.user_id)))

    @pytest.mark.asyncio
    async def test_deletes(self, store, user_service):
        admin = await store.add(Role.ADMINISTRATOR)
        analyst = await store.add(Role.ANALYST)
        handler = DeleteUserHandler(principal=admin, user_service=user_service)

        await handler.run(DeleteUser(user_id=str(analyst.user_id)))

        assert analyst.user_id not in store.users.users


class TestUpdateProfileHandler:
    @pytest.mark.asyncio
    async def test_any_role_renames_self(self, store, user_service):
        analyst = await store.add(Role.ANALYST)
        handler = UpdateProfileHandler(principal=analyst, user_service=user_service)

        result = await handler.run(UpdateProfile(full_name="Novo Nome"))

        assert result.user.full_name == "Novo Nome"
        assert result.user.role == "analyst"


class TestLoginHandler:
    @pytest.mark.asyncio
    async def test_returns_token_without_role_claim(self, store, user_service):
        user = await store.add(Role.ADMINISTRATOR, email="admin1@exemplo.com.br")
        token_service = make_token_service()
        handler = LoginHandler(user_service=user_service, token_service=token_service)

        result = await handler.run(Login(email="admin1@exemplo.com.br", password="secret123"))

        payload = token_service.validate_access_token(result.access_token)
        assert payload["sub"] == str(user.user_id)
        assert "role" not in payload
        assert result.role == "administrator"
        assert result.token_type == "bearer"
        assert result.expires_in == 3600

    @pytest.mark.asyncio
    async def test_wrong_password(self, store, user_service):
        await store.add(Role.ADMINISTRATOR, email="admin1@exemplo.com.br")
        handler = LoginHandler(user_service=user_service, token_service=make_token_service())

        with pytest.raises(AuthorizationError) as exc_info:
            await handler.run(Login(email="admin1@exemplo.com.br", password="nope-nope"))

        assert exc_info.value.code == "invalid_credentials"


class TestQueryHandlers:
    @pytest.mark.asyncio
    async def test_list_users_requires_administrator(self, store, user_service):
        researcher = await store.add(Role.RESEARCHER)
        handler = ListUsersHandler(principal=researcher, user_service=user_service)

        with pytest.raises(AuthorizationError):
            await handler.run(ListUsers())

    @pytest.mark.asyncio
    async def test_list_users_filters_by_role_name(self, store, user_service):
        root = await store.add(Role.SUPERADMIN)
        await store.add(Role.ANALYST)
        await store.add(Role.COORDINATOR)
        handler = ListUsersHandler(principal=root, user_service=user_service)

        result = await handler.run(ListUsers(role="coordinator"))

        assert [u.role for u in result.users] == ["coordinator"]

    @pytest.mark.asyncio
    async def test_get_user(self, store, user_service):
        admin = await store.add(Role.ADMINISTRATOR)
        analyst = await store.add(Role.ANALYST, full_name="Ana")
        handler = GetUserHandler(principal=admin, user_service=user_service)

        result = await handler.run(GetUser(user_id=str(analyst.user_id)))

        assert result.user.full_name == "Ana"

    @pytest.mark.asyncio
    async def test_get_current_user(self, store, user_service):
        analyst = await store.add(Role.ANALYST, full_name="Eu")
        handler = GetCurrentUserHandler(principal=analyst, user_service=user_service)

        result = await handler.run(GetCurrentUser())

        assert result.user.id == str(analyst.user_id)

    @pytest.mark.asyncio
    async def test_get_menu_for_analyst(self, store):
        analyst = await store.add(Role.ANALYST)

        result = await GetMenuHandler(principal=analyst).run(GetMenu())

        assert result.role == "analyst"
        assert [i.url for i in result.items] == [
            "/dashboard",
            "/municipalities",
            "/reports",
        ]


class TestHandlerSpans:
    @pytest.mark.asyncio
    async def test_update_profile_opens_span(self, store, user_service):
        analyst = await store.add(Role.ANALYST)
        handler = UpdateProfileHandler(principal=analyst, user_service=user_service)

        with patch("geocidades.domain.auth.command.update_profile.logfire") as logfire:
            await handler.run(UpdateProfile(full_name="Novo Nome"))

        logfire.span.assert_called_once_with("UpdateProfile")

    @pytest.mark.asyncio
    async def test_list_users_opens_span(self, store, user_service):
        admin = await store.add(Role.ADMINISTRATOR)
        handler = ListUsersHandler(principal=admin, user_service=user_service)

        with patch("geocidades.domain.auth.query.list_users.logfire") as logfire:
            await handler.run(ListUsers())

        logfire.span.assert_called_once_with("ListUsers")

    @pytest.mark.asyncio
    async def test_get_user_handlers_open_spans(self, store, user_service):
        admin = await store.add(Role.ADMINISTRATOR)

        with patch("geocidades.domain.auth.query.get_user.logfire") as logfire:
            await GetUserHandler(principal=admin, user_service=user_service).run(
                GetUser(user_id=str(admin.user_id))
            )
            await GetCurrentUserHandler(principal=admin, user_service=user_service).run(
                GetCurrentUser()
            )

        assert [c.args for c in logfire.span.call_args_list] == [
            ("GetUser",),
            ("GetCurrentUser",),
        ]
