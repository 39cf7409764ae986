"""Unit tests for UserManagementService."""

import pytest

from geocidades.domain.auth.event import UserCreated, UserDeleted, UserUpdated
from geocidades.domain.auth.model.principal import Principal
from geocidades.domain.auth.model.role import Role
from geocidades.domain.auth.model.value import UserId, UserStatus
from geocidades.domain.shared.error import (
    AuthorizationError,
    ConflictError,
    InsufficientPrivilege,
    NotFoundError,
    PrivilegeEscalation,
    SelfDeletionForbidden,
    ValidationError,
)


class TestCreateUser:
    @pytest.mark.asyncio
    async def test_administrator_creates_researcher(self, store, user_service, outbox):
        admin = await store.add(Role.ADMINISTRATOR)

        account = await user_service.create_user(
            admin,
            email="Nova.Pesquisadora@Exemplo.com.br",
            password="secret123",
            full_name="  Nova Pesquisadora ",
            role=Role.RESEARCHER,
        )

        assert account.role is Role.RESEARCHER
        assert str(account.user.email) == "nova.pesquisadora@exemplo.com.br"
        assert account.user.full_name == "Nova Pesquisadora"
        assignment = store.roles.assignments[account.user.id]
        assert assignment.assigned_by == admin.user_id
        assert store.credentials.credentials[account.user.id].verify("secret123")

        event = outbox.append.call_args.args[0]
        assert isinstance(event, UserCreated)
        assert event.role == "researcher"
        assert event.created_by == str(admin.user_id)

    @pytest.mark.asyncio
    async def test_administrator_cannot_create_administrator(self, store, user_service, outbox):
        admin = await store.add(Role.ADMINISTRATOR)

        with pytest.raises(PrivilegeEscalation):
            await user_service.create_user(
                admin,
                email="outro@exemplo.com.br",
                password="secret123",
                full_name="Outro Admin",
                role=Role.ADMINISTRATOR,
            )

        assert len(store.users.users) == 1
        outbox.append.assert_not_called()

    @pytest.mark.asyncio
    async def test_superadmin_creates_administrator(self, store, user_service):
        root = await store.add(Role.SUPERADMIN)

        account = await user_service.create_user(
            root,
            email="admin@exemplo.com.br",
            password="secret123",
            full_name="Admin",
            role=Role.ADMINISTRATOR,
        )

        assert account.role is Role.ADMINISTRATOR

    @pytest.mark.asyncio
    async def test_analyst_cannot_create_users(self, store, user_service):
        analyst = await store.add(Role.ANALYST)

        with pytest.raises(InsufficientPrivilege):
            await user_service.create_user(
                analyst,
                email="x@exemplo.com.br",
                password="secret123",
                full_name="X",
                role=Role.ANALYST,
            )

    @pytest.mark.asyncio
    async def test_short_password_creates_nothing(self, store, user_service):
        admin = await store.add(Role.ADMINISTRATOR)

        with pytest.raises(ValidationError) as exc_info:
            await user_service.create_user(
                admin,
                email="x@exemplo.com.br",
                password="12345",
                full_name="X",
                role=Role.ANALYST,
            )

        assert exc_info.value.code == "password_too_short"
        assert len(store.users.users) == 1

    @pytest.mark.asyncio
    async def test_blank_name_rejected(self, store, user_service):
        admin = await store.add(Role.ADMINISTRATOR)

        with pytest.raises(ValidationError) as exc_info:
            await user_service.create_user(
                admin,
                email="x@exemplo.com.br",
                password="secret123",
                full_name="   ",
                role=Role.ANALYST,
            )

        assert exc_info.value.code == "missing_name"

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(self, store, user_service):
        admin = await store.add(Role.ADMINISTRATOR)
        await store.add(Role.ANALYST, email="taken@exemplo.com.br")

        with pytest.raises(ConflictError) as exc_info:
            await user_service.create_user(
                admin,
                email="TAKEN@exemplo.com.br",
                password="secret123",
                full_name="Dup",
                role=Role.ANALYST,
            )

        assert exc_info.value.code == "email_taken"

    @pytest.mark.asyncio
    async def test_acting_role_read_fresh_from_store(self, store, user_service):
        admin = await store.add(Role.ADMINISTRATOR)
        store.roles.assignments[admin.user_id].role = Role.ANALYST

        with pytest.raises(InsufficientPrivilege):
            await user_service.create_user(
                admin,
                email="x@exemplo.com.br",
                password="secret123",
                full_name="X",
                role=Role.ANALYST,
            )

    @pytest.mark.asyncio
    async def test_claimed_role_is_ignored(self, store, user_service):
        analyst = await store.add(Role.ANALYST)
        forged = Principal(user_id=analyst.user_id, role=Role.SUPERADMIN)

        with pytest.raises(InsufficientPrivilege):
            await user_service.create_user(
                forged,
                email="x@exemplo.com.br",
                password="secret123",
                full_name="X",
                role=Role.ADMINISTRATOR,
            )

    @pytest.mark.asyncio
    async def test_actor_without_role_is_unauthenticated(self, store, user_service):
        ghost = Principal(user_id=UserId.generate(), role=Role.SUPERADMIN)

        with pytest.raises(AuthorizationError) as exc_info:
            await user_service.create_user(
                ghost,
                email="x@exemplo.com.br",
                password="secret123",
                full_name="X",
                role=Role.ANALYST,
            )

        assert exc_info.value.code == "missing_token"


class TestUpdateUser:
    @pytest.mark.asyncio
    async def test_administrator_renames_and_deactivates_analyst(
        self, store, user_service, outbox
    ):
        admin = await store.add(Role.ADMINISTRATOR)
        analyst = await store.add(Role.ANALYST, full_name="Ana")

        account = await user_service.update_user(
            admin,
            analyst.user_id,
            full_name="Ana Lista",
            status=UserStatus.INACTIVE,
        )

        assert account.user.full_name == "Ana Lista"
        assert account.user.status is UserStatus.INACTIVE
        assert account.user.updated_at is not None
        event = outbox.append.call_args.args[0]
        assert isinstance(event, UserUpdated)
        assert event.changes == ["full_name", "status"]

    @pytest.mark.asyncio
    async def test_administrator_changes_standard_role(self, store, user_service):
        admin = await store.add(Role.ADMINISTRATOR)
        analyst = await store.add(Role.ANALYST)

        account = await user_service.update_user(admin, analyst.user_id, role=Role.COORDINATOR)

        assert account.role is Role.COORDINATOR
        assert store.roles.assignments[analyst.user_id].role is Role.COORDINATOR

    @pytest.mark.asyncio
    async def test_administrator_cannot_promote_to_administrator(self, store, user_service):
        admin = await store.add(Role.ADMINISTRATOR)
        researcher = await store.add(Role.RESEARCHER)

        with pytest.raises(PrivilegeEscalation):
            await user_service.update_user(admin, researcher.user_id, role=Role.ADMINISTRATOR)

        assert store.roles.assignments[researcher.user_id].role is Role.RESEARCHER

    @pytest.mark.asyncio
    async def test_administrator_cannot_edit_peer_administrator(self, store, user_service):
        admin = await store.add(Role.ADMINISTRATOR)
        other = await store.add(Role.ADMINISTRATOR, full_name="Other")

        with pytest.raises(InsufficientPrivilege):
            await user_service.update_user(admin, other.user_id, full_name="Renamed")

        assert store.users.users[other.user_id].full_name == "Other"

    @pytest.mark.asyncio
    async def test_superadmin_demotes_administrator(self, store, user_service):
        root = await store.add(Role.SUPERADMIN)
        admin = await store.add(Role.ADMINISTRATOR)

        account = await user_service.update_user(root, admin.user_id, role=Role.ANALYST)

        assert account.role is Role.ANALYST

    @pytest.mark.asyncio
    async def test_cannot_edit_self(self, store, user_service):
        root = await store.add(Role.SUPERADMIN)

        with pytest.raises(InsufficientPrivilege) as exc_info:
            await user_service.update_user(root, root.user_id, role=Role.ANALYST)

        assert exc_info.value.code == "self_modification_forbidden"

    @pytest.mark.asyncio
    async def test_unknown_user(self, store, user_service):
        admin = await store.add(Role.ADMINISTRATOR)

        with pytest.raises(NotFoundError):
            await user_service.update_user(admin, UserId.generate(), full_name="X")

    @pytest.mark.asyncio
    async def test_no_changes_records_no_event(self, store, user_service, outbox):
        admin = await store.add(Role.ADMINISTRATOR)
        analyst = await store.add(Role.ANALYST, full_name="Ana")

        await user_service.update_user(admin, analyst.user_id, full_name="Ana", role=Role.ANALYST)

        outbox.append.assert_not_called()


class TestDeleteUser:
    @pytest.mark.asyncio
    async def test_administrator_deletes_coordinator(self, store, user_service, outbox):
        admin = await store.add(Role.ADMINISTRATOR)
        coordinator = await store.add(Role.COORDINATOR, full_name="Coord")

        await user_service.delete_user(admin, coordinator.user_id)

        assert coordinator.user_id not in store.users.users
        assert coordinator.user_id not in store.roles.assignments
        assert coordinator.user_id not in store.credentials.credentials
        event = outbox.append.call_args.args[0]
        assert isinstance(event, UserDeleted)
        assert event.full_name == "Coord"

    @pytest.mark.asyncio
    async def test_superadmin_cannot_delete_self(self, store, user_service):
        root = await store.add(Role.SUPERADMIN)

        with pytest.raises(SelfDeletionForbidden):
            await user_service.delete_user(root, root.user_id)

        assert root.user_id in store.users.users

    @pytest.mark.asyncio
    async def test_administrator_cannot_delete_administrator(self, store, user_service):
        admin = await store.add(Role.ADMINISTRATOR)
        other = await store.add(Role.ADMINISTRATOR)

        with pytest.raises(InsufficientPrivilege):
            await user_service.delete_user(admin, other.user_id)

        assert other.user_id in store.users.users

    @pytest.mark.asyncio
    async def test_demoted_administrator_loses_delete_immediately(self, store, user_service):
        admin = await store.add(Role.ADMINISTRATOR)
        analyst = await store.add(Role.ANALYST)
        store.roles.assignments[admin.user_id].role = Role.RESEARCHER

        with pytest.raises(InsufficientPrivilege):
            await user_service.delete_user(admin, analyst.user_id)

    @pytest.mark.asyncio
    async def test_unknown_user(self, store, user_service):
        admin = await store.add(Role.ADMINISTRATOR)

        with pytest.raises(NotFoundError) as exc_info:
            await user_service.delete_user(admin, UserId.generate())

        assert exc_info.value.code == "user_not_found"


class TestListUsers:
    @pytest.mark.asyncio
    async def test_filters(self, store, user_service):
        await store.add(Role.ADMINISTRATOR, full_name="Maria Admin")
        await store.add(Role.ANALYST, full_name="João Analista")
        await store.add(Role.ANALYST, full_name="Maria Analista", status=UserStatus.INACTIVE)

        by_text = await user_service.list_users(search="  maria ")
        by_role = await user_service.list_users(role=Role.ANALYST)
        by_both = await user_service.list_users(role=Role.ANALYST, status=UserStatus.ACTIVE)

        assert {a.user.full_name for a in by_text} == {"Maria Admin", "Maria Analista"}
        assert len(by_role) == 2
        assert [a.user.full_name for a in by_both] == ["João Analista"]

    @pytest.mark.asyncio
    async def test_blank_search_lists_everyone(self, store, user_service):
        await store.add(Role.ADMINISTRATOR)
        await store.add(Role.ANALYST)

        assert len(await user_service.list_users(search="   ")) == 2


class TestUpdateProfile:
    @pytest.mark.asyncio
    async def test_renames_self(self, store, user_service, outbox):
        analyst = await store.add(Role.ANALYST, full_name="Old")

        account = await user_service.update_profile(analyst, full_name="New Name")

        assert account.user.full_name == "New Name"
        assert account.role is Role.ANALYST
        assert outbox.append.call_args.args[0].changes == ["full_name"]

    @pytest.mark.asyncio
    async def test_same_name_is_a_no_op(self, store, user_service, outbox):
        analyst = await store.add(Role.ANALYST, full_name="Same")

        await user_service.update_profile(analyst, full_name="Same")

        outbox.append.assert_not_called()


class TestAuthenticate:
    @pytest.mark.asyncio
    async def test_valid_credentials(self, store, user_service):
        await store.add(Role.COORDINATOR, email="coord@exemplo.com.br", password="Test@123456")

        account = await user_service.authenticate("Coord@Exemplo.com.br", "Test@123456")

        assert account.role is Role.COORDINATOR

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "email,password",
        [
            ("coord@exemplo.com.br", "wrong-password"),
            ("nobody@exemplo.com.br", "Test@123456"),
            ("not-an-email", "Test@123456"),
        ],
    )
    async def test_invalid_credentials(self, store, user_service, email, password):
        await store.add(Role.COORDINATOR, email="coord@exemplo.com.br", password="Test@123456")

        with pytest.raises(AuthorizationError) as exc_info:
            await user_service.authenticate(email, password)

        assert exc_info.value.code == "invalid_credentials"

    @pytest.mark.asyncio
    async def test_inactive_user_refused(self, store, user_service):
        await store.add(
            Role.ANALYST,
            email="off@exemplo.com.br",
            password="Test@123456",
            status=UserStatus.INACTIVE,
        )

        with pytest.raises(AuthorizationError) as exc_info:
            await user_service.authenticate("off@exemplo.com.br", "Test@123456")

        assert exc_info.value.code == "account_inactive"
