"""Tests for handler policies."""

from geocidades.domain.auth.model.principal import Principal
from geocidades.domain.auth.model.role import Role
from geocidades.domain.auth.model.value import UserId
from geocidades.domain.shared.authorization.policy import (
    RequiresRole,
    authenticated,
    requires_role,
)


def _make_principal(role: Role) -> Principal:
    return Principal(user_id=UserId.generate(), role=role)


class TestRequiresRole:
    def test_exact_role_passes(self) -> None:
        assert requires_role(Role.ANALYST).evaluate(_make_principal(Role.ANALYST))

    def test_peer_standard_role_fails(self) -> None:
        assert not requires_role(Role.ANALYST).evaluate(_make_principal(Role.RESEARCHER))

    def test_administrator_satisfies_standard_requirement(self) -> None:
        assert requires_role(Role.COORDINATOR).evaluate(_make_principal(Role.ADMINISTRATOR))

    def test_superadmin_satisfies_administrator_requirement(self) -> None:
        assert requires_role(Role.ADMINISTRATOR).evaluate(_make_principal(Role.SUPERADMIN))

    def test_administrator_does_not_satisfy_superadmin_requirement(self) -> None:
        assert not requires_role(Role.SUPERADMIN).evaluate(_make_principal(Role.ADMINISTRATOR))

    def test_factory_builds_frozen_policy(self) -> None:
        policy = requires_role(Role.ADMINISTRATOR)
        assert isinstance(policy, RequiresRole)
        assert policy == RequiresRole(role=Role.ADMINISTRATOR)
        assert hash(policy) is not None


class TestAuthenticated:
    def test_every_role_passes(self) -> None:
        for role in Role:
            assert authenticated().evaluate(_make_principal(role))

    def test_factory_returns_shared_instance(self) -> None:
        assert authenticated() is authenticated()
