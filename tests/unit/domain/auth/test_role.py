"""Tests for the role hierarchy."""

import pytest

from geocidades.domain.auth.model.role import ELEVATED_ROLES, STANDARD_ROLES, Role
from geocidades.domain.shared.error import ValidationError


class TestRoleSet:
    def test_closed_set_of_five(self) -> None:
        assert {r.value for r in Role} == {
            "superadmin",
            "administrator",
            "researcher",
            "analyst",
            "coordinator",
        }

    def test_elevated_and_standard_partition_roles(self) -> None:
        assert ELEVATED_ROLES | STANDARD_ROLES == set(Role)
        assert not ELEVATED_ROLES & STANDARD_ROLES

    @pytest.mark.parametrize("role", [Role.SUPERADMIN, Role.ADMINISTRATOR])
    def test_elevated(self, role: Role) -> None:
        assert role.is_elevated

    @pytest.mark.parametrize("role", [Role.RESEARCHER, Role.ANALYST, Role.COORDINATOR])
    def test_standard(self, role: Role) -> None:
        assert not role.is_elevated


class TestSatisfies:
    @pytest.mark.parametrize("required", list(Role))
    def test_superadmin_satisfies_everything(self, required: Role) -> None:
        assert Role.SUPERADMIN.satisfies(required)

    def test_administrator_does_not_satisfy_superadmin(self) -> None:
        assert not Role.ADMINISTRATOR.satisfies(Role.SUPERADMIN)

    @pytest.mark.parametrize("required", [Role.RESEARCHER, Role.ANALYST, Role.COORDINATOR])
    def test_administrator_satisfies_standard_roles(self, required: Role) -> None:
        assert Role.ADMINISTRATOR.satisfies(required)

    def test_standard_roles_are_peers(self) -> None:
        assert not Role.RESEARCHER.satisfies(Role.ANALYST)
        assert not Role.ANALYST.satisfies(Role.COORDINATOR)
        assert not Role.COORDINATOR.satisfies(Role.RESEARCHER)


class TestParse:
    @pytest.mark.parametrize(
        "value,expected",
        [("analyst", Role.ANALYST), (" Administrator ", Role.ADMINISTRATOR)],
    )
    def test_known_names(self, value: str, expected: Role) -> None:
        assert Role.parse(value) is expected

    @pytest.mark.parametrize("value", ["admin", "owner", ""])
    def test_unknown_name_raises(self, value: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            Role.parse(value)
        assert exc_info.value.code == "invalid_role"
        assert exc_info.value.field == "role"
