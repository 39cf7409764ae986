"""Dashboard sections and the roles allowed to see them."""

from dataclasses import dataclass

from geocidades.domain.auth.model.role import Role


@dataclass(frozen=True)
class MenuItem:
    """A dashboard section. ``allowed_roles=None`` means any authenticated user."""

    title: str
    url: str
    allowed_roles: frozenset[Role] | None = None

    def visible_to(self, role: Role) -> bool:
        if self.allowed_roles is None:
            return True
        return any(role.satisfies(allowed) for allowed in self.allowed_roles)


MENU: tuple[MenuItem, ...] = (
    MenuItem("Dashboard", "/dashboard"),
    MenuItem("Usuários", "/users", frozenset({Role.ADMINISTRATOR})),
    MenuItem(
        "Pesquisas",
        "/surveys",
        frozenset({Role.ADMINISTRATOR, Role.RESEARCHER, Role.COORDINATOR}),
    ),
    MenuItem(
        "Municípios",
        "/municipalities",
        frozenset({Role.ADMINISTRATOR, Role.ANALYST, Role.COORDINATOR}),
    ),
    MenuItem(
        "Relatórios",
        "/reports",
        frozenset({Role.ADMINISTRATOR, Role.ANALYST, Role.COORDINATOR}),
    ),
    MenuItem("Configurações", "/settings", frozenset({Role.ADMINISTRATOR})),
)


def menu_for(role: Role | None) -> list[MenuItem]:
    """Menu items visible to ``role``, in display order. Empty without a role."""
    if role is None:
        return []
    return [item for item in MENU if item.visible_to(role)]


def has_access(role: Role | None, url: str) -> bool:
    """Whether ``role`` may open the section at ``url``. Unknown URLs are denied."""
    if role is None:
        return False
    item = next((i for i in MENU if i.url == url), None)
    return item is not None and item.visible_to(role)
