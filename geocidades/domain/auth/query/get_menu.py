"""GetMenu query: the dashboard sections visible to the current principal."""

from pydantic import BaseModel

from geocidades.domain.auth.model.menu import menu_for
from geocidades.domain.auth.model.principal import Principal
from geocidades.domain.shared.authorization.policy import authenticated
from geocidades.domain.shared.query import Query, QueryHandler, Result


class GetMenu(Query):
    pass


class MenuItemDTO(BaseModel):
    title: str
    url: str


class GetMenuResult(Result):
    role: str
    items: list[MenuItemDTO]


class GetMenuHandler(QueryHandler[GetMenu, GetMenuResult]):
    __auth__ = authenticated()
    principal: Principal

    async def run(self, query: GetMenu) -> GetMenuResult:
        return GetMenuResult(
            role=self.principal.role.value,
            items=[
                MenuItemDTO(title=item.title, url=item.url)
                for item in menu_for(self.principal.role)
            ],
        )
