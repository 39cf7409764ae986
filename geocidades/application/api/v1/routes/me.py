"""Routes for the signed-in user: profile and menu."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from geocidades.domain.auth.command.update_profile import UpdateProfile, UpdateProfileHandler
from geocidades.domain.auth.query.get_menu import GetMenu, GetMenuHandler, GetMenuResult
from geocidades.domain.auth.query.get_user import GetCurrentUser, GetCurrentUserHandler
from geocidades.domain.auth.query.user_view import UserView

router = APIRouter(prefix="/me", tags=["Profile"], route_class=DishkaRoute)


class UpdateProfileRequest(BaseModel):
    full_name: str


@router.get("", response_model=UserView)
async def get_me(handler: FromDishka[GetCurrentUserHandler]) -> UserView:
    result = await handler.run(GetCurrentUser())
    return result.user


@router.patch("", response_model=UserView)
async def update_me(
    body: UpdateProfileRequest,
    handler: FromDishka[UpdateProfileHandler],
) -> UserView:
    """Change your own display name. Role and status are not editable here."""
    result = await handler.run(UpdateProfile(full_name=body.full_name))
    return result.user


@router.get("/menu", response_model=GetMenuResult)
async def get_menu(handler: FromDishka[GetMenuHandler]) -> GetMenuResult:
    """Dashboard sections visible to the current role."""
    return await handler.run(GetMenu())
