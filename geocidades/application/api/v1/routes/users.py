"""User management routes. Administrators and superadmins only."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query, Response
from pydantic import BaseModel

from geocidades.domain.auth.command.create_user import CreateUser, CreateUserHandler
from geocidades.domain.auth.command.delete_user import DeleteUser, DeleteUserHandler
from geocidades.domain.auth.command.update_user import UpdateUser, UpdateUserHandler
from geocidades.domain.auth.model.value import UserStatus
from geocidades.domain.auth.query.get_user import GetUser, GetUserHandler
from geocidades.domain.auth.query.list_users import ListUsers, ListUsersHandler
from geocidades.domain.auth.query.user_view import UserView

router = APIRouter(prefix="/users", tags=["Users"], route_class=DishkaRoute)


class CreateUserRequest(BaseModel):
    """Request body for creating a user."""

    email: str
    password: str
    full_name: str
    role: str
    status: UserStatus = UserStatus.ACTIVE


class UpdateUserRequest(BaseModel):
    """Request body for editing a user. Omitted fields are left unchanged."""

    full_name: str | None = None
    status: UserStatus | None = None
    role: str | None = None


class UserListResponse(BaseModel):
    users: list[UserView]
    total: int


@router.get("", response_model=UserListResponse)
async def list_users(
    handler: FromDishka[ListUsersHandler],
    search: str | None = Query(default=None, description="Name or email contains"),
    role: str | None = Query(default=None),
    status: UserStatus | None = Query(default=None),
) -> UserListResponse:
    result = await handler.run(ListUsers(search=search, role=role, status=status))
    return UserListResponse(users=result.users, total=len(result.users))


@router.post("", response_model=UserView, status_code=201)
async def create_user(
    body: CreateUserRequest,
    handler: FromDishka[CreateUserHandler],
) -> UserView:
    """Create a user. Only superadmins may create administrators."""
    result = await handler.run(
        CreateUser(
            email=body.email,
            password=body.password,
            full_name=body.full_name,
            role=body.role,
            status=body.status,
        )
    )
    return result.user


@router.get("/{user_id}", response_model=UserView)
async def get_user(user_id: str, handler: FromDishka[GetUserHandler]) -> UserView:
    result = await handler.run(GetUser(user_id=user_id))
    return result.user


@router.patch("/{user_id}", response_model=UserView)
async def update_user(
    user_id: str,
    body: UpdateUserRequest,
    handler: FromDishka[UpdateUserHandler],
) -> UserView:
    result = await handler.run(
        UpdateUser(
            user_id=user_id,
            full_name=body.full_name,
            status=body.status,
            role=body.role,
        )
    )
    return result.user


@router.delete("/{user_id}", status_code=204)
async def delete_user(user_id: str, handler: FromDishka[DeleteUserHandler]) -> Response:
    """Delete a user. Nobody can delete themselves."""
    await handler.run(DeleteUser(user_id=user_id))
    return Response(status_code=204)
