"""Authentication routes: email/password login."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from geocidades.domain.auth.command.login import Login, LoginHandler

router = APIRouter(prefix="/auth", tags=["Authentication"], route_class=DishkaRoute)


class LoginRequest(BaseModel):
    """Request body for login."""

    email: str
    password: str


class TokenResponse(BaseModel):
    """Response containing an access token."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user_id: str
    role: str


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest, handler: FromDishka[LoginHandler]) -> TokenResponse:
    """Exchange email and password for a bearer token."""
    result = await handler.run(Login(email=body.email, password=body.password))
    return TokenResponse(
        access_token=result.access_token,
        token_type=result.token_type,
        expires_in=result.expires_in,
        user_id=result.user_id,
        role=result.role,
    )
