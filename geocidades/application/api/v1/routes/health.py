"""Liveness endpoint."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from geocidades.config import Config

router = APIRouter(tags=["Health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    status: str
    name: str
    version: str


@router.get("/health", response_model=HealthResponse)
async def health(config: FromDishka[Config]) -> HealthResponse:
    return HealthResponse(status="ok", name=config.server.name, version=config.server.version)
