"""Health check route."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from participa.config import Settings
from participa.domain.model.common import utc_now

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Liveness answer with the deployed build."""

    status: str
    environment: str
    version: str
    git_sha: str
    checked_at: str


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: FromDishka[Settings]) -> HealthResponse:
    """Report that the process is serving requests.

    Does not touch the database, so load balancers can poll it freely.
    """
    return HealthResponse(
        status="healthy",
        environment=settings.environment,
        version="0.1.0",
        git_sha=settings.git_sha,
        checked_at=utc_now().isoformat(),
    )
