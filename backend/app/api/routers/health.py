from fastapi import APIRouter, Depends

from app.api.deps import get_ban_registry
from app.schemas import HealthResponse, HealthStatus
from app.services.ban_registry import BanRegistry

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health(registry: BanRegistry = Depends(get_ban_registry)) -> HealthResponse:
    database = "connected" if await registry.ping() else "disconnected"
    return HealthResponse(result=HealthStatus(status="ok", database=database))
