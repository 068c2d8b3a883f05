"""Liveness endpoint used by deployment health checks."""
from fastapi import APIRouter, Depends

from config import Settings
from models.api_responses import HealthResponse
from utils.dependencies import get_settings

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_settings)):
    return HealthResponse(status="OK", message=f"{settings.app_name} API is running")
