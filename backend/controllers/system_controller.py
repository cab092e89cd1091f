"""Service metadata and liveness endpoints."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from backend.controllers.dependencies import get_app_settings
from backend.utils.config import Settings


router = APIRouter(tags=["system"])


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    service: str


class ServiceInfoResponse(BaseModel):
    message: str
    version: str
    endpoints: dict[str, str]


@router.get("/health", response_model=HealthResponse, status_code=status.HTTP_200_OK)
async def health(settings: Settings = Depends(get_app_settings)) -> HealthResponse:
    return HealthResponse(
        status="OK",
        timestamp=datetime.now(timezone.utc),
        service=settings.app_name,
    )


@router.get("/", response_model=ServiceInfoResponse, status_code=status.HTTP_200_OK)
async def service_info(settings: Settings = Depends(get_app_settings)) -> ServiceInfoResponse:
    return ServiceInfoResponse(
        message=settings.app_name,
        version=settings.app_version,
        endpoints={"rooms": settings.api_prefix, "health": "/health"},
    )
