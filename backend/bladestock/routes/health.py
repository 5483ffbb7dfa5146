"""
Blade Stock Backend — Service Banner & Health Routes
======================================================

GET /        → name, version and the list of API endpoints
GET /health  → {"status": "OK"} for uptime probes; touches no dependency
"""

from fastapi import APIRouter

from bladestock import __version__
from bladestock.schemas.blade import HealthResponse, ServiceInfoResponse

router = APIRouter(tags=["Health"])

API_ENDPOINTS = {
    "data": "/api/data",
    "inventory": "/api/inventory",
    "logs": "/api/logs",
    "machine-blades": "/api/machine-blades",
    "blade-assignments": "/api/blade-assignments",
    "machine-status": "/api/machine-status",
    "reset": "/api/reset",
}


@router.get("/", response_model=ServiceInfoResponse, summary="Service banner")
async def service_info() -> ServiceInfoResponse:
    return ServiceInfoResponse(
        message="Blade Management API is running",
        version=__version__,
        endpoints=API_ENDPOINTS,
    )


@router.get("/health", response_model=HealthResponse, summary="Liveness check")
async def health_check() -> HealthResponse:
    return HealthResponse(status="OK")
