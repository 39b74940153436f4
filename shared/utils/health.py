"""
Health check and service info routes shared by the backend services
"""

from datetime import datetime, timezone
from fastapi import APIRouter

from shared.utils.config import ServiceSettings


def create_health_router(settings: ServiceSettings, resource_path: str) -> APIRouter:
    """Build /health and / for a service that exposes resource_path"""
    router = APIRouter()

    @router.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint"""
        return {
            "service": settings.service_name,
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": settings.service_version
        }

    @router.get("/", tags=["Info"])
    async def root():
        """Root endpoint"""
        return {
            "service": settings.service_name,
            "version": settings.service_version,
            "status": "running",
            "resource": resource_path,
            "docs": "/docs"
        }

    return router
