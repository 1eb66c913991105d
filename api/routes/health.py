"""
Health check endpoints.

Used for monitoring and load balancer health checks.
"""
from datetime import datetime, timezone
import platform

from fastapi import APIRouter

from vinyl_orders import __version__


router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns system health status.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": "vinyl-orders",
        "version": __version__,
        "python_version": platform.python_version(),
    }
