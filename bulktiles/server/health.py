"""
Liveness endpoints.
"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

health_router = APIRouter(tags=["Health"])


@health_router.get(
    "/",
    response_class=PlainTextResponse,
    summary="Liveness message.",
)
def get_root():
    return "Bulk tile server is running"


@health_router.get(
    "/health",
    summary="Health check.",
)
def get_health():
    return {"status": "OK"}
