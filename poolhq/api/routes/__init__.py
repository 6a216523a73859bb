"""Top level API router registration."""
from fastapi import APIRouter, FastAPI

from poolhq.api.routes import community_fund, health, network


def register_routes(application: FastAPI) -> None:
    """Register all API routers with the FastAPI application."""
    api_router = APIRouter(prefix="/api")

    api_router.include_router(health.router, tags=["health"])
    api_router.include_router(community_fund.router, tags=["community-fund"])
    api_router.include_router(network.router, tags=["network"])

    application.include_router(api_router)


__all__ = ["register_routes"]
