from fastapi import APIRouter

from locator.api.v1.endpoints import events, health, locations

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(locations.router, prefix="/locationsearch", tags=["locations"])
api_router.include_router(events.router, prefix="/locationsearch", tags=["events"])
