"""API routes."""

from fastapi import APIRouter

from loyverse_proxy.routes import loyverse

api_router = APIRouter()

# Short aliases from the standalone server (/api/loyverse-data, ...)
api_router.include_router(loyverse.alias_router, prefix="/api", tags=["loyverse"])

# Loyverse proxy endpoints; the generic passthrough is registered last
api_router.include_router(loyverse.router, prefix="/api/loyverse", tags=["loyverse"])
