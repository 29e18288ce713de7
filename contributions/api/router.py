"""
API Router - Combines all route modules.
"""
from fastapi import APIRouter

from .routes import contributors, health

# Main API router
api_router = APIRouter(prefix="/api/v1")

api_router.include_router(contributors.router)
api_router.include_router(health.router)
