"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from app.api.routes.job_routes import router as job_router
from app.api.routes.apply_routes import router as apply_router
from app.api.routes.application_routes import router as application_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(job_router)
api_router.include_router(apply_router)
api_router.include_router(application_router)
