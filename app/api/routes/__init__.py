"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from app.api.routes.student_routes import router as student_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(student_router)
