"""
API module - FastAPI routers and endpoint definitions.

Usage:
    from app.api import api_router
    app.include_router(api_router, prefix="/api/v1")
"""

from app.api.routes import api_router

__all__ = ["api_router"]
