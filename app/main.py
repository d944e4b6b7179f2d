"""
Student Records Service - Main Application

FastAPI backend with:
- MongoDB for student documents
- Unique email per student, partial updates

Run: uvicorn app.main:app --reload
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app import __version__
from app.api.routes import api_router
from app.core.config import get_settings
from app.core.exceptions import StudentServiceError
from app.core.logging_config import setup_logging
from app.db.mongodb import close_mongo_client, init_mongo_indexes, test_mongo_connection
from app.services.seed_service import seed_default_student
from app.services.student_repository import StudentRepository

settings = get_settings()
setup_logging(settings.log_level)

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Student Records Service",
    description="""
    Minimal CRUD service for student records.

    ## Features
    - **Students**: list, fetch, create, partial update, delete
    - **Email uniqueness**: enforced on create and on email change

    ## Database
    - MongoDB: one document per student
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    debug=settings.debug
)

# CORS middleware (allow all for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api/v1")


# Startup event
@app.on_event("startup")
def startup_event():
    """Initialize MongoDB indexes and seed data on startup."""
    try:
        init_mongo_indexes()
    except Exception:
        logger.exception("MongoDB index initialization failed")

    if settings.seed_on_startup:
        try:
            seed_default_student(StudentRepository())
        except StudentServiceError:
            logger.exception("Seeding default student failed")


@app.on_event("shutdown")
def shutdown_event():
    close_mongo_client()


@app.get("/health", tags=["Health"])
def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "mongodb": "connected" if test_mongo_connection() else "disconnected"
    }
