"""
Schemas module - Request/Response schemas for API endpoints.

Difference from models:
- Models: the stored record (also used as the response body)
- Schemas: what the client sends
"""
from app.schemas.schemas import (
    AddressCreate, StudentCreate, StudentUpdate, MessageResponse, ErrorResponse
)

__all__ = ["AddressCreate", "StudentCreate", "StudentUpdate", "MessageResponse", "ErrorResponse"]
