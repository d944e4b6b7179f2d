"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Responses reuse the Student model from app.models.
"""

from pydantic import Field, field_validator
from typing import Optional, List
from datetime import datetime
from decimal import Decimal

from app.models.student import Address, CamelModel, Gender, Student

# Decimal128 holds at most 34 significant digits
MAX_AMOUNT_DIGITS = 34


# ============================================================
# STUDENT SCHEMAS
# ============================================================

class AddressCreate(CamelModel):
    city: Optional[str] = Field(None, max_length=100)
    country: Optional[str] = Field(None, max_length=100)
    post_code: Optional[str] = Field(None, max_length=20)


class StudentCreate(CamelModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=1, max_length=254)
    gender: Optional[Gender] = None
    address: Optional[AddressCreate] = None
    favourite_subjects: List[str] = []
    total_spent_in_books: Optional[Decimal] = Field(None, max_digits=MAX_AMOUNT_DIGITS)
    created: datetime = Field(default_factory=datetime.utcnow)

    def to_student(self) -> Student:
        """Build the record to insert. No id: the store assigns it."""
        return Student(
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            gender=self.gender,
            address=Address(**self.address.model_dump()) if self.address else None,
            favourite_subjects=list(self.favourite_subjects),
            total_spent_in_books=self.total_spent_in_books,
            created=self.created
        )


class StudentUpdate(CamelModel):
    """
    Patch body for PUT /students/{id}.

    Every field is optional. None, blank strings and empty lists all mean
    "leave unchanged"; an `id` in the body is ignored in favour of the path.
    """
    id: Optional[str] = None
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    email: Optional[str] = Field(None, max_length=254)
    gender: Optional[Gender] = None
    address: Optional[AddressCreate] = None
    favourite_subjects: Optional[List[str]] = None
    total_spent_in_books: Optional[Decimal] = Field(None, max_digits=MAX_AMOUNT_DIGITS)
    created: Optional[datetime] = None

    @field_validator("gender", mode="before")
    @classmethod
    def blank_gender_is_absent(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(CamelModel):
    message: str
    success: bool = True


class ErrorResponse(CamelModel):
    detail: str
