"""
Seed Service - inserts a default student on startup.

Enabled with SEED_ON_STARTUP=true. Idempotent: does nothing when a student
with the default email already exists.
"""

import logging
from datetime import datetime
from decimal import Decimal

from app.models.student import Address, Gender, Student
from app.services.student_repository import StudentRepository

logger = logging.getLogger(__name__)

DEFAULT_EMAIL = "juan.delacruz@medinar.com"


def build_default_student() -> Student:
    return Student(
        first_name="Juan",
        last_name="Dela Cruz",
        email=DEFAULT_EMAIL,
        gender=Gender.MALE,
        address=Address(city="Makati City", country="Philippines", post_code="1200"),
        favourite_subjects=["Computer Science", "English"],
        total_spent_in_books=Decimal("10"),
        created=datetime.utcnow()
    )


def seed_default_student(repository: StudentRepository) -> bool:
    """
    Insert the default student unless its email is taken.

    Returns:
        True if a student was inserted
    """
    existing = repository.find_by_email(DEFAULT_EMAIL)
    if existing is not None:
        logger.info("Student %s already exists (id=%s)", DEFAULT_EMAIL, existing.id)
        return False

    student = repository.insert(build_default_student())
    logger.info("Inserted default student %s (id=%s)", student.email, student.id)
    return True
