"""
Student Service - business rules for student records.

Rules enforced here:
1. Email is unique across all students (checked on create and on update)
2. Update is a partial merge: only fields present in the patch AND different
   from the stored value are written
3. Missing ids surface as StudentNotFoundError

The store is reached only through the repository methods, so check-then-write
is two separate operations. The unique email index closes that gap on MongoDB.
"""

import logging
from typing import Any, List, Optional

from app.core.exceptions import EmailConflictError, StudentNotFoundError
from app.models.student import Address, Student
from app.schemas.schemas import AddressCreate, StudentUpdate
from app.services.student_repository import StudentRepository

logger = logging.getLogger(__name__)


# Fields merged with the plain presence/difference rule.
# Email is handled separately because it also needs the uniqueness check.
MERGED_FIELDS = (
    "first_name",
    "last_name",
    "gender",
    "favourite_subjects",
    "total_spent_in_books",
    "created",
)

MERGED_ADDRESS_FIELDS = (
    "city",
    "country",
    "post_code",
)


def is_present(value: Any) -> bool:
    """None, blank strings and empty lists all mean "no change requested"."""
    if value is None:
        return False
    if isinstance(value, str):
        return len(value) > 0
    if isinstance(value, (list, tuple)):
        return len(value) > 0
    return True


def should_apply(new_value: Any, current_value: Any) -> bool:
    return is_present(new_value) and new_value != current_value


class StudentService:
    """
    Student CRUD with email uniqueness and partial update.

    Usage:
        service = StudentService(StudentRepository())
        student = service.add_student(Student(...))
    """

    def __init__(self, repository: StudentRepository):
        self.repository = repository

    def get_all_students(self) -> List[Student]:
        return self.repository.find_all()

    def get_student(self, student_id: str) -> Student:
        student = self.repository.find_by_id(student_id)
        if student is None:
            raise StudentNotFoundError(student_id)
        return student

    def add_student(self, student: Student) -> Student:
        """
        Insert a new student.

        Raises:
            EmailConflictError: another student already has this email
        """
        if self.repository.exists_by_email(student.email):
            logger.info("Rejected create: email %s already exists", student.email)
            raise EmailConflictError(student.email)

        created = self.repository.insert(student.model_copy(update={"id": None}))
        logger.info("Created student %s (%s)", created.id, created.email)
        return created

    def delete_student(self, student_id: str) -> None:
        if not self.repository.exists_by_id(student_id):
            logger.info("Rejected delete: student %s not found", student_id)
            raise StudentNotFoundError(student_id)

        self.repository.delete_by_id(student_id)
        logger.info("Deleted student %s", student_id)

    def update_student(self, student_id: str, patch: StudentUpdate) -> Student:
        """
        Merge a patch into the stored student and save it in place.

        Each field is written only when the patch value is present and
        differs from the stored one. The patch's own id, if any, is ignored.

        Raises:
            StudentNotFoundError: no student with this id
            EmailConflictError: the new email belongs to another student
        """
        existing = self.get_student(student_id)

        updates = {}
        for field in MERGED_FIELDS:
            new_value = getattr(patch, field)
            if should_apply(new_value, getattr(existing, field)):
                updates[field] = new_value

        address = self._merge_address(existing.address, patch.address)
        if address is not None:
            updates["address"] = address

        if should_apply(patch.email, existing.email):
            if self.repository.exists_by_email(patch.email):
                logger.info(
                    "Rejected update of student %s: email %s already exists",
                    student_id, patch.email
                )
                raise EmailConflictError(patch.email)
            updates["email"] = patch.email

        merged = existing.model_copy(update=updates)
        saved = self.repository.save(merged)
        logger.info("Updated student %s: %s", student_id, ", ".join(sorted(updates)) or "no changes")
        return saved

    @staticmethod
    def _merge_address(current: Optional[Address], patch: Optional[AddressCreate]) -> Optional[Address]:
        """
        Merge address sub-fields. Returns the new Address, or None when
        nothing changed.
        """
        if patch is None:
            return None

        base = current if current is not None else Address()
        updates = {}
        for field in MERGED_ADDRESS_FIELDS:
            new_value = getattr(patch, field)
            if should_apply(new_value, getattr(base, field)):
                updates[field] = new_value

        if not updates:
            return None
        return base.model_copy(update=updates)

