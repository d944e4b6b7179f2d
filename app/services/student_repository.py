"""
Student Repository - storage adapter over the MongoDB `students` collection.

The service layer depends only on these methods:
    find_all, find_by_id, find_by_email, exists_by_id, exists_by_email,
    insert, save, delete_by_id

Any object exposing them can stand in for this class (the tests use an
in-memory one).

Conversions:
- `_id` (ObjectId) <-> Student.id (str)
- Decimal128       <-> Decimal
- Gender enum      <-> its string value
- created          -> naive UTC, millisecond precision (what BSON keeps)
"""

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import List, Optional

from bson import Decimal128, ObjectId
from pydantic import ValidationError
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError

from app.core.exceptions import EmailConflictError, StoreError, StudentNotFoundError
from app.db.mongodb import get_students_collection
from app.models.student import Student

logger = logging.getLogger(__name__)


# ============================================================
# HELPERS: document <-> model conversion
# ============================================================

def to_object_id(student_id: str) -> Optional[ObjectId]:
    """Parse a student id. Returns None for anything that is not an ObjectId."""
    if isinstance(student_id, ObjectId):
        return student_id
    if not isinstance(student_id, str) or not ObjectId.is_valid(student_id):
        return None
    return ObjectId(student_id)


def to_bson_datetime(value: datetime) -> datetime:
    """Reduce a datetime to what BSON stores: naive UTC, whole milliseconds."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def normalize_for_store(student: Student) -> Student:
    """Return the student exactly as it will read back from MongoDB."""
    if student.created is None:
        return student
    return student.model_copy(update={"created": to_bson_datetime(student.created)})


def to_document(student: Student) -> dict:
    """Convert a Student into a MongoDB document (without `_id`)."""
    student = normalize_for_store(student)
    doc = student.model_dump(by_alias=True, exclude={"id"})
    if student.gender is not None:
        doc["gender"] = student.gender.value
    if student.total_spent_in_books is not None:
        doc["totalSpentInBooks"] = Decimal128(student.total_spent_in_books)
    return doc


def from_document(doc: dict) -> Optional[Student]:
    """Convert a MongoDB document into a Student."""
    if doc is None:
        return None
    data = dict(doc)
    object_id = data.pop("_id", None)
    if isinstance(data.get("totalSpentInBooks"), Decimal128):
        data["totalSpentInBooks"] = data["totalSpentInBooks"].to_decimal()
    data["id"] = str(object_id) if object_id is not None else None
    try:
        return Student.model_validate(data)
    except ValidationError as e:
        logger.error("Malformed student document %s: %s", data["id"], e)
        raise StoreError(f"Malformed student document {data['id']}") from e


@contextmanager
def store_errors(operation: str, email: Optional[str] = None):
    """
    Translate pymongo errors raised inside the block.

    DuplicateKeyError (unique email index) becomes EmailConflictError when
    the email being written is known; everything else becomes StoreError.
    """
    try:
        yield
    except DuplicateKeyError as e:
        if email is None:
            logger.error("Duplicate key during %s: %s", operation, e)
            raise StoreError(f"Duplicate key during {operation}") from e
        logger.warning("Unique index rejected email %s during %s", email, operation)
        raise EmailConflictError(email) from e
    except PyMongoError as e:
        logger.error("MongoDB %s failed: %s", operation, e)
        raise StoreError(f"Store failure during {operation}") from e


# ============================================================
# STUDENTS COLLECTION
# ============================================================

class StudentRepository:
    """
    Handles student document storage.
    """

    def __init__(self, collection: Collection = None):
        # Collection objects refuse truth testing, hence the explicit None check
        self.collection: Collection = collection if collection is not None else get_students_collection()

    def find_all(self) -> List[Student]:
        """Fetch every student, in natural order."""
        with store_errors("find_all"):
            return [from_document(doc) for doc in self.collection.find()]

    def find_by_id(self, student_id: str) -> Optional[Student]:
        object_id = to_object_id(student_id)
        if object_id is None:
            return None
        with store_errors("find_by_id"):
            doc = self.collection.find_one({"_id": object_id})
        return from_document(doc)

    def find_by_email(self, email: str) -> Optional[Student]:
        with store_errors("find_by_email"):
            doc = self.collection.find_one({"email": email})
        return from_document(doc)

    def exists_by_id(self, student_id: str) -> bool:
        object_id = to_object_id(student_id)
        if object_id is None:
            return False
        with store_errors("exists_by_id"):
            return self.collection.count_documents({"_id": object_id}, limit=1) > 0

    def exists_by_email(self, email: str) -> bool:
        with store_errors("exists_by_email"):
            return self.collection.count_documents({"email": email}, limit=1) > 0

    def insert(self, student: Student) -> Student:
        """
        Insert a new student document.

        Any id on the input is ignored; MongoDB assigns the ObjectId.

        Returns:
            The student as stored: assigned id, created cut to BSON precision
        """
        student = normalize_for_store(student)
        doc = to_document(student)
        with store_errors("insert", email=student.email):
            result = self.collection.insert_one(doc)
        return student.model_copy(update={"id": str(result.inserted_id)})

    def save(self, student: Student) -> Student:
        """Replace an existing student document in place (never inserts)."""
        student = normalize_for_store(student)
        object_id = to_object_id(student.id)
        if object_id is None:
            raise StudentNotFoundError(student.id)
        with store_errors("save", email=student.email):
            result = self.collection.replace_one({"_id": object_id}, to_document(student))
        if result.matched_count == 0:
            # Deleted between fetch and save
            raise StudentNotFoundError(student.id)
        return student

    def delete_by_id(self, student_id: str) -> None:
        object_id = to_object_id(student_id)
        if object_id is None:
            return
        with store_errors("delete_by_id"):
            self.collection.delete_one({"_id": object_id})


def get_student_repository() -> StudentRepository:
    """Get student repository instance (FastAPI dependency)."""
    return StudentRepository()
