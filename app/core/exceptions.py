"""
Service-level errors.

Routes translate these into HTTP status codes:
- StudentNotFoundError -> 404
- EmailConflictError   -> 409
- StoreError           -> 500
"""


class StudentServiceError(Exception):
    """Base class for all student service errors."""


class StudentNotFoundError(StudentServiceError):
    def __init__(self, student_id: str):
        self.student_id = student_id
        super().__init__(f"Student with id {student_id} not found")


class EmailConflictError(StudentServiceError):
    """Raised on create or update when another student already owns the email."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Email `{email}` already exists")


class StoreError(StudentServiceError):
    """Underlying persistence failure. The original exception is chained."""
