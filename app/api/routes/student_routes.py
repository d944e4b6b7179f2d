"""
Student Routes

GET    /students       - List all students
GET    /students/{id}  - Get one student
POST   /students       - Create student (email must be unique)
PUT    /students/{id}  - Partial update (blank fields are left unchanged)
DELETE /students/{id}  - Delete student
"""

from fastapi import APIRouter, HTTPException, Depends
from typing import List

from app.core.exceptions import EmailConflictError, StoreError, StudentNotFoundError
from app.models.student import Student
from app.services.student_repository import StudentRepository, get_student_repository
from app.services.student_service import StudentService
from app.schemas.schemas import StudentCreate, StudentUpdate, MessageResponse, ErrorResponse

router = APIRouter(prefix="/students", tags=["Students"])

STORE_FAILURE = "Student store is unavailable"


def get_student_service(repository: StudentRepository = Depends(get_student_repository)) -> StudentService:
    return StudentService(repository)


@router.get("", response_model=List[Student], responses={500: {"model": ErrorResponse}})
def fetch_all_students(service: StudentService = Depends(get_student_service)):
    """List every student. Returns [] when there are none."""
    try:
        return service.get_all_students()
    except StoreError:
        raise HTTPException(status_code=500, detail=STORE_FAILURE)


@router.get(
    "/{student_id}",
    response_model=Student,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
def fetch_student(student_id: str, service: StudentService = Depends(get_student_service)):
    try:
        return service.get_student(student_id)
    except StudentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreError:
        raise HTTPException(status_code=500, detail=STORE_FAILURE)


@router.post(
    "",
    response_model=Student,
    status_code=201,
    responses={409: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
def add_student(data: StudentCreate, service: StudentService = Depends(get_student_service)):
    """Create a student. Fails with 409 if the email is already used."""
    try:
        return service.add_student(data.to_student())
    except EmailConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StoreError:
        raise HTTPException(status_code=500, detail=STORE_FAILURE)


@router.put(
    "/{student_id}",
    response_model=Student,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
def update_student(student_id: str, data: StudentUpdate, service: StudentService = Depends(get_student_service)):
    """
    Partially update a student.

    Only fields that are present (non-null, non-blank, non-empty list) and
    different from the stored value are changed. Changing the email to one
    owned by another student fails with 409.
    """
    try:
        return service.update_student(student_id, data)
    except StudentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except EmailConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StoreError:
        raise HTTPException(status_code=500, detail=STORE_FAILURE)


@router.delete(
    "/{student_id}",
    response_model=MessageResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
def delete_student(student_id: str, service: StudentService = Depends(get_student_service)):
    try:
        service.delete_student(student_id)
    except StudentNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreError:
        raise HTTPException(status_code=500, detail=STORE_FAILURE)

    return MessageResponse(message=f"Student {student_id} deleted")
