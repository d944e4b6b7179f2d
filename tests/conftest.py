"""
Shared fixtures.

InMemoryStudentRepository implements the same methods as StudentRepository
over a dict, so service and route tests run without MongoDB. Records are
normalized the same way the real adapter normalizes them before writing.
"""

import itertools
from datetime import datetime
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from app.core.exceptions import EmailConflictError, StudentNotFoundError
from app.models.student import Address, Gender, Student
from app.services.student_repository import get_student_repository, normalize_for_store
from app.services.student_service import StudentService


class InMemoryStudentRepository:
    def __init__(self):
        self.students = {}
        self.save_calls = 0
        self.insert_calls = 0
        self._ids = itertools.count(1)

    def find_all(self):
        return list(self.students.values())

    def find_by_id(self, student_id):
        return self.students.get(student_id)

    def find_by_email(self, email):
        for student in self.students.values():
            if student.email == email:
                return student
        return None

    def exists_by_id(self, student_id):
        return student_id in self.students

    def exists_by_email(self, email):
        return self.find_by_email(email) is not None

    def insert(self, student):
        if self.exists_by_email(student.email):
            raise EmailConflictError(student.email)
        self.insert_calls += 1
        stored = normalize_for_store(student).model_copy(update={"id": str(next(self._ids))})
        self.students[stored.id] = stored
        return stored

    def save(self, student):
        if student.id not in self.students:
            raise StudentNotFoundError(student.id)
        self.save_calls += 1
        stored = normalize_for_store(student)
        self.students[stored.id] = stored
        return stored

    def delete_by_id(self, student_id):
        self.students.pop(student_id, None)


def make_student(**overrides) -> Student:
    data = dict(
        first_name="Jane",
        last_name="Smith",
        email="a@x.com",
        gender=Gender.FEMALE,
        address=Address(city="Makati City", country="Philippines", post_code="1200"),
        favourite_subjects=["Maths"],
        total_spent_in_books=Decimal("12.50"),
        created=datetime(2024, 1, 15, 9, 30)
    )
    data.update(overrides)
    return Student(**data)


@pytest.fixture
def repository():
    return InMemoryStudentRepository()


@pytest.fixture
def service(repository):
    return StudentService(repository)


@pytest.fixture
def client(repository):
    from app.main import app

    app.dependency_overrides[get_student_repository] = lambda: repository
    # No context manager: startup hooks (index creation, seeding) stay off
    yield TestClient(app)
    app.dependency_overrides.clear()
