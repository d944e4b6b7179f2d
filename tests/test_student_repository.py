"""Tests for the MongoDB adapter: document conversion and error translation."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
import bson
from bson import Decimal128, ObjectId
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError

from app.core.exceptions import EmailConflictError, StoreError, StudentNotFoundError
from app.models.student import Address, Gender
from app.services.student_repository import (
    StudentRepository, from_document, to_bson_datetime, to_document, to_object_id
)

from tests.conftest import make_student


@pytest.fixture
def collection():
    return MagicMock()


@pytest.fixture
def repo(collection):
    return StudentRepository(collection)


def test_to_document_uses_camel_case_and_bson_types():
    doc = to_document(make_student(id="ignored"))

    assert "_id" not in doc and "id" not in doc
    assert doc["firstName"] == "Jane"
    assert doc["gender"] == "FEMALE"
    assert type(doc["gender"]) is str
    assert doc["address"] == {"city": "Makati City", "country": "Philippines", "postCode": "1200"}
    assert doc["totalSpentInBooks"] == Decimal128("12.50")
    assert doc["created"] == datetime(2024, 1, 15, 9, 30)


def test_from_document():
    object_id = ObjectId()
    student = from_document({
        "_id": object_id,
        "firstName": "Juan",
        "lastName": "Dela Cruz",
        "email": "juan@x.com",
        "gender": "MALE",
        "address": {"city": "Makati City", "country": "Philippines", "postCode": "1200"},
        "favouriteSubjects": ["English"],
        "totalSpentInBooks": Decimal128("10"),
        "created": datetime(2024, 1, 1),
        "_class": "com.example.Student"
    })

    assert student.id == str(object_id)
    assert student.gender == Gender.MALE
    assert student.address == Address(city="Makati City", country="Philippines", post_code="1200")
    assert student.total_spent_in_books == Decimal("10")


def test_from_document_none():
    assert from_document(None) is None


@pytest.mark.parametrize("value", ["", "123", "not-an-object-id", None])
def test_to_object_id_invalid(value):
    assert to_object_id(value) is None


def test_find_by_id_invalid_id_skips_query(repo, collection):
    assert repo.find_by_id("123") is None
    collection.find_one.assert_not_called()


def test_exists_by_id_invalid_id(repo, collection):
    assert repo.exists_by_id("nope") is False
    collection.count_documents.assert_not_called()


def test_exists_by_email(repo, collection):
    collection.count_documents.return_value = 1
    assert repo.exists_by_email("a@x.com") is True
    collection.count_documents.assert_called_once_with({"email": "a@x.com"}, limit=1)


def test_insert_returns_assigned_id(repo, collection):
    object_id = ObjectId()
    collection.insert_one.return_value.inserted_id = object_id

    stored = repo.insert(make_student())

    assert stored.id == str(object_id)
    inserted = collection.insert_one.call_args[0][0]
    assert inserted["email"] == "a@x.com"


def test_insert_duplicate_key_is_email_conflict(repo, collection):
    collection.insert_one.side_effect = DuplicateKeyError("E11000 duplicate key", 11000)
    with pytest.raises(EmailConflictError):
        repo.insert(make_student())


def test_save_replaces_by_object_id(repo, collection):
    object_id = ObjectId()
    collection.replace_one.return_value.matched_count = 1

    repo.save(make_student(id=str(object_id), last_name="Doe"))

    query, doc = collection.replace_one.call_args[0]
    assert query == {"_id": object_id}
    assert doc["lastName"] == "Doe"
    collection.insert_one.assert_not_called()


def test_save_missing_document(repo, collection):
    collection.replace_one.return_value.matched_count = 0
    with pytest.raises(StudentNotFoundError):
        repo.save(make_student(id=str(ObjectId())))


def test_store_failure_is_wrapped(repo, collection):
    collection.find.side_effect = ServerSelectionTimeoutError("no servers")
    with pytest.raises(StoreError) as exc_info:
        repo.find_all()
    assert isinstance(exc_info.value.__cause__, ServerSelectionTimeoutError)


def test_delete_by_id(repo, collection):
    object_id = ObjectId()
    repo.delete_by_id(str(object_id))
    collection.delete_one.assert_called_once_with({"_id": object_id})


def bson_round_trip(object_id, doc):
    return from_document(bson.decode(bson.encode({"_id": object_id, **doc})))


def test_to_bson_datetime():
    given = datetime(2024, 1, 15, 11, 30, 0, 123456, tzinfo=timezone(timedelta(hours=2)))
    assert to_bson_datetime(given) == datetime(2024, 1, 15, 9, 30, 0, 123000)


def test_insert_returns_what_mongo_stores(repo, collection):
    object_id = ObjectId()
    collection.insert_one.return_value.inserted_id = object_id
    given = datetime(2024, 1, 15, 9, 30, 0, 123456, tzinfo=timezone.utc)

    returned = repo.insert(make_student(created=given))

    stored = bson_round_trip(object_id, collection.insert_one.call_args[0][0])
    assert returned == stored
    assert stored.created == datetime(2024, 1, 15, 9, 30, 0, 123000)


def test_save_returns_what_mongo_stores(repo, collection):
    object_id = ObjectId()
    collection.replace_one.return_value.matched_count = 1
    given = datetime(2024, 1, 15, 4, 30, 0, 987654, tzinfo=timezone(timedelta(hours=-5)))

    returned = repo.save(make_student(id=str(object_id), created=given))

    stored = bson_round_trip(object_id, collection.replace_one.call_args[0][1])
    assert returned == stored
    assert stored.created == datetime(2024, 1, 15, 9, 30, 0, 987000)


def test_malformed_document_is_store_error(repo, collection):
    collection.find_one.return_value = {"_id": ObjectId(), "email": "a@x.com", "gender": "OTHER"}
    with pytest.raises(StoreError):
        repo.find_by_email("a@x.com")
