"""
Student domain model.

This is the shape stored in MongoDB and returned by the API. Attribute names
are snake_case; the JSON/document keys are camelCase via the alias generator.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Gender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Address(CamelModel):
    city: Optional[str] = None
    country: Optional[str] = None
    post_code: Optional[str] = None


class Student(CamelModel):
    id: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    gender: Optional[Gender] = None
    address: Optional[Address] = None
    favourite_subjects: List[str] = []
    total_spent_in_books: Optional[Decimal] = None
    created: Optional[datetime] = None
