"""
Models module - the Student record as stored and served.
"""
from app.models.student import Address, Gender, Student

__all__ = ["Address", "Gender", "Student"]
