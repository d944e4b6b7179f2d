"""
Student Records Service
A minimal REST service for student records backed by MongoDB.

Architecture:
- API routes: HTTP <-> service calls, errors -> status codes
- StudentService: email uniqueness, partial-update merge
- StudentRepository: the only code that talks to MongoDB
"""

__version__ = "1.0.0"
