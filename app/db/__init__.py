"""
Database module - MongoDB connection.
"""
from app.db.mongodb import get_mongo_db, get_students_collection, test_mongo_connection

__all__ = [
    "get_mongo_db",
    "get_students_collection",
    "test_mongo_connection"
]
