"""
MongoDB Connection Utility

MongoDB stores one collection:
- students: one document per student, email as natural key

Documents use camelCase keys (firstName, favouriteSubjects, ...) with the
ObjectId in `_id`.
"""
import logging

from pymongo import ASCENDING, MongoClient
from pymongo.database import Database
from pymongo.collection import Collection
from pymongo.errors import PyMongoError
from app.core.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(
            settings.mongodb_uri,
            serverSelectionTimeoutMS=settings.mongodb_timeout_ms
        )
    return _client


def get_mongo_db() -> Database:
    """Get the student records database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[settings.mongodb_db]
    return _db


def get_collection(name: str) -> Collection:
    """Get a specific collection."""
    db = get_mongo_db()
    return db[name]


def get_students_collection() -> Collection:
    return get_collection(settings.students_collection)


def test_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = get_mongo_client()
        # ping command checks connection
        client.admin.command('ping')
        return True
    except PyMongoError as e:
        logger.warning("MongoDB connection failed: %s", e)
        return False


def init_mongo_indexes():
    """
    Create indexes. Call this once during app startup.

    The unique index on email backs the uniqueness check done by the
    service: a duplicate that slips between check and write is rejected
    by the server.
    """
    collection = get_students_collection()
    collection.create_index([("email", ASCENDING)], unique=True, name="email_unique")
    logger.info("MongoDB indexes created on %s", collection.full_name)


def close_mongo_client():
    """Close the global client (called on shutdown)."""
    global _client, _db
    if _client is not None:
        _client.close()
    _client = None
    _db = None
