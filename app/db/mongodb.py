"""
MongoDB Connection Utility

MongoDB stores:
- Job postings (careers page + HR dashboard)
- Candidate applications (resume files live on disk, the path is stored here)
"""
import logging

from pymongo import ASCENDING, DESCENDING, TEXT, MongoClient
from pymongo.database import Database
from pymongo.collection import Collection
from app.core.config import get_settings

settings = get_settings()

LOG = logging.getLogger(__name__)

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(
            settings.mongodb_uri,
            serverSelectionTimeoutMS=15000,
            socketTimeoutMS=45000,
            tz_aware=True
        )
    return _client


def get_mongo_db() -> Database:
    """Get the portal database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[settings.mongodb_db]
    return _db


def get_collection(name: str) -> Collection:
    """
    Get a specific collection.
    Collections we'll use:
    - jobs: Job and internship postings
    - applications: Candidate submissions
    """
    db = get_mongo_db()
    return db[name]


def close_mongo_client() -> None:
    global _client, _db
    if _client is not None:
        _client.close()
    _client = None
    _db = None


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
    except Exception as e:
        LOG.error(f"MongoDB connection failed: {e}")
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "jobs": "jobs",
    "applications": "applications"
}

# Fields covered by the jobs text index
JOB_TEXT_FIELDS = ["title", "overview", "description", "location", "department", "tags"]


def init_mongo_indexes():
    """
    Create indexes for better query performance.
    Call this once during app startup.
    """
    db = get_mongo_db()
    jobs = db[COLLECTIONS["jobs"]]

    # Newest-first listing
    jobs.create_index([("createdAt", DESCENDING)])

    # Dashboard filters
    jobs.create_index([
        ("type", ASCENDING),
        ("department", ASCENDING),
        ("status", ASCENDING)
    ])

    # Free text search on the careers page
    jobs.create_index([(field, TEXT) for field in JOB_TEXT_FIELDS], name="job_text_search")

    applications = db[COLLECTIONS["applications"]]
    applications.create_index("jobId")
    applications.create_index([("createdAt", DESCENDING)])

    LOG.info("MongoDB indexes created successfully")
