"""
MongoDB Service - CRUD operations for document collections.

Collections in this database:
1. jobs          - Job and internship postings (camelCase keys)
2. applications  - Candidate submissions; resume files live on disk

Each service owns one collection. A collection can be passed in
explicitly (scripts, tests); otherwise the shared client is used.
"""

import logging
import math
import re
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any, Tuple
from bson import ObjectId
from pymongo import DESCENDING, ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import OperationFailure

from app.core.config import get_settings
from app.db.mongodb import get_collection, COLLECTIONS, JOB_TEXT_FIELDS
from app.schemas.schemas import JobCreate
from app.utils.text_utils import merge_tags

settings = get_settings()

LOG = logging.getLogger(__name__)


# ============================================================
# HELPER: Convert ObjectId to string for JSON serialization
# ============================================================

def serialize_doc(doc: dict) -> dict:
    """Convert MongoDB document to JSON-serializable dict (_id becomes id)."""
    if doc is None:
        return None
    doc = dict(doc)
    if "_id" in doc:
        doc["id"] = str(doc.pop("_id"))
    doc.pop("score", None)
    for key, value in doc.items():
        if isinstance(value, ObjectId):
            doc[key] = str(value)
    return doc


def serialize_docs(docs: list) -> list:
    """Convert list of MongoDB documents to JSON-serializable list."""
    return [serialize_doc(doc) for doc in docs]


# ============================================================
# JOBS COLLECTION
# ============================================================

class JobService:
    """
    Handles job posting storage, filtering and search.
    """

    def __init__(self, collection: Optional[Collection] = None):
        self.collection: Collection = (
            collection if collection is not None else get_collection(COLLECTIONS["jobs"])
        )

    def create(self, job: JobCreate) -> dict:
        """Insert a normalized job; returns the stored document."""
        now = datetime.now(timezone.utc)
        doc = job.to_document()
        doc["createdAt"] = now
        doc["updatedAt"] = now
        result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        LOG.info(f"Created job {result.inserted_id} ({doc['title']})")
        return doc

    def get_by_id(self, job_id: ObjectId) -> Optional[dict]:
        return self.collection.find_one({"_id": job_id})

    def list(
        self,
        status: Optional[str] = None,
        job_type: Optional[str] = None,
        department: Optional[str] = None,
        q: Optional[str] = None,
        page: int = 1,
        limit: Optional[int] = None,
    ) -> Tuple[List[dict], int]:
        """
        Filter jobs and return (page of documents, total matches).

        A search term uses the text index (ranked by score) when it is
        available and falls back to a case-insensitive regex scan over the
        same fields otherwise. Without a limit every match is returned.
        """
        query: Dict[str, Any] = {}
        if status:
            query["status"] = status
        if job_type:
            query["type"] = job_type
        if department:
            query["department"] = department

        skip = (page - 1) * limit if limit else 0

        if q:
            if settings.text_search_enabled:
                try:
                    return self._text_search(query, q, skip, limit)
                except OperationFailure as e:
                    LOG.warning(f"Text search unavailable, using regex fallback: {e}")
            pattern = {"$regex": re.escape(q), "$options": "i"}
            query["$or"] = [{field: pattern} for field in JOB_TEXT_FIELDS]

        total = self.collection.count_documents(query)
        cursor = self.collection.find(query).sort([("createdAt", DESCENDING)])
        return _page(cursor, skip, limit), total

    def _text_search(self, query: dict, term: str, skip: int, limit: Optional[int]) -> Tuple[List[dict], int]:
        text_query = {**query, "$text": {"$search": term}}
        total = self.collection.count_documents(text_query)
        cursor = (
            self.collection.find(text_query, {"score": {"$meta": "textScore"}})
            .sort([("score", {"$meta": "textScore"}), ("createdAt", DESCENDING)])
        )
        return _page(cursor, skip, limit), total

    def update(self, job_id: ObjectId, changes: dict) -> Optional[dict]:
        """Apply a $set and return the updated document (None if missing)."""
        changes = {**changes, "updatedAt": datetime.now(timezone.utc)}
        return self.collection.find_one_and_update(
            {"_id": job_id},
            {"$set": changes},
            return_document=ReturnDocument.AFTER
        )

    def set_status(self, job_id: ObjectId, status: str) -> Optional[dict]:
        return self.update(job_id, {"status": status})

    def delete(self, job_id: ObjectId) -> bool:
        result = self.collection.delete_one({"_id": job_id})
        return result.deleted_count > 0

    def increment_applications(self, job_id: ObjectId) -> bool:
        """Bump the per-job application counter."""
        result = self.collection.update_one(
            {"_id": job_id},
            {"$inc": {"applications": 1}}
        )
        return result.modified_count > 0

    def backfill(self, company_name: Optional[str] = None) -> dict:
        """
        Repair documents written by older versions of the dashboard.

        - companyName missing/empty/null -> default company
        - applicationLink missing/null -> ""
        - tags/skills re-derived from tags + requiredSkills
        """
        company_name = company_name or settings.company_name

        company = self.collection.update_many(
            {"$or": [
                {"companyName": {"$exists": False}},
                {"companyName": ""},
                {"companyName": None}
            ]},
            {"$set": {"companyName": company_name}}
        )
        link = self.collection.update_many(
            {"$or": [
                {"applicationLink": {"$exists": False}},
                {"applicationLink": None}
            ]},
            {"$set": {"applicationLink": ""}}
        )

        mirrored = 0
        for doc in self.collection.find({}, {"tags": 1, "requiredSkills": 1, "skills": 1}):
            tags = merge_tags(doc.get("tags"), doc.get("requiredSkills"))
            if tags != doc.get("tags") or tags != doc.get("skills"):
                self.collection.update_one(
                    {"_id": doc["_id"]},
                    {"$set": {"tags": tags, "skills": list(tags)}}
                )
                mirrored += 1

        return {
            "company_matched": company.matched_count,
            "company_modified": company.modified_count,
            "link_matched": link.matched_count,
            "link_modified": link.modified_count,
            "tags_mirrored": mirrored,
        }


def page_count(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0


def _page(cursor, skip: int, limit: Optional[int]) -> List[dict]:
    if limit:
        cursor = cursor.skip(skip).limit(limit)
    return list(cursor)


# ============================================================
# APPLICATIONS COLLECTION
# ============================================================

class ApplicationService:
    """
    Handles candidate application storage.
    The resume itself stays on disk; only its path is stored.
    """

    def __init__(self, collection: Optional[Collection] = None):
        self.collection: Collection = (
            collection if collection is not None else get_collection(COLLECTIONS["applications"])
        )

    def insert(
        self,
        full_name: str,
        email: str,
        phone: str,
        comments: str,
        resume_path: str,
        resume_filename: str,
        resume_size: int,
        job_id: Optional[ObjectId] = None,
        job_title: Optional[str] = None,
        email_sent: bool = False,
    ) -> dict:
        """Insert an application; returns the stored document."""
        now = datetime.now(timezone.utc)
        doc = {
            "jobId": job_id,
            "jobTitle": job_title or None,
            "fullName": full_name,
            "email": email,
            "phone": phone,
            "comments": comments,
            "resumePath": resume_path,
            "resumeFilename": resume_filename,
            "resumeSize": resume_size,
            "emailSent": email_sent,
            "createdAt": now,
            "updatedAt": now
        }
        result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return doc

    def get_by_id(self, application_id: ObjectId) -> Optional[dict]:
        return self.collection.find_one({"_id": application_id})

    def list(self, job_id: Optional[ObjectId] = None) -> List[dict]:
        """All applications, newest first, optionally for one job."""
        query = {"jobId": job_id} if job_id else {}
        cursor = self.collection.find(query).sort([("createdAt", DESCENDING)])
        return list(cursor)
