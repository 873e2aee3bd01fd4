# STL
import logging
from datetime import datetime, timedelta, timezone

# PDM
import mongomock
import pytest
from fastapi.testclient import TestClient

# LOCAL
from app.core.config import get_settings
from app.db import mongodb
from app.main import app

logging.basicConfig(level=logging.DEBUG)


@pytest.fixture
def settings(tmp_path, monkeypatch):
    """Cached settings pointed at a temp upload dir, mail off, regex search."""
    s = get_settings()
    monkeypatch.setattr(s, "upload_dir", str(tmp_path / "uploads"))
    monkeypatch.setattr(s, "text_search_enabled", False)
    monkeypatch.setattr(s, "mail_user", "")
    monkeypatch.setattr(s, "mail_password", "")
    monkeypatch.setattr(s, "delete_resume_after_email", False)
    monkeypatch.setattr(s, "max_resume_size_mb", 5)
    return s


@pytest.fixture
def db(monkeypatch):
    """Swap the shared MongoClient for an in-memory mongomock client."""
    client = mongomock.MongoClient(tz_aware=True)
    monkeypatch.setattr(mongodb, "_client", client)
    monkeypatch.setattr(mongodb, "_db", None)
    return client[get_settings().mongodb_db]


@pytest.fixture
def client(settings, db):
    return TestClient(app)


@pytest.fixture
def resume_dir(settings, tmp_path):
    return tmp_path / "uploads" / "resumes"


def job_payload(**overrides) -> dict:
    payload = {
        "title": "Backend Engineer",
        "department": "Engineering",
        "type": "Full-time",
        "location": "Bengaluru",
        "overview": "Build APIs for the learning platform",
        "requiredSkills": ["Python", "MongoDB"],
        "tags": ["Backend"],
        "benefits": "Health insurance\nFlexible hours",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def seed_jobs(db):
    """Insert raw job documents with distinct createdAt values (oldest first)."""
    def _seed(*docs):
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        ids = []
        for i, doc in enumerate(docs):
            full = {
                "title": "Job",
                "department": "Engineering",
                "type": "Full-time",
                "location": "Remote",
                "status": "Open",
                "tags": [],
                "skills": [],
                "requiredSkills": [],
                "benefits": [],
                "applications": 0,
                "createdAt": base + timedelta(days=i),
                "updatedAt": base + timedelta(days=i),
            }
            full.update(doc)
            ids.append(db["jobs"].insert_one(full).inserted_id)
        return ids
    return _seed
