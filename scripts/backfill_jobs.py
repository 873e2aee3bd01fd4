#!/usr/bin/env python3
"""
Backfill Script

Repairs job documents written by older dashboard versions:
- companyName missing/empty -> default company name
- applicationLink missing -> ""
- tags/skills re-derived from tags + requiredSkills

Run: python scripts/backfill_jobs.py
"""
import sys
sys.path.insert(0, '.')

from app.core.config import get_settings
from app.db.mongodb import test_mongo_connection, close_mongo_client
from app.services.mongo_service import JobService


def main():
    settings = get_settings()
    print("=" * 50)
    print("JOB BACKFILL")
    print("=" * 50)

    if not test_mongo_connection():
        print("❌ MongoDB connection failed!")
        sys.exit(1)

    try:
        result = JobService().backfill(settings.company_name)
        print(f"companyName matched: {result['company_matched']}, modified: {result['company_modified']}")
        print(f"applicationLink matched: {result['link_matched']}, modified: {result['link_modified']}")
        print(f"tags/skills re-mirrored: {result['tags_mirrored']}")
        print("✅ Backfill complete")
    finally:
        close_mongo_client()


if __name__ == "__main__":
    main()
