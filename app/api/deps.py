"""
Shared route dependencies.
"""

from bson import ObjectId
from fastapi import HTTPException, Path


def valid_object_id(id: str = Path(..., description="MongoDB ObjectId")) -> ObjectId:
    """Dependency - reject malformed ids with 400 before touching the database."""
    if not ObjectId.is_valid(id):
        raise HTTPException(status_code=400, detail=f'Invalid id: "{id}"')
    return ObjectId(id)
