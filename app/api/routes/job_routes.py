"""
Job Routes

GET /jobs - List jobs with filters, search and optional pagination
GET /jobs/public - Same as GET /jobs but only Open jobs (careers page)
POST /jobs - Create job posting
GET /jobs/{job_id} - Get job details
PUT /jobs/{job_id} - Update job (partial)
PATCH /jobs/{job_id} - Update job (partial)
PATCH /jobs/{job_id}/status - Open/close a job
DELETE /jobs/{job_id} - Delete job
"""

from bson import ObjectId
from fastapi import APIRouter, HTTPException, Depends, Query
from typing import Optional

from app.api.deps import valid_object_id
from app.services.mongo_service import JobService, serialize_doc, serialize_docs, page_count
from app.utils.text_utils import strip_tags
from app.schemas.schemas import (
    JobCreate, JobUpdate, JobStatusUpdate, JobStatus, JobResponse, JobListResponse,
    MessageResponse
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])


def _list_jobs(
    status: Optional[str],
    job_type: Optional[str],
    department: Optional[str],
    q: Optional[str],
    page: int,
    limit: Optional[int],
) -> JobListResponse:
    """Without a limit every match is returned as a single page."""
    docs, total = JobService().list(
        status=strip_tags(status) or None,
        job_type=strip_tags(job_type) or None,
        department=strip_tags(department) or None,
        q=strip_tags(q) or None,
        page=page,
        limit=limit,
    )
    if limit is None:
        page, limit = 1, total
    return JobListResponse(
        data=[JobResponse.model_validate(d) for d in serialize_docs(docs)],
        total=total,
        page=page,
        limit=limit,
        pages=page_count(total, limit),
    )


@router.get("", response_model=JobListResponse)
async def list_jobs(
    status: Optional[str] = Query(None, description="Open or Closed"),
    job_type: Optional[str] = Query(None, alias="type", description="Full-time, Part-time or Internship"),
    department: Optional[str] = Query(None),
    q: Optional[str] = Query(None, description="Free text search"),
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=200, description="Page size; omit to get every match")
):
    """List jobs (HR dashboard), newest first unless searching."""
    return _list_jobs(status, job_type, department, q, page, limit)


@router.get("/public", response_model=JobListResponse)
async def list_public_jobs(
    job_type: Optional[str] = Query(None, alias="type"),
    department: Optional[str] = Query(None),
    q: Optional[str] = Query(None),
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=200)
):
    """Careers page listing: only Open jobs."""
    return _list_jobs(JobStatus.open.value, job_type, department, q, page, limit)


@router.post("", response_model=JobResponse, status_code=201)
async def create_job(job: JobCreate):
    """Create a new job posting. Tags are merged with required skills."""
    doc = JobService().create(job)
    return JobResponse.model_validate(serialize_doc(doc))


@router.get("/{id}", response_model=JobResponse)
async def get_job(job_id: ObjectId = Depends(valid_object_id)):
    """Get details of a specific job."""
    doc = JobService().get_by_id(job_id)
    if not doc:
        raise HTTPException(status_code=404, detail="Job not found")
    return JobResponse.model_validate(serialize_doc(doc))


@router.put("/{id}", response_model=JobResponse)
@router.patch("/{id}", response_model=JobResponse)
async def update_job(update: JobUpdate, job_id: ObjectId = Depends(valid_object_id)):
    """Partially update a job. Fields not sent are left untouched."""
    changes = update.to_set()
    if not changes:
        raise HTTPException(status_code=400, detail="No valid fields provided to update.")

    doc = JobService().update(job_id, changes)
    if not doc:
        raise HTTPException(status_code=404, detail="Job not found")
    return JobResponse.model_validate(serialize_doc(doc))


@router.patch("/{id}/status", response_model=JobResponse)
async def set_job_status(
    payload: Optional[JobStatusUpdate] = None,
    job_id: ObjectId = Depends(valid_object_id)
):
    """Open or close a job."""
    if payload is None or payload.status is None:
        raise HTTPException(status_code=400, detail="Status is required")

    doc = JobService().set_status(job_id, payload.status.value)
    if not doc:
        raise HTTPException(status_code=404, detail="Job not found")
    return JobResponse.model_validate(serialize_doc(doc))


@router.delete("/{id}", response_model=MessageResponse)
async def delete_job(job_id: ObjectId = Depends(valid_object_id)):
    """Delete a job posting. Existing applications are kept."""
    if not JobService().delete(job_id):
        raise HTTPException(status_code=404, detail="Job not found")
    return MessageResponse(message="Job deleted successfully")
