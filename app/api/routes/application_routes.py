"""
Application Routes (HR dashboard)

GET /applications - List applications (optional ?jobId=)
GET /applications/{application_id} - Get one application
"""

from bson import ObjectId
from fastapi import APIRouter, HTTPException, Depends, Query, Request
from typing import Optional

from app.api.deps import valid_object_id
from app.services.mongo_service import ApplicationService, serialize_doc
from app.schemas.schemas import ApplicationResponse, ApplicationListResponse

router = APIRouter(prefix="/applications", tags=["Applications"])


def _to_response(doc: dict, base_url: str) -> ApplicationResponse:
    data = serialize_doc(doc)
    if data.get("resumePath"):
        data["resumeUrl"] = f"{base_url}{data['resumePath']}"
    return ApplicationResponse.model_validate(data)


@router.get("", response_model=ApplicationListResponse)
async def list_applications(
    request: Request,
    job_id: Optional[str] = Query(None, alias="jobId")
):
    """List applications, newest first."""
    job_filter = None
    if job_id:
        if not ObjectId.is_valid(job_id):
            raise HTTPException(status_code=400, detail=f'Invalid jobId: "{job_id}"')
        job_filter = ObjectId(job_id)

    base_url = str(request.base_url).rstrip("/")
    docs = ApplicationService().list(job_id=job_filter)
    return ApplicationListResponse(
        data=[_to_response(d, base_url) for d in docs],
        total=len(docs)
    )


@router.get("/{id}", response_model=ApplicationResponse)
async def get_application(request: Request, application_id: ObjectId = Depends(valid_object_id)):
    """Get a single application."""
    doc = ApplicationService().get_by_id(application_id)
    if not doc:
        raise HTTPException(status_code=404, detail="Application not found")
    return _to_response(doc, str(request.base_url).rstrip("/"))
