"""
Schemas module - Request/Response schemas for API endpoints.
"""

from app.schemas.schemas import (
    Department, JobType, JobStatus,
    JobCreate, JobUpdate, JobStatusUpdate, JobResponse, JobListResponse,
    ApplicationResponse, ApplicationListResponse, ApplicationSubmitResponse,
    MessageResponse, ErrorResponse
)

__all__ = [
    "Department", "JobType", "JobStatus",
    "JobCreate", "JobUpdate", "JobStatusUpdate", "JobResponse", "JobListResponse",
    "ApplicationResponse", "ApplicationListResponse", "ApplicationSubmitResponse",
    "MessageResponse", "ErrorResponse"
]
