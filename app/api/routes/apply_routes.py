"""
Apply Routes

POST /apply - Submit an application (multipart, resume PDF/DOC/DOCX up to 5MB)
POST /apply/submit - Alias used by the careers page
GET /apply/formats - Accepted resume formats
"""

import logging
import re
from datetime import datetime, timezone
from typing import Optional

from bson import ObjectId
from fastapi import APIRouter, BackgroundTasks, File, Form, HTTPException, Request, UploadFile
from pydantic import EmailStr, TypeAdapter, ValidationError
from starlette.concurrency import run_in_threadpool

from app.core.config import get_settings
from app.services.email_service import EmailService
from app.services.mongo_service import ApplicationService, JobService
from app.schemas.schemas import ApplicationSubmitResponse, JobStatus, ResumeInfo
from app.utils.file_upload import (
    read_resume, store_resume, remove_file, remove_file_later, get_supported_formats
)

settings = get_settings()

router = APIRouter(prefix="/apply", tags=["Applications"])

LOG = logging.getLogger(__name__)

_PHONE_RE = re.compile(r"[0-9]{10}")
_email_adapter = TypeAdapter(EmailStr)


def _is_email(value: str) -> bool:
    try:
        _email_adapter.validate_python(value)
        return True
    except ValidationError:
        return False


def validate_application_fields(
    full_name: str, email: str, phone: str, why: str, has_resume: bool
) -> dict:
    """Collect every field error at once (mirrors the careers page form)."""
    errors = {}
    if not full_name:
        errors["fullName"] = "Full name is required"
    if not email or not _is_email(email):
        errors["email"] = "Valid email is required"
    if not phone or not _PHONE_RE.fullmatch(phone):
        errors["phone"] = "Phone must be 10 digits"
    if not why:
        errors["why"] = "Comments are required"
    if not has_resume:
        errors["resume"] = "Resume file is required"
    return errors


def _resolve_job(job_id: str) -> Optional[dict]:
    """Look up the job being applied to; an empty id means a general application."""
    if not job_id:
        return None
    if not ObjectId.is_valid(job_id):
        raise HTTPException(status_code=400, detail=f'Invalid jobId: "{job_id}"')

    job = JobService().get_by_id(ObjectId(job_id))
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    if job.get("status", JobStatus.open.value) != JobStatus.open.value:
        raise HTTPException(status_code=400, detail="Job is not accepting applications")
    return job


@router.post("", response_model=ApplicationSubmitResponse)
@router.post("/submit", response_model=ApplicationSubmitResponse, include_in_schema=False)
async def submit_application(
    request: Request,
    background_tasks: BackgroundTasks,
    full_name: str = Form("", alias="fullName"),
    email: str = Form(""),
    phone: str = Form(""),
    why: str = Form(""),
    comments: str = Form(""),
    job_id: str = Form("", alias="jobId"),
    job_title: str = Form("", alias="jobTitle"),
    resume: Optional[UploadFile] = File(None)
):
    """
    Submit a job application.

    Steps: validate fields -> validate file -> check job -> store resume ->
    email HR + applicant -> persist application -> bump job counter.
    """
    full_name, email, phone = full_name.strip(), email.strip(), phone.strip()
    why = why.strip() or comments.strip()
    job_id, job_title = job_id.strip(), job_title.strip()
    has_resume = resume is not None and bool(resume.filename)

    errors = validate_application_fields(full_name, email, phone, why, has_resume)
    if errors:
        raise HTTPException(status_code=400, detail={"message": "Validation Error", "errors": errors})

    content = await read_resume(resume, settings.max_resume_size_bytes)

    job = _resolve_job(job_id)
    if job and not job_title:
        job_title = job.get("title", "")

    stored = store_resume(content, resume.filename, settings.upload_dir)
    submitted_at = datetime.now(timezone.utc)
    LOG.info(f"Application from {email} for job {job_id or 'N/A'} stored as {stored.stored_as}")

    email_sent = False
    if settings.mail_configured:
        try:
            await run_in_threadpool(
                EmailService(settings).send_application_emails,
                full_name=full_name,
                email=email,
                phone=phone,
                comments=why,
                job_id=job_id or None,
                job_title=job_title or None,
                resume_path=stored.path,
                resume_filename=stored.filename,
                submitted_at=submitted_at,
            )
            email_sent = True
        except Exception as e:
            # SMTP/socket errors, and anything raised while building the messages
            LOG.exception(f"Failed to send application email: {e}")
            remove_file(stored.path)
            raise HTTPException(status_code=500, detail="Failed to send email. Please try again later.")
    else:
        LOG.warning("Mail not configured (MAIL_USER / MAIL_PASSWORD); skipping application emails")

    doc = ApplicationService().insert(
        full_name=full_name,
        email=email,
        phone=phone,
        comments=why,
        resume_path=stored.relative_path,
        resume_filename=stored.filename,
        resume_size=stored.size,
        job_id=job["_id"] if job else None,
        job_title=job_title,
        email_sent=email_sent,
    )
    if job:
        JobService().increment_applications(job["_id"])

    if email_sent and settings.delete_resume_after_email:
        background_tasks.add_task(remove_file_later, stored.path, settings.resume_cleanup_delay_seconds)

    base_url = str(request.base_url).rstrip("/")
    message = (
        "Application submitted successfully! Check your email for confirmation."
        if email_sent else "Application received"
    )
    return ApplicationSubmitResponse(
        message=message,
        id=str(doc["_id"]),
        job_id=job_id or None,
        job_title=job_title or None,
        full_name=full_name,
        email=email,
        phone=phone,
        why=why,
        email_sent=email_sent,
        resume=ResumeInfo(
            filename=stored.filename,
            stored_as=stored.stored_as,
            size=stored.size,
            url=f"{base_url}{stored.relative_path}",
            path=stored.relative_path,
        ),
        received_at=submitted_at,
    )


@router.get("/formats")
async def resume_formats():
    """Get supported resume formats."""
    return get_supported_formats(settings.max_resume_size_mb)
