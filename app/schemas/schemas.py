"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
JSON keys are camelCase (what the React dashboard sends); Python
attributes stay snake_case.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List, Any
from datetime import datetime
from enum import Enum

from app.core.config import get_settings
from app.utils.text_utils import strip_tags, to_list, merge_tags


# ============================================================
# ENUMS
# ============================================================

class Department(str, Enum):
    engineering = "Engineering"
    product = "Product"
    research = "Research"
    training = "Training"
    marketing = "Marketing"
    quality_assurance = "Quality Assurance"
    machine_learning = "Machine Learning"
    artificial_intelligence = "Artificial Intelligence"
    education = "Education"


class JobType(str, Enum):
    full_time = "Full-time"
    part_time = "Part-time"
    internship = "Internship"


class JobStatus(str, Enum):
    open = "Open"
    closed = "Closed"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Fields that are lists of bullets on the job form
_LIST_FIELDS = ("required_skills", "benefits", "tags")

# Free text fields (HTML is stripped before length checks)
_TEXT_FIELDS = (
    "title", "department", "job_type", "location", "status", "duration",
    "company_name", "salary_range", "training_period", "overview",
    "description", "job_role", "how_to_apply", "experience",
)


def _clean_text(value: Any) -> Any:
    if value is None:
        return None
    return strip_tags(value)


def _clean_list(value: Any) -> Any:
    if value is None:
        return None
    return to_list(value)


# ============================================================
# JOB SCHEMAS
# ============================================================

class JobCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=160)
    department: Department
    job_type: JobType = Field(..., alias="type")
    location: str = Field(..., min_length=1, max_length=160)
    status: JobStatus = JobStatus.open
    duration: Optional[str] = Field(None, max_length=40)
    company_name: Optional[str] = Field(None, max_length=160)
    salary_range: Optional[str] = Field(None, max_length=120)
    training_period: Optional[str] = Field(None, max_length=120)
    overview: Optional[str] = Field(None, max_length=400)
    description: Optional[str] = Field(None, max_length=5000)
    job_role: Optional[str] = Field(None, max_length=1500)
    required_skills: List[str] = []
    benefits: List[str] = []
    how_to_apply: Optional[str] = Field(None, max_length=1500)
    tags: List[str] = []
    experience: Optional[str] = Field(None, max_length=80)
    applications: int = Field(0, ge=0)

    @field_validator(*_TEXT_FIELDS, mode="before")
    @classmethod
    def strip_text(cls, value):
        return _clean_text(value)

    @field_validator(*_LIST_FIELDS, mode="before")
    @classmethod
    def normalize_lists(cls, value):
        return to_list(value)

    @field_validator("status", mode="before")
    @classmethod
    def blank_status_is_open(cls, value):
        return _clean_text(value) or JobStatus.open.value

    @model_validator(mode="after")
    def merge_tag_cloud(self):
        self.tags = merge_tags(self.tags, self.required_skills)
        if not self.company_name:
            self.company_name = get_settings().company_name
        return self

    def to_document(self) -> dict:
        """Mongo document (camelCase keys, skills mirrors tags)."""
        doc = self.model_dump(by_alias=True, mode="json", exclude_none=True)
        doc["skills"] = list(doc["tags"])
        return doc


class JobUpdate(CamelModel):
    """Partial update: only the fields present in the request change."""
    title: Optional[str] = Field(None, min_length=1, max_length=160)
    department: Optional[Department] = None
    job_type: Optional[JobType] = Field(None, alias="type")
    location: Optional[str] = Field(None, min_length=1, max_length=160)
    status: Optional[JobStatus] = None
    duration: Optional[str] = Field(None, max_length=40)
    company_name: Optional[str] = Field(None, max_length=160)
    salary_range: Optional[str] = Field(None, max_length=120)
    training_period: Optional[str] = Field(None, max_length=120)
    overview: Optional[str] = Field(None, max_length=400)
    description: Optional[str] = Field(None, max_length=5000)
    job_role: Optional[str] = Field(None, max_length=1500)
    required_skills: Optional[List[str]] = None
    benefits: Optional[List[str]] = None
    how_to_apply: Optional[str] = Field(None, max_length=1500)
    tags: Optional[List[str]] = None
    experience: Optional[str] = Field(None, max_length=80)
    applications: Optional[int] = Field(None, ge=0)

    @field_validator(*_TEXT_FIELDS, mode="before")
    @classmethod
    def strip_text(cls, value):
        return _clean_text(value)

    @field_validator(*_LIST_FIELDS, mode="before")
    @classmethod
    def normalize_lists(cls, value):
        return _clean_list(value)

    @field_validator("status", mode="before")
    @classmethod
    def blank_is_missing(cls, value):
        return _clean_text(value) or None

    def to_set(self) -> dict:
        """
        Build the $set payload.

        Explicit nulls are ignored. When tags or requiredSkills are sent the
        tag cloud is recomputed from the sent values and mirrored to skills.
        """
        changes = {
            key: value
            for key, value in self.model_dump(by_alias=True, mode="json", exclude_unset=True).items()
            if value is not None
        }
        if "tags" in changes or "requiredSkills" in changes:
            tags = merge_tags(changes.get("tags", []), changes.get("requiredSkills", []))
            changes["tags"] = tags
            changes["skills"] = list(tags)
        return changes


class JobStatusUpdate(CamelModel):
    status: Optional[JobStatus] = None

    @field_validator("status", mode="before")
    @classmethod
    def blank_is_missing(cls, value):
        return _clean_text(value) or None


class JobResponse(CamelModel):
    """Stored job as returned by the API. Legacy documents may lack core fields."""
    id: str
    title: Optional[str] = None
    department: Optional[str] = None
    job_type: Optional[str] = Field(None, alias="type")
    location: Optional[str] = None
    status: str = JobStatus.open.value
    duration: Optional[str] = None
    company_name: Optional[str] = None
    salary_range: Optional[str] = None
    training_period: Optional[str] = None
    overview: Optional[str] = None
    description: Optional[str] = None
    job_role: Optional[str] = None
    required_skills: List[str] = []
    benefits: List[str] = []
    how_to_apply: Optional[str] = None
    tags: List[str] = []
    skills: List[str] = []
    experience: Optional[str] = None
    applications: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data):
        # stored nulls fall back to the field defaults
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class JobListResponse(CamelModel):
    data: List[JobResponse]
    total: int
    page: int
    limit: int
    pages: int


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ResumeInfo(CamelModel):
    filename: str
    stored_as: str
    size: int
    url: str
    path: str


class ApplicationSubmitResponse(CamelModel):
    success: bool = True
    message: str
    id: str
    job_id: Optional[str] = None
    job_title: Optional[str] = None
    full_name: str
    email: str
    phone: str
    why: str
    email_sent: bool
    resume: ResumeInfo
    received_at: datetime


class ApplicationResponse(CamelModel):
    id: str
    job_id: Optional[str] = None
    job_title: Optional[str] = None
    full_name: str
    email: str
    phone: str
    comments: Optional[str] = None
    resume_path: Optional[str] = None
    resume_filename: Optional[str] = None
    resume_size: Optional[int] = None
    resume_url: Optional[str] = None
    email_sent: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ApplicationListResponse(CamelModel):
    data: List[ApplicationResponse]
    total: int


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    errors: Optional[dict] = None
