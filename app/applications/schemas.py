"""
Pydantic schemas for credit applications and the admin review actions.
"""
from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from app.applications.models import ApplicationStatus
from app.catalog.schemas import LabelResponse
from app.core.utils import normalize_phone
from app.simulation.schemas import SimulationResponse


class ApplicationCreateRequest(BaseModel):
    """Applicant details submitted on top of a persisted simulation."""
    simulation_id: int
    full_name: str = Field(..., min_length=2, max_length=150)
    email: EmailStr
    phone: str = Field(..., min_length=6, max_length=30)
    monthly_income: float = Field(..., gt=0, description="Net monthly income")
    employment_type_id: int
    job_id: int
    comment: Optional[str] = Field(None, max_length=2000)

    @field_validator('full_name')
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('Full name is required')
        return v

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, v: str) -> str:
        phone = normalize_phone(v)
        if len(phone.lstrip("+")) < 6:
            raise ValueError('Invalid phone number')
        return phone


class StatusUpdateRequest(BaseModel):
    status: ApplicationStatus


class NoteCreateRequest(BaseModel):
    content: str = Field(..., max_length=2000)

    @field_validator('content')
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('Note content cannot be empty')
        return v


class Note(BaseModel):
    id: str
    content: str
    author: str
    created_at: datetime


class StatusChange(BaseModel):
    status: ApplicationStatus
    changed_at: datetime
    author: Optional[str] = None


class ApplicationFilters(BaseModel):
    status: Optional[Literal["all", "pending", "reviewing", "accepted", "rejected"]] = "all"
    search: Optional[str] = None
    order: Literal["asc", "desc"] = "desc"


class ApplicationResponse(BaseModel):
    id: str
    simulation_id: int
    credit_type_id: int
    employment_type_id: int
    job_id: int
    full_name: str
    email: str
    phone: str
    monthly_income: float
    comment: Optional[str]
    status: ApplicationStatus
    priority: bool
    notes: List[Note]
    status_history: List[StatusChange]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ApplicationDetail(ApplicationResponse):
    """Application hydrated with its simulation and catalog labels."""
    simulation: SimulationResponse
    credit_type: LabelResponse
    employment_type: LabelResponse
    job: LabelResponse
