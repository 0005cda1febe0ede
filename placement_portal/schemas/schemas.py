"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Field names are snake_case in Python and camelCase on the wire.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel
from typing import Optional, List
from datetime import datetime

from placement_portal.models import ApplicationStatus, JobOfferStatus, Role


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# ============================================================
# AUTH SCHEMAS
# ============================================================

class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=2, max_length=150)
    email: EmailStr
    password: str = Field(..., min_length=8)
    role: Role = Role.STUDENT
    organization_name: Optional[str] = Field(None, min_length=2, max_length=200)

class LoginRequest(CamelModel):
    email: EmailStr
    password: str

class PasswordChangeRequest(CamelModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8)

class UserResponse(CamelModel):
    id: int
    name: str
    email: str
    role: Role
    organization_id: Optional[int] = None
    created_at: datetime

class TokenResponse(CamelModel):
    message: str
    access_token: str
    token_type: str = "bearer"
    user: UserResponse

class UserEnvelope(CamelModel):
    message: str
    user: UserResponse


# ============================================================
# ORGANIZATION SCHEMAS
# ============================================================

class OrganizationUpdate(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    industry: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    website: Optional[str] = None
    logo: Optional[str] = None

class OrganizationSummary(CamelModel):
    id: int
    name: str
    logo: Optional[str] = None

class OrganizationResponse(CamelModel):
    id: int
    name: str
    logo: Optional[str] = None
    industry: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    website: Optional[str] = None
    created_at: datetime

class OrganizationEnvelope(CamelModel):
    message: str
    organization: OrganizationResponse


# ============================================================
# JOB OFFER SCHEMAS
# ============================================================

class JobOfferWrite(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1, max_length=200)
    type: Optional[str] = None
    salary: Optional[str] = None
    experience: Optional[str] = None
    skills: List[str] = []
    status: Optional[JobOfferStatus] = None

class JobOfferResponse(CamelModel):
    id: int
    organization_id: int
    organization: Optional[OrganizationSummary] = None
    title: str
    description: str
    location: str
    type: Optional[str] = None
    salary: Optional[str] = None
    experience: Optional[str] = None
    skills: List[str] = []
    status: str
    created_at: datetime
    updated_at: Optional[datetime] = None

class JobOfferEnvelope(CamelModel):
    message: str
    job_offer: JobOfferResponse

class JobOfferListResponse(CamelModel):
    message: str
    job_offers: List[JobOfferResponse]
    total: int


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ApplicationCreate(CamelModel):
    job_offer_id: int
    resume_url: Optional[str] = None
    cover_letter: Optional[str] = None

class ApplicationStatusUpdate(CamelModel):
    status: ApplicationStatus

class ApplicantSummary(CamelModel):
    id: int
    name: str
    email: str

class JobOfferSummary(CamelModel):
    id: int
    title: str
    organization_id: int
    organization: Optional[OrganizationSummary] = None

class ApplicationResponse(CamelModel):
    id: int
    user_id: int
    job_offer_id: int
    status: ApplicationStatus
    resume_url: Optional[str] = None
    cover_letter: Optional[str] = None
    applied_date: datetime
    updated_at: Optional[datetime] = None
    user: Optional[ApplicantSummary] = None
    job_offer: Optional[JobOfferSummary] = None

class ApplicationEnvelope(CamelModel):
    message: str
    application: ApplicationResponse

class ApplicationListResponse(CamelModel):
    message: str
    applications: List[ApplicationResponse]
    total: int


# ============================================================
# PROFILE SCHEMAS
# ============================================================

class ProfileUpdate(CamelModel):
    bio: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    passing_year: Optional[int] = Field(None, ge=1950, le=2100)
    resume_url: Optional[str] = None
    skills: Optional[List[str]] = None

class EducationWrite(CamelModel):
    degree: str = Field(..., min_length=1)
    institution: str = Field(..., min_length=1)
    year: str = Field(..., min_length=1)

class EducationResponse(CamelModel):
    id: int
    degree: str
    institution: str
    year: str

class ExperienceWrite(CamelModel):
    position: str = Field(..., min_length=1)
    company: str = Field(..., min_length=1)
    duration: Optional[str] = None
    description: Optional[str] = None

class ExperienceResponse(CamelModel):
    id: int
    position: str
    company: str
    duration: Optional[str] = None
    description: Optional[str] = None

class ProfileResponse(CamelModel):
    id: int
    user_id: int
    resume_url: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    passing_year: Optional[int] = None
    bio: Optional[str] = None
    skills: List[str] = []
    education: List[EducationResponse] = []
    experience: List[ExperienceResponse] = []

class ProfileEnvelope(CamelModel):
    message: str
    profile: ProfileResponse

class EducationEnvelope(CamelModel):
    message: str
    education: EducationResponse

class ExperienceEnvelope(CamelModel):
    message: str
    experience: ExperienceResponse


# ============================================================
# NOTIFICATION & EVENT SCHEMAS
# ============================================================

class NotificationCreate(CamelModel):
    user_id: int
    message: str = Field(..., min_length=1)

class NotificationResponse(CamelModel):
    id: int
    user_id: int
    message: str
    read: bool = False
    created_at: datetime

class NotificationEnvelope(CamelModel):
    message: str
    notification: NotificationResponse

class NotificationListResponse(CamelModel):
    message: str
    notifications: List[NotificationResponse]

class EventCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    date: datetime
    description: Optional[str] = None
    time: Optional[str] = None
    location: Optional[str] = None

class EventResponse(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    date: datetime
    time: Optional[str] = None
    location: Optional[str] = None

class EventEnvelope(CamelModel):
    message: str
    event: EventResponse

class EventListResponse(CamelModel):
    message: str
    events: List[EventResponse]


# ============================================================
# DASHBOARD SCHEMAS
# ============================================================

class RecentApplication(CamelModel):
    id: int
    job_title: str
    company: Optional[str] = None
    student_name: Optional[str] = None
    date: str
    status: str

class UpcomingEvent(CamelModel):
    id: int
    title: str
    date: str
    time: str

class DashboardNotification(CamelModel):
    id: int
    message: str
    time: str

class DashboardResponse(CamelModel):
    message: str
    total_applications: int
    pending_applications: int
    selected_applications: int
    rejected_applications: int
    recent_applications: List[RecentApplication] = []
    upcoming_events: List[UpcomingEvent] = []
    notifications: Optional[List[DashboardNotification]] = None
    total_jobs: Optional[int] = None
    active_jobs: Optional[int] = None
    total_students: Optional[int] = None


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(CamelModel):
    message: str
    success: bool = True

class ErrorResponse(CamelModel):
    message: str
