"""Row models for the platform's tables."""

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator

UserType = Literal["job_seeker", "employer", "admin"]
JobType = Literal["full_time", "part_time", "contract", "temporary"]
JobStatus = Literal["draft", "pending", "active", "paused", "expired", "filled"]
ApplicationStatus = Literal["pending", "reviewed", "shortlisted", "accepted", "rejected"]
NotificationType = Literal["application", "job_match", "message", "system"]

USER_TYPES: tuple[str, ...] = ("job_seeker", "employer", "admin")


def utc_now_iso() -> str:
    return datetime.now(UTC).isoformat()


class Row(BaseModel):
    """Base for rows read from the platform; unknown columns are ignored."""

    class Config:
        extra = "ignore"
        from_attributes = True


# Profiles
class Profile(Row):
    id: str
    user_type: UserType = "job_seeker"
    first_name: str = ""
    last_name: str = ""
    phone: str | None = None
    city: str | None = None
    avatar_url: str | None = None
    bio: str | None = None
    experience_years: int | None = None
    hourly_rate: float | None = None
    is_active: bool | None = True
    is_verified: bool | None = False
    is_premium: bool | None = False
    is_approved: bool | None = False
    premium_expires_at: datetime | None = None
    last_seen_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class ProfileInsert(BaseModel):
    """Row written when a profile is provisioned for a new identity."""

    id: str
    user_type: UserType = "job_seeker"
    first_name: str = ""
    last_name: str = ""
    phone: str | None = None
    city: str | None = None
    is_active: bool = True
    is_verified: bool = False
    is_premium: bool = False
    is_approved: bool = False


# Companies
class Company(Row):
    id: str
    owner_id: str | None = None
    name: str
    description: str | None = None
    website: str | None = None
    logo_url: str | None = None
    address: str | None = None
    city: str = ""
    phone: str | None = None
    email: str | None = None
    tax_number: str | None = None
    employee_count: str | None = None
    is_verified: bool | None = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CompanyInsert(BaseModel):
    owner_id: str
    name: str
    city: str = ""
    description: str | None = None
    website: str | None = None
    phone: str | None = None
    email: str | None = None
    employee_count: str | None = None
    is_verified: bool = False


# Jobs
class JobCategory(Row):
    id: str
    name: str
    description: str | None = None
    icon: str | None = None
    is_active: bool | None = True
    sort_order: int | None = None


class JobPosting(Row):
    id: str
    employer_id: str | None = None
    company_id: str | None = None
    category_id: str | None = None
    title: str
    description: str = ""
    requirements: list[str] | None = None
    benefits: list[str] | None = None
    job_type: JobType = "full_time"
    salary_min: float | None = None
    salary_max: float | None = None
    salary_currency: str | None = "TRY"
    city: str = ""
    address: str | None = None
    is_remote: bool | None = False
    is_urgent: bool | None = False
    is_premium: bool | None = False
    status: JobStatus = "draft"
    expires_at: datetime | None = None
    view_count: int | None = 0
    application_count: int | None = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    # Embedded relations selected alongside the posting
    employer: dict[str, Any] | None = None
    company: dict[str, Any] | None = None
    category: dict[str, Any] | None = None


class JobPostingCreate(BaseModel):
    """Validated input for a new posting."""

    employer_id: str
    company_id: str | None = None
    category_id: str
    title: str
    description: str
    requirements: list[str] = Field(default_factory=list)
    benefits: list[str] = Field(default_factory=list)
    job_type: JobType = "full_time"
    salary_min: float | None = None
    salary_max: float | None = None
    salary_currency: str = "TRY"
    city: str
    address: str | None = None
    is_remote: bool = False
    is_urgent: bool = False
    is_premium: bool = False
    status: Literal["draft", "pending"] = "pending"
    expires_at: datetime | None = None

    @field_validator("title", "description", "city", "category_id")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be blank")
        return v.strip()

    @field_validator("requirements", "benefits")
    @classmethod
    def drop_blank_items(cls, v: list[str]) -> list[str]:
        return [item.strip() for item in v if item and item.strip()]

    @field_validator("expires_at")
    @classmethod
    def expires_in_future(cls, v: datetime | None) -> datetime | None:
        if v is None:
            return v
        now = datetime.now(UTC) if v.tzinfo else datetime.now()
        if v <= now:
            raise ValueError("expiry must be in the future")
        return v

    @model_validator(mode="after")
    def salary_range(self) -> "JobPostingCreate":
        if (
            self.salary_min is not None
            and self.salary_max is not None
            and self.salary_min > self.salary_max
        ):
            raise ValueError("salary_min must not exceed salary_max")
        return self


class JobFilters(BaseModel):
    category_id: str | None = None
    city: str | None = None
    job_type: JobType | None = None
    is_remote: bool | None = None
    salary_min: float | None = None
    salary_max: float | None = None
    offset: int = 0
    limit: int = 20


# Applications
class Application(Row):
    id: str
    job_id: str | None = None
    applicant_id: str | None = None
    cover_letter: str | None = None
    resume_url: str | None = None
    status: ApplicationStatus = "pending"
    employer_notes: str | None = None
    applied_at: datetime | None = None
    reviewed_at: datetime | None = None

    job: dict[str, Any] | None = None
    applicant: dict[str, Any] | None = None


class ApplicationFilters(BaseModel):
    job_id: str | None = None
    applicant_id: str | None = None
    status: ApplicationStatus | None = None
    offset: int = 0
    limit: int = 20


# Saved jobs
class SavedJob(Row):
    id: str
    user_id: str | None = None
    job_id: str | None = None
    created_at: datetime | None = None
    job: dict[str, Any] | None = None


# Reviews
class Review(Row):
    id: str
    reviewer_id: str | None = None
    reviewee_id: str | None = None
    job_id: str | None = None
    rating: int | None = None
    comment: str | None = None
    is_public: bool | None = True
    created_at: datetime | None = None
    reviewer: dict[str, Any] | None = None


# Notifications
class Notification(Row):
    id: str
    user_id: str | None = None
    type: NotificationType = "system"
    title: str
    message: str
    data: Any = None
    is_read: bool | None = False
    created_at: datetime | None = None


class NotificationPreferences(BaseModel):
    """Per-user switches; column set is owned by the platform."""

    user_id: str

    class Config:
        extra = "allow"


# Messaging
class Conversation(Row):
    id: str
    participant1_id: str | None = None
    participant2_id: str | None = None
    job_id: str | None = None
    conversation_updated_at: datetime | None = None
    created_at: datetime | None = None


class Message(Row):
    id: str
    conversation_id: str
    sender_id: str | None = None
    content: str = ""
    message_type: str = "text"
    file_url: str | None = None
    file_name: str | None = None
    file_size: int | None = None
    is_read: bool | None = False
    created_at: datetime | None = None
    sender: dict[str, Any] | None = None


# Dashboards
class DashboardStats(BaseModel):
    total_users: int = 0
    total_employers: int = 0
    active_jobs: int = 0
    total_companies: int = 0


class EmployerDashboard(BaseModel):
    job_postings: list[JobPosting] = Field(default_factory=list)
    total_applications: int = 0
    active_jobs: int = 0
    total_jobs: int = 0


class AdminDashboard(BaseModel):
    pending_jobs: list[JobPosting] = Field(default_factory=list)
    recent_users: list[Profile] = Field(default_factory=list)
    pending_reports: list[dict[str, Any]] = Field(default_factory=list)
