"""API request/response schemas."""

from typing import Any

from pydantic import BaseModel, Field

from anlik_eleman.auth.state import AuthPhase, AuthState
from anlik_eleman.db.rows import ApplicationStatus, JobPostingCreate, JobStatus, UserType
from anlik_eleman.db.rows import Profile
from anlik_eleman.remote.models import AuthIdentity


# Auth schemas
class AuthStateResponse(BaseModel):
    phase: AuthPhase
    loading: bool
    error: str | None
    is_authenticated: bool
    user: AuthIdentity | None
    profile: Profile | None

    @classmethod
    def from_state(cls, state: AuthState) -> "AuthStateResponse":
        return cls(
            phase=state.phase,
            loading=state.loading,
            error=state.error,
            is_authenticated=state.is_authenticated,
            user=state.user,
            profile=state.profile,
        )


class SignUpRequest(BaseModel):
    email: str
    password: str
    first_name: str = ""
    last_name: str = ""
    user_type: UserType = "job_seeker"
    phone: str | None = None
    city: str | None = None
    company_name: str | None = Field(default=None, description="Employers only")
    company_title: str | None = None
    company_description: str | None = None
    company_website: str | None = None
    employee_count: str | None = None

    def attributes(self) -> dict[str, Any]:
        return self.model_dump(exclude={"email", "password"}, exclude_none=True)


class SignUpResponse(BaseModel):
    user_id: str
    email_confirmed: bool
    state: AuthStateResponse


class SignInRequest(BaseModel):
    email: str
    password: str


class ProfileUpdate(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    city: str | None = None
    avatar_url: str | None = None
    bio: str | None = None
    experience_years: int | None = Field(default=None, ge=0)
    hourly_rate: float | None = Field(default=None, ge=0)


class EmailRequest(BaseModel):
    email: str


class PasswordResetRequest(BaseModel):
    email: str
    redirect_to: str | None = None


class EmailVerificationRequest(BaseModel):
    token_hash: str = Field(min_length=1)


# Job schemas
class JobPostingRequest(JobPostingCreate):
    """Posting body; the employer is the signed-in user."""

    employer_id: str | None = None


class JobStatusUpdate(BaseModel):
    status: JobStatus


# Application schemas
class ApplicationCreate(BaseModel):
    job_id: str
    cover_letter: str | None = None


class ApplicationUpdate(BaseModel):
    status: ApplicationStatus | None = None
    employer_notes: str | None = None


# Company schemas
class CompanyUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    website: str | None = None
    logo_url: str | None = None
    address: str | None = None
    city: str | None = None
    phone: str | None = None
    email: str | None = None
    tax_number: str | None = None
    employee_count: str | None = None


# Notification schemas
class NotificationReadRequest(BaseModel):
    notification_ids: list[str] | None = Field(default=None, description="None marks all as read")


# Messaging schemas
class ConversationCreate(BaseModel):
    participant_id: str
    job_id: str | None = None


class MessageCreate(BaseModel):
    content: str = Field(min_length=1)
    message_type: str = "text"
    file_url: str | None = None
    file_name: str | None = None
    file_size: int | None = None


# Review schemas
class ReviewCreate(BaseModel):
    reviewee_id: str
    rating: int = Field(ge=1, le=5)
    comment: str | None = None
    job_id: str | None = None
    is_public: bool = True


# Admin schemas
class ApprovalUpdate(BaseModel):
    approved: bool


# Generic
class CountResponse(BaseModel):
    count: int


class MessageResponse(BaseModel):
    message: str
