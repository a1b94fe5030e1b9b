"""Job posting endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from anlik_eleman.api.deps import FORBIDDEN, get_client, require_role, unwrap
from anlik_eleman.api.schemas import JobPostingRequest, JobStatusUpdate, MessageResponse
from anlik_eleman.db import jobs
from anlik_eleman.db.rows import JobCategory, JobFilters, JobPosting, Profile
from anlik_eleman.remote import PlatformClient

router = APIRouter()


@router.get("/categories", response_model=list[JobCategory])
async def list_categories(client: PlatformClient = Depends(get_client)):
    return unwrap(await jobs.list_job_categories(client))


@router.get("", response_model=list[JobPosting])
async def list_postings(
    filters: JobFilters = Depends(),
    client: PlatformClient = Depends(get_client),
):
    """Active postings matching the filters, newest first."""
    return unwrap(await jobs.list_job_postings(client, filters))


@router.get("/recent", response_model=list[JobPosting])
async def list_recent(limit: int = 6, client: PlatformClient = Depends(get_client)):
    return unwrap(await jobs.list_recent_job_postings(client, limit))


@router.get("/{job_id}", response_model=JobPosting)
async def get_posting(job_id: str, client: PlatformClient = Depends(get_client)):
    return unwrap(await jobs.get_job_posting(client, job_id))


@router.post("", response_model=JobPosting)
async def create_posting(
    data: JobPostingRequest,
    profile: Profile = Depends(require_role("employer")),
    client: PlatformClient = Depends(get_client),
):
    """Publish a posting for review (or save it as a draft)."""
    posting = data.model_copy(update={"employer_id": profile.id})
    return unwrap(await jobs.create_job_posting(client, posting))


@router.delete("/{job_id}", response_model=MessageResponse)
async def delete_posting(
    job_id: str,
    profile: Profile = Depends(require_role("employer", "admin")),
    client: PlatformClient = Depends(get_client),
):
    """Delete a posting. Employers may only delete their own."""
    posting = unwrap(await jobs.get_job_posting(client, job_id))
    if profile.user_type != "admin" and posting.employer_id != profile.id:
        raise HTTPException(status_code=403, detail=FORBIDDEN)

    unwrap(await jobs.delete_job_posting(client, job_id))
    return MessageResponse(message="İş ilanı silindi")


@router.patch(
    "/{job_id}/status", response_model=JobPosting, dependencies=[Depends(require_role("admin"))]
)
async def set_status(job_id: str, data: JobStatusUpdate, client: PlatformClient = Depends(get_client)):
    """Admin moderation: approve, pause or expire a posting."""
    return unwrap(await jobs.set_job_posting_status(client, job_id, data.status))
