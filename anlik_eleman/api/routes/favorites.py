"""Saved job endpoints."""

from fastapi import APIRouter, Depends

from anlik_eleman.api.deps import current_profile, get_client, unwrap
from anlik_eleman.api.schemas import MessageResponse
from anlik_eleman.db import favorites
from anlik_eleman.db.rows import Profile, SavedJob
from anlik_eleman.remote import PlatformClient

router = APIRouter()


@router.get("", response_model=list[SavedJob])
async def list_saved(
    profile: Profile = Depends(current_profile),
    client: PlatformClient = Depends(get_client),
):
    return unwrap(await favorites.list_saved_jobs(client, profile.id))


@router.get("/{job_id}/check")
async def check_saved(
    job_id: str,
    profile: Profile = Depends(current_profile),
    client: PlatformClient = Depends(get_client),
):
    """Check if a job is saved."""
    return {"saved": unwrap(await favorites.is_job_saved(client, profile.id, job_id))}


@router.post("/{job_id}", response_model=SavedJob)
async def save(
    job_id: str,
    profile: Profile = Depends(current_profile),
    client: PlatformClient = Depends(get_client),
):
    return unwrap(await favorites.save_job(client, profile.id, job_id))


@router.delete("/{job_id}", response_model=MessageResponse)
async def unsave(
    job_id: str,
    profile: Profile = Depends(current_profile),
    client: PlatformClient = Depends(get_client),
):
    unwrap(await favorites.unsave_job(client, profile.id, job_id))
    return MessageResponse(message="İlan kaydedilenlerden çıkarıldı")
