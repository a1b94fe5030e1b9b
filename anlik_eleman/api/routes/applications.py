"""Job application endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from anlik_eleman.api.deps import FORBIDDEN, current_profile, get_client, require_role, unwrap
from anlik_eleman.api.schemas import ApplicationCreate, ApplicationUpdate
from anlik_eleman.db import applications, jobs, notifications
from anlik_eleman.db.rows import Application, ApplicationFilters, Profile
from anlik_eleman.remote import PlatformClient

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[Application])
async def list_applications(
    filters: ApplicationFilters = Depends(),
    profile: Profile = Depends(current_profile),
    client: PlatformClient = Depends(get_client),
):
    """Job seekers see their own applications; employers filter by job."""
    if profile.user_type == "job_seeker":
        filters = filters.model_copy(update={"applicant_id": profile.id})
    elif profile.user_type == "employer":
        if not filters.job_id:
            raise HTTPException(status_code=400, detail="job_id gereklidir")
        posting = unwrap(await jobs.get_job_posting(client, filters.job_id))
        if posting.employer_id != profile.id:
            raise HTTPException(status_code=403, detail=FORBIDDEN)
    return unwrap(await applications.list_applications(client, filters))


@router.post("", response_model=Application)
async def apply(
    data: ApplicationCreate,
    profile: Profile = Depends(require_role("job_seeker")),
    client: PlatformClient = Depends(get_client),
):
    """Apply to a posting and notify its employer."""
    application = unwrap(
        await applications.create_application(client, data.job_id, profile.id, data.cover_letter)
    )

    posting = await jobs.get_job_posting(client, data.job_id)
    if posting.ok and posting.data.employer_id:
        sent = await notifications.create_notification(
            client,
            posting.data.employer_id,
            "application",
            "Yeni başvuru",
            f"{profile.full_name}, '{posting.data.title}' ilanınıza başvurdu",
            {"job_id": data.job_id, "application_id": application.id},
        )
        if sent.error:
            logger.warning(
                f"Application {application.id} saved, employer not notified: {sent.error.message}"
            )
    return application


@router.patch(
    "/{application_id}",
    response_model=Application,
    dependencies=[Depends(require_role("employer", "admin"))],
)
async def update_application(
    application_id: str,
    data: ApplicationUpdate,
    client: PlatformClient = Depends(get_client),
):
    """Change status or notes; a status change stamps ``reviewed_at``."""
    updates = data.model_dump(exclude_unset=True)
    return unwrap(await applications.update_application(client, application_id, updates))
