"""Review endpoints: public reviews of a user and writing a review."""

from fastapi import APIRouter, Depends, HTTPException

from anlik_eleman.api.deps import current_profile, get_client, unwrap
from anlik_eleman.api.schemas import ReviewCreate
from anlik_eleman.db import reviews
from anlik_eleman.db.rows import Profile, Review
from anlik_eleman.remote import PlatformClient

router = APIRouter()


@router.get("/{user_id}", response_model=list[Review])
async def list_reviews(user_id: str, client: PlatformClient = Depends(get_client)):
    """Public reviews written about ``user_id``, newest first."""
    return unwrap(await reviews.list_reviews(client, user_id))


@router.post("", response_model=Review)
async def create_review(
    data: ReviewCreate,
    profile: Profile = Depends(current_profile),
    client: PlatformClient = Depends(get_client),
):
    if data.reviewee_id == profile.id:
        raise HTTPException(status_code=400, detail="Kendinizi değerlendiremezsiniz")
    return unwrap(
        await reviews.create_review(
            client,
            profile.id,
            data.reviewee_id,
            data.rating,
            comment=data.comment,
            job_id=data.job_id,
            is_public=data.is_public,
        )
    )
