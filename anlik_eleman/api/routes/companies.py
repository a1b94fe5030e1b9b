"""Company endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from anlik_eleman.api.deps import FORBIDDEN, get_client, require_role, unwrap
from anlik_eleman.api.schemas import CompanyUpdate
from anlik_eleman.db import companies
from anlik_eleman.db.rows import Company, Profile
from anlik_eleman.remote import PlatformClient

router = APIRouter()


@router.get("", response_model=list[Company])
async def list_companies(owner_id: str | None = None, client: PlatformClient = Depends(get_client)):
    return unwrap(await companies.list_companies(client, owner_id))


@router.get("/mine", response_model=list[Company])
async def list_my_companies(
    profile: Profile = Depends(require_role("employer")),
    client: PlatformClient = Depends(get_client),
):
    return unwrap(await companies.list_user_companies(client, profile.id))


@router.patch("/{company_id}", response_model=Company)
async def update_company(
    company_id: str,
    data: CompanyUpdate,
    profile: Profile = Depends(require_role("employer", "admin")),
    client: PlatformClient = Depends(get_client),
):
    """Update a company. Employers may only edit companies they own."""
    if profile.user_type != "admin":
        owned = unwrap(await companies.list_user_companies(client, profile.id))
        if company_id not in {c.id for c in owned}:
            raise HTTPException(status_code=403, detail=FORBIDDEN)
    return unwrap(
        await companies.update_company(client, company_id, data.model_dump(exclude_unset=True))
    )
