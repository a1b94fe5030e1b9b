"""Dashboard endpoints: public stats, employer and admin panels."""

from fastapi import APIRouter, Depends

from anlik_eleman.api.deps import get_client, require_role, unwrap
from anlik_eleman.api.schemas import ApprovalUpdate
from anlik_eleman.db import dashboard, profiles, reviews
from anlik_eleman.db.rows import AdminDashboard, DashboardStats, EmployerDashboard, Profile, Review
from anlik_eleman.remote import PlatformClient

router = APIRouter()


@router.get("/stats", response_model=DashboardStats)
async def get_stats(client: PlatformClient = Depends(get_client)):
    """Landing page counters."""
    return unwrap(await dashboard.get_dashboard_stats(client))


@router.get("/testimonials", response_model=list[Review])
async def get_testimonials(limit: int = 3, client: PlatformClient = Depends(get_client)):
    return unwrap(await reviews.list_testimonials(client, limit))


@router.get("/employer", response_model=EmployerDashboard)
async def get_employer_dashboard(
    profile: Profile = Depends(require_role("employer")),
    client: PlatformClient = Depends(get_client),
):
    return unwrap(await dashboard.get_employer_dashboard(client, profile.id))


@router.get("/admin", response_model=AdminDashboard, dependencies=[Depends(require_role("admin"))])
async def get_admin_dashboard(client: PlatformClient = Depends(get_client)):
    return unwrap(await dashboard.get_admin_dashboard(client))


@router.get("/users", response_model=list[Profile], dependencies=[Depends(require_role("admin"))])
async def list_recent_users(limit: int = 10, client: PlatformClient = Depends(get_client)):
    """Most recently registered users."""
    return unwrap(await profiles.list_recent_profiles(client, limit))


@router.patch(
    "/profiles/{user_id}/approval",
    response_model=Profile,
    dependencies=[Depends(require_role("admin"))],
)
async def set_approval(
    user_id: str, data: ApprovalUpdate, client: PlatformClient = Depends(get_client)
):
    return unwrap(await profiles.set_profile_approval(client, user_id, data.approved))
