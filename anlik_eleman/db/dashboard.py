"""Aggregated dashboard requests for the home page, employers and admins."""

from anlik_eleman.db.base import Result, service_call
from anlik_eleman.db.rows import AdminDashboard, DashboardStats, EmployerDashboard, JobPosting, Profile
from anlik_eleman.remote import PlatformClient, eq, in_


@service_call("İstatistikler alınamadı", default_factory=DashboardStats)
async def get_dashboard_stats(client: PlatformClient) -> Result[DashboardStats]:
    return Result.success(
        DashboardStats(
            total_users=await client.count("profiles"),
            total_employers=await client.count("profiles", {"user_type": eq("employer")}),
            active_jobs=await client.count("job_postings", {"status": eq("active")}),
            total_companies=await client.count("companies"),
        )
    )


@service_call("İşveren paneli verileri alınamadı", default_factory=EmployerDashboard)
async def get_employer_dashboard(client: PlatformClient, employer_id: str) -> Result[EmployerDashboard]:
    rows = await client.select(
        "job_postings", {"employer_id": eq(employer_id)}, order="created_at.desc"
    )
    postings = [JobPosting.model_validate(r) for r in rows]

    total_applications = 0
    if postings:
        total_applications = await client.count(
            "applications", {"job_id": in_([p.id for p in postings])}
        )

    return Result.success(
        EmployerDashboard(
            job_postings=postings,
            total_applications=total_applications,
            active_jobs=sum(1 for p in postings if p.status == "active"),
            total_jobs=len(postings),
        )
    )


@service_call("Admin paneli verileri alınamadı", default_factory=AdminDashboard)
async def get_admin_dashboard(client: PlatformClient) -> Result[AdminDashboard]:
    pending_jobs = await client.select(
        "job_postings",
        {"status": eq("pending")},
        columns="*,employer:profiles(first_name,last_name),company:companies(name)",
        order="created_at.desc",
    )
    recent_users = await client.select("profiles", order="created_at.desc", limit=10)
    pending_reports = await client.select(
        "reports",
        {"status": eq("pending")},
        columns=(
            "*,reporter:profiles!reporter_id(first_name,last_name),"
            "reported_user:profiles!reported_user_id(first_name,last_name)"
        ),
        order="created_at.desc",
    )
    return Result.success(
        AdminDashboard(
            pending_jobs=[JobPosting.model_validate(r) for r in pending_jobs],
            recent_users=[Profile.model_validate(r) for r in recent_users],
            pending_reports=pending_reports,
        )
    )
