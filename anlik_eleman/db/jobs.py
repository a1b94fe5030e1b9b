"""Job category and job posting requests."""

from anlik_eleman.db.base import Result, service_call
from anlik_eleman.db.rows import (
    JobCategory,
    JobFilters,
    JobPosting,
    JobPostingCreate,
    JobStatus,
    utc_now_iso,
)
from anlik_eleman.remote import PlatformClient, eq, gte, lte

TABLE = "job_postings"

LIST_COLUMNS = (
    "*,employer:profiles(first_name,last_name),"
    "company:companies(name,city),category:job_categories(name)"
)
DETAIL_COLUMNS = (
    "*,employer:profiles(first_name,last_name,phone),"
    "company:companies(name,city,address),category:job_categories(name)"
)
RECENT_COLUMNS = "*,company:companies(name,city),category:job_categories(name)"


@service_call("Kategoriler alınamadı", default_factory=list)
async def list_job_categories(client: PlatformClient) -> Result[list[JobCategory]]:
    rows = await client.select("job_categories", order="name.asc")
    return Result.success([JobCategory.model_validate(r) for r in rows])


def _posting_filters(filters: JobFilters) -> dict[str, str]:
    query = {"status": eq("active")}
    if filters.category_id:
        query["category_id"] = eq(filters.category_id)
    if filters.city:
        query["city"] = eq(filters.city)
    if filters.job_type:
        query["job_type"] = eq(filters.job_type)
    if filters.is_remote is not None:
        query["is_remote"] = eq(filters.is_remote)
    # Salary filters match postings whose range overlaps the requested one
    if filters.salary_min:
        query["salary_max"] = gte(filters.salary_min)
    if filters.salary_max:
        query["salary_min"] = lte(filters.salary_max)
    return query


@service_call("İş ilanları alınamadı", default_factory=list)
async def list_job_postings(
    client: PlatformClient, filters: JobFilters | None = None
) -> Result[list[JobPosting]]:
    """Active postings, newest first."""
    filters = filters or JobFilters()
    rows = await client.select(
        TABLE,
        _posting_filters(filters),
        columns=LIST_COLUMNS,
        order="created_at.desc",
        limit=filters.limit,
        offset=filters.offset,
    )
    return Result.success([JobPosting.model_validate(r) for r in rows])


@service_call("Son iş ilanları alınamadı", default_factory=list)
async def list_recent_job_postings(client: PlatformClient, limit: int = 6) -> Result[list[JobPosting]]:
    rows = await client.select(
        TABLE, {"status": eq("active")}, columns=RECENT_COLUMNS, order="created_at.desc", limit=limit
    )
    return Result.success([JobPosting.model_validate(r) for r in rows])


@service_call("İş ilanı bulunamadı")
async def get_job_posting(client: PlatformClient, job_id: str) -> Result[JobPosting]:
    row = await client.select_single(TABLE, {"id": eq(job_id)}, columns=DETAIL_COLUMNS)
    return Result.success(JobPosting.model_validate(row))


@service_call("İş ilanı oluşturulurken hata oluştu")
async def create_job_posting(client: PlatformClient, posting: JobPostingCreate) -> Result[JobPosting]:
    now = utc_now_iso()
    row = await client.insert(
        TABLE,
        {**posting.model_dump(mode="json"), "created_at": now, "updated_at": now},
    )
    return Result.success(JobPosting.model_validate(row))


@service_call("İş ilanı silinemedi")
async def delete_job_posting(client: PlatformClient, job_id: str) -> Result[None]:
    await client.delete(TABLE, {"id": eq(job_id)})
    return Result.success()


@service_call("İş ilanı durumu güncellenemedi")
async def set_job_posting_status(
    client: PlatformClient, job_id: str, status: JobStatus
) -> Result[JobPosting]:
    row = await client.update(TABLE, {"id": eq(job_id)}, {"status": status, "updated_at": utc_now_iso()})
    return Result.success(JobPosting.model_validate(row))
