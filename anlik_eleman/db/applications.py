"""Job application requests."""

from typing import Any

from anlik_eleman.db.base import Result, service_call
from anlik_eleman.db.rows import Application, ApplicationFilters, utc_now_iso
from anlik_eleman.remote import PlatformClient, eq

TABLE = "applications"

LIST_COLUMNS = (
    "*,job:job_postings(title,company:companies(name)),"
    "applicant:profiles(first_name,last_name)"
)


@service_call("Başvurular alınamadı", default_factory=list)
async def list_applications(
    client: PlatformClient, filters: ApplicationFilters | None = None
) -> Result[list[Application]]:
    filters = filters or ApplicationFilters()
    query: dict[str, str] = {}
    if filters.job_id:
        query["job_id"] = eq(filters.job_id)
    if filters.applicant_id:
        query["applicant_id"] = eq(filters.applicant_id)
    if filters.status:
        query["status"] = eq(filters.status)
    rows = await client.select(
        TABLE,
        query,
        columns=LIST_COLUMNS,
        order="applied_at.desc",
        limit=filters.limit,
        offset=filters.offset,
    )
    return Result.success([Application.model_validate(r) for r in rows])


@service_call("Başvuru gönderilirken hata oluştu")
async def create_application(
    client: PlatformClient, job_id: str, applicant_id: str, cover_letter: str | None = None
) -> Result[Application]:
    row = await client.insert(
        TABLE,
        {
            "job_id": job_id,
            "applicant_id": applicant_id,
            "cover_letter": cover_letter,
            "status": "pending",
            "applied_at": utc_now_iso(),
        },
    )
    return Result.success(Application.model_validate(row))


@service_call("Başvuru güncellenemedi")
async def update_application(
    client: PlatformClient, application_id: str, updates: dict[str, Any]
) -> Result[Application]:
    values = {k: v for k, v in updates.items() if k in ("status", "employer_notes")}
    if "status" in values:
        values["reviewed_at"] = utc_now_iso()
    row = await client.update(TABLE, {"id": eq(application_id)}, values)
    return Result.success(Application.model_validate(row))
