"""Saved job requests."""

from anlik_eleman.db.base import Result, service_call
from anlik_eleman.db.rows import SavedJob, utc_now_iso
from anlik_eleman.remote import PlatformClient, eq

TABLE = "saved_jobs"


@service_call("Kaydedilen işler alınamadı", default_factory=list)
async def list_saved_jobs(client: PlatformClient, user_id: str) -> Result[list[SavedJob]]:
    rows = await client.select(
        TABLE,
        {"user_id": eq(user_id)},
        columns="*,job:job_postings(*,company:companies(*))",
        order="created_at.desc",
    )
    return Result.success([SavedJob.model_validate(r) for r in rows])


@service_call("İş kaydedilemedi")
async def save_job(client: PlatformClient, user_id: str, job_id: str) -> Result[SavedJob]:
    row = await client.insert(TABLE, {"user_id": user_id, "job_id": job_id, "created_at": utc_now_iso()})
    return Result.success(SavedJob.model_validate(row))


@service_call("İş kaydedilmekten çıkarılamadı")
async def unsave_job(client: PlatformClient, user_id: str, job_id: str) -> Result[None]:
    await client.delete(TABLE, {"user_id": eq(user_id), "job_id": eq(job_id)})
    return Result.success()


@service_call("Kayıt durumu kontrol edilemedi", default_factory=bool)
async def is_job_saved(client: PlatformClient, user_id: str, job_id: str) -> Result[bool]:
    row = await client.select_maybe_single(
        TABLE, {"user_id": eq(user_id), "job_id": eq(job_id)}, columns="id"
    )
    return Result.success(row is not None)
