"""Company requests."""

from typing import Any

from anlik_eleman.db.base import Result, service_call
from anlik_eleman.db.rows import Company, CompanyInsert, utc_now_iso
from anlik_eleman.remote import PlatformClient, eq

TABLE = "companies"


@service_call("Şirketler alınamadı", default_factory=list)
async def list_companies(client: PlatformClient, owner_id: str | None = None) -> Result[list[Company]]:
    filters = {"owner_id": eq(owner_id)} if owner_id else None
    rows = await client.select(TABLE, filters, order="created_at.desc")
    return Result.success([Company.model_validate(r) for r in rows])


@service_call("Şirket bilgileri alınamadı", default_factory=list)
async def list_user_companies(client: PlatformClient, user_id: str) -> Result[list[Company]]:
    rows = await client.select(TABLE, {"owner_id": eq(user_id)}, order="name.asc")
    return Result.success([Company.model_validate(r) for r in rows])


@service_call("Şirket kontrolü yapılamadı", default_factory=bool)
async def company_exists_for_owner(client: PlatformClient, owner_id: str) -> Result[bool]:
    row = await client.select_maybe_single(TABLE, {"owner_id": eq(owner_id)}, columns="id")
    return Result.success(row is not None)


@service_call("Şirket oluşturulamadı")
async def insert_company(client: PlatformClient, company: CompanyInsert) -> Result[Company]:
    now = utc_now_iso()
    row = await client.insert(TABLE, {**company.model_dump(), "created_at": now, "updated_at": now})
    return Result.success(Company.model_validate(row))


@service_call("Şirket güncellenemedi")
async def update_company(client: PlatformClient, company_id: str, updates: dict[str, Any]) -> Result[Company]:
    values = {k: v for k, v in updates.items() if k not in ("id", "owner_id")}
    values["updated_at"] = utc_now_iso()
    row = await client.update(TABLE, {"id": eq(company_id)}, values)
    return Result.success(Company.model_validate(row))
