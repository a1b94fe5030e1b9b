"""Profile requests."""

from typing import Any

from anlik_eleman.db import messages
from anlik_eleman.db.base import NOT_FOUND_CODE, Result, service_call
from anlik_eleman.db.rows import Profile, ProfileInsert, utc_now_iso
from anlik_eleman.remote import PlatformClient, eq

TABLE = "profiles"


@service_call(
    "Profil bilgileri alınamadı",
    not_configured=messages.DATABASE_NOT_CONFIGURED,
    quiet_codes=(NOT_FOUND_CODE,),
)
async def get_profile_by_id(client: PlatformClient, user_id: str) -> Result[Profile]:
    """Fetch one profile; a missing row fails with code ``PGRST116``."""
    row = await client.select_single(TABLE, {"id": eq(user_id)})
    return Result.success(Profile.model_validate(row))


@service_call(messages.PROFILE_CREATE_FAILED)
async def insert_profile(client: PlatformClient, profile: ProfileInsert) -> Result[Profile]:
    now = utc_now_iso()
    row = await client.insert(TABLE, {**profile.model_dump(), "created_at": now, "updated_at": now})
    return Result.success(Profile.model_validate(row))


@service_call(messages.PROFILE_UPDATE_FAILED)
async def update_profile(client: PlatformClient, user_id: str, updates: dict[str, Any]) -> Result[Profile]:
    values = {k: v for k, v in updates.items() if k != "id"}
    values["updated_at"] = utc_now_iso()
    row = await client.update(TABLE, {"id": eq(user_id)}, values)
    return Result.success(Profile.model_validate(row))


@service_call("Kullanıcılar alınamadı", default_factory=list)
async def list_recent_profiles(client: PlatformClient, limit: int = 10) -> Result[list[Profile]]:
    rows = await client.select(TABLE, order="created_at.desc", limit=limit)
    return Result.success([Profile.model_validate(r) for r in rows])


@service_call("Hesap onayı güncellenemedi")
async def set_profile_approval(client: PlatformClient, user_id: str, approved: bool) -> Result[Profile]:
    row = await client.update(
        TABLE, {"id": eq(user_id)}, {"is_approved": approved, "updated_at": utc_now_iso()}
    )
    return Result.success(Profile.model_validate(row))
