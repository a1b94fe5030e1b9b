"""Notification requests."""

from typing import Any

from anlik_eleman.db.base import Result, service_call
from anlik_eleman.db.rows import Notification, NotificationPreferences, NotificationType, utc_now_iso
from anlik_eleman.remote import PlatformClient, eq

TABLE = "notifications"


@service_call("Bildirimler alınamadı", default_factory=list)
async def list_notifications(
    client: PlatformClient, user_id: str, limit: int = 20
) -> Result[list[Notification]]:
    rows = await client.select(
        TABLE, {"user_id": eq(user_id)}, order="created_at.desc", limit=limit
    )
    return Result.success([Notification.model_validate(r) for r in rows])


@service_call("Bildirimler okundu olarak işaretlenemedi")
async def mark_notifications_as_read(
    client: PlatformClient, user_id: str, notification_ids: list[str] | None = None
) -> Result[Any]:
    """Mark the given notifications (or all of them) as read."""
    data = await client.rpc(
        "mark_notifications_as_read",
        {"p_user_id": user_id, "p_notification_ids": notification_ids},
    )
    return Result.success(data)


@service_call("Okunmamış bildirim sayısı alınamadı", default_factory=int)
async def unread_notification_count(client: PlatformClient, user_id: str) -> Result[int]:
    data = await client.rpc("get_unread_notification_count", {"p_user_id": user_id})
    return Result.success(int(data or 0))


@service_call("Bildirim oluşturulamadı")
async def create_notification(
    client: PlatformClient,
    user_id: str,
    notification_type: NotificationType,
    title: str,
    message: str,
    data: dict[str, Any] | None = None,
) -> Result[Notification]:
    row = await client.insert(
        TABLE,
        {
            "user_id": user_id,
            "type": notification_type,
            "title": title,
            "message": message,
            "data": data,
            "is_read": False,
            "created_at": utc_now_iso(),
        },
    )
    return Result.success(Notification.model_validate(row))


@service_call("Bildirim tercihleri alınamadı")
async def get_notification_preferences(
    client: PlatformClient, user_id: str
) -> Result[NotificationPreferences]:
    row = await client.select_single("notification_preferences", {"user_id": eq(user_id)})
    return Result.success(NotificationPreferences.model_validate(row))


@service_call("Bildirim tercihleri güncellenemedi")
async def update_notification_preferences(
    client: PlatformClient, user_id: str, preferences: dict[str, Any]
) -> Result[NotificationPreferences]:
    values = {k: v for k, v in preferences.items() if k != "user_id"}
    values["updated_at"] = utc_now_iso()
    row = await client.update("notification_preferences", {"user_id": eq(user_id)}, values)
    return Result.success(NotificationPreferences.model_validate(row))
