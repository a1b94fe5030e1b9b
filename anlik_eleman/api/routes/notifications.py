"""Notification endpoints."""

from typing import Any

from fastapi import APIRouter, Body, Depends

from anlik_eleman.api.deps import current_profile, get_client, unwrap
from anlik_eleman.api.schemas import CountResponse, MessageResponse, NotificationReadRequest
from anlik_eleman.db import notifications
from anlik_eleman.db.rows import Notification, NotificationPreferences, Profile
from anlik_eleman.remote import PlatformClient

router = APIRouter()


@router.get("", response_model=list[Notification])
async def list_notifications(
    limit: int = 20,
    profile: Profile = Depends(current_profile),
    client: PlatformClient = Depends(get_client),
):
    return unwrap(await notifications.list_notifications(client, profile.id, limit))


@router.get("/unread-count", response_model=CountResponse)
async def unread_count(
    profile: Profile = Depends(current_profile),
    client: PlatformClient = Depends(get_client),
):
    """Unread notifications; 0 when the count cannot be read."""
    result = await notifications.unread_notification_count(client, profile.id)
    return CountResponse(count=result.data or 0)


@router.post("/read", response_model=MessageResponse)
async def mark_read(
    data: NotificationReadRequest,
    profile: Profile = Depends(current_profile),
    client: PlatformClient = Depends(get_client),
):
    unwrap(await notifications.mark_notifications_as_read(client, profile.id, data.notification_ids))
    return MessageResponse(message="Bildirimler okundu olarak işaretlendi")


@router.get("/preferences", response_model=NotificationPreferences)
async def get_preferences(
    profile: Profile = Depends(current_profile),
    client: PlatformClient = Depends(get_client),
):
    return unwrap(await notifications.get_notification_preferences(client, profile.id))


@router.put("/preferences", response_model=NotificationPreferences)
async def update_preferences(
    preferences: dict[str, Any] = Body(...),
    profile: Profile = Depends(current_profile),
    client: PlatformClient = Depends(get_client),
):
    return unwrap(
        await notifications.update_notification_preferences(client, profile.id, preferences)
    )
