"""Conversation and message endpoints."""

import time

from fastapi import APIRouter, Depends, HTTPException, Request

from anlik_eleman.api.deps import current_profile, get_client, unwrap
from anlik_eleman.api.schemas import ConversationCreate, CountResponse, MessageCreate, MessageResponse
from anlik_eleman.db import messaging, storage
from anlik_eleman.db.rows import Conversation, Message, Profile
from anlik_eleman.remote import PlatformClient

router = APIRouter()

MAX_ATTACHMENT_BYTES = 10 * 1024 * 1024
ATTACHMENT_TOO_LARGE = "Dosya boyutu 10MB'dan küçük olmalıdır."


@router.get("/conversations", response_model=list[Conversation])
async def list_conversations(
    profile: Profile = Depends(current_profile),
    client: PlatformClient = Depends(get_client),
):
    return unwrap(await messaging.list_conversations(client, profile.id))


@router.post("/conversations", response_model=Conversation)
async def start_conversation(
    data: ConversationCreate,
    profile: Profile = Depends(current_profile),
    client: PlatformClient = Depends(get_client),
):
    return unwrap(
        await messaging.create_conversation(client, profile.id, data.participant_id, data.job_id)
    )


@router.get("/conversations/{conversation_id}", response_model=list[Message])
async def list_messages(
    conversation_id: str,
    profile: Profile = Depends(current_profile),
    client: PlatformClient = Depends(get_client),
):
    return unwrap(await messaging.list_messages(client, conversation_id))


@router.post("/conversations/{conversation_id}", response_model=Message)
async def send_message(
    conversation_id: str,
    data: MessageCreate,
    profile: Profile = Depends(current_profile),
    client: PlatformClient = Depends(get_client),
):
    return unwrap(
        await messaging.send_message(
            client,
            conversation_id,
            profile.id,
            data.content,
            message_type=data.message_type,
            file_url=data.file_url,
            file_name=data.file_name,
            file_size=data.file_size,
        )
    )


@router.post("/conversations/{conversation_id}/attachments", response_model=Message)
async def send_attachment(
    conversation_id: str,
    file_name: str,
    request: Request,
    profile: Profile = Depends(current_profile),
    client: PlatformClient = Depends(get_client),
):
    """Upload the raw request body and send it as a file message.

    Images are sent as ``image`` messages, everything else as ``file``.
    """
    content = await request.body()
    if not content:
        raise HTTPException(status_code=400, detail="Dosya boş")
    if len(content) > MAX_ATTACHMENT_BYTES:
        raise HTTPException(status_code=413, detail=ATTACHMENT_TOO_LARGE)

    content_type = request.headers.get("content-type", "application/octet-stream")
    extension = file_name.rsplit(".", 1)[-1] if "." in file_name else "bin"
    file_path = f"messages/{int(time.time() * 1000)}.{extension}"

    unwrap(await storage.upload_file(client, file_path, content, content_type))
    file_url = unwrap(await storage.get_file_url(client, file_path))
    return unwrap(
        await messaging.send_message(
            client,
            conversation_id,
            profile.id,
            file_name,
            message_type="image" if content_type.startswith("image/") else "file",
            file_url=file_url,
            file_name=file_name,
            file_size=len(content),
        )
    )


@router.post("/conversations/{conversation_id}/read", response_model=MessageResponse)
async def mark_read(
    conversation_id: str,
    profile: Profile = Depends(current_profile),
    client: PlatformClient = Depends(get_client),
):
    """Mark the other participant's messages as read."""
    unwrap(await messaging.mark_messages_as_read(client, conversation_id, profile.id))
    return MessageResponse(message="Mesajlar okundu olarak işaretlendi")


@router.get("/unread-count", response_model=CountResponse)
async def unread_count(
    profile: Profile = Depends(current_profile),
    client: PlatformClient = Depends(get_client),
):
    result = await messaging.unread_message_count(client, profile.id)
    return CountResponse(count=result.data or 0)
