"""Conversation and message requests."""

from anlik_eleman.db.base import Result, service_call
from anlik_eleman.db.rows import Conversation, Message
from anlik_eleman.remote import PlatformClient, eq, neq, or_


@service_call("Konuşma oluşturulamadı")
async def create_conversation(
    client: PlatformClient, participant1_id: str, participant2_id: str, job_id: str | None = None
) -> Result[Conversation]:
    row = await client.insert(
        "conversations",
        {"participant1_id": participant1_id, "participant2_id": participant2_id, "job_id": job_id},
    )
    return Result.success(Conversation.model_validate(row))


@service_call("Konuşmalar alınamadı", default_factory=list)
async def list_conversations(client: PlatformClient, user_id: str) -> Result[list[Conversation]]:
    rows = await client.select(
        "conversation_participants",
        {"or": or_(f"participant1_id.eq.{user_id}", f"participant2_id.eq.{user_id}")},
        order="conversation_updated_at.desc",
    )
    return Result.success([Conversation.model_validate(r) for r in rows])


@service_call("Mesajlar alınamadı", default_factory=list)
async def list_messages(client: PlatformClient, conversation_id: str) -> Result[list[Message]]:
    rows = await client.select(
        "messages",
        {"conversation_id": eq(conversation_id)},
        columns="*,sender:profiles(first_name,last_name,avatar_url)",
        order="created_at.asc",
    )
    return Result.success([Message.model_validate(r) for r in rows])


@service_call("Mesaj gönderilemedi")
async def send_message(
    client: PlatformClient,
    conversation_id: str,
    sender_id: str,
    content: str,
    message_type: str = "text",
    file_url: str | None = None,
    file_name: str | None = None,
    file_size: int | None = None,
) -> Result[Message]:
    row = await client.insert(
        "messages",
        {
            "conversation_id": conversation_id,
            "sender_id": sender_id,
            "content": content,
            "message_type": message_type,
            "file_url": file_url,
            "file_name": file_name,
            "file_size": file_size,
        },
    )
    return Result.success(Message.model_validate(row))


@service_call("Mesajlar okundu olarak işaretlenemedi")
async def mark_messages_as_read(client: PlatformClient, conversation_id: str, user_id: str) -> Result[None]:
    """Mark messages from the other participant as read."""
    await client.update(
        "messages",
        {"conversation_id": eq(conversation_id), "sender_id": neq(user_id)},
        {"is_read": True},
        single=False,
    )
    return Result.success()


@service_call("Okunmamış mesaj sayısı alınamadı", default_factory=int)
async def unread_message_count(client: PlatformClient, user_id: str) -> Result[int]:
    data = await client.rpc("get_unread_message_count", {"user_profile_id": user_id})
    return Result.success(int(data or 0))
