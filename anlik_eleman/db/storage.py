"""File upload requests."""

from anlik_eleman.db.base import Result, service_call
from anlik_eleman.remote import PlatformClient


@service_call("Dosya yüklenemedi")
async def upload_file(
    client: PlatformClient, file_path: str, content: bytes, content_type: str = "application/octet-stream"
) -> Result[str]:
    """Upload to the configured bucket; returns the stored object key."""
    key = await client.upload(client.settings.storage_bucket, file_path, content, content_type)
    return Result.success(key)


@service_call("Dosya URL'i alınamadı")
async def get_file_url(client: PlatformClient, file_path: str) -> Result[str]:
    return Result.success(client.public_url(client.settings.storage_bucket, file_path))
