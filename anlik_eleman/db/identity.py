"""Identity requests: sessions, sign up/in/out, email verification."""

import logging
from typing import Any

from anlik_eleman.db import messages
from anlik_eleman.db.base import Result, VALIDATION_CODE, service_call
from anlik_eleman.remote import AuthIdentity, PlatformClient, Session
from anlik_eleman.remote.events import AuthListener, Subscription

logger = logging.getLogger(__name__)

SIGN_UP_METADATA_FIELDS = (
    "first_name",
    "last_name",
    "phone",
    "city",
    "company_name",
    "company_title",
)


def build_sign_up_metadata(attributes: dict[str, Any]) -> dict[str, str]:
    """Normalize free-form sign-up attributes into identity metadata."""
    metadata = {field: str(attributes.get(field) or "") for field in SIGN_UP_METADATA_FIELDS}
    metadata["user_type"] = str(attributes.get("user_type") or "job_seeker")
    # Optional company details used when the employer's company is provisioned
    for field in ("company_description", "company_website", "employee_count"):
        if attributes.get(field):
            metadata[field] = str(attributes[field])
    return metadata


@service_call(messages.SESSION_FETCH_FAILED)
async def get_session(client: PlatformClient) -> Result[Session]:
    """Current session, or ``data=None`` when signed out."""
    return Result.success(await client.get_session())


@service_call(messages.CURRENT_USER_FAILED)
async def get_current_identity(client: PlatformClient) -> Result[AuthIdentity]:
    identity = await client.get_user()
    if identity is None:
        return Result.failure(messages.CURRENT_USER_FAILED, "session_not_found")
    return Result.success(identity)


def on_auth_state_change(client: PlatformClient, listener: AuthListener) -> Subscription:
    return client.on_auth_state_change(listener)


@service_call(
    messages.SIGNUP_FAILED,
    localize=messages.localize_sign_up_error,
    not_configured=messages.PLATFORM_NOT_CONFIGURED,
)
async def sign_up_identity(
    client: PlatformClient, email: str, password: str, attributes: dict[str, Any]
) -> Result[AuthIdentity]:
    if not email or not password:
        return Result.failure(messages.EMAIL_AND_PASSWORD_REQUIRED, VALIDATION_CODE)

    logger.info(f"Starting signup process for: {email}")
    identity = await client.sign_up(email.strip(), password, build_sign_up_metadata(attributes))
    logger.info(f"Signup successful: {identity.id}")
    return Result.success(identity)


@service_call(
    messages.SIGNIN_FAILED,
    localize=messages.localize_sign_in_error,
    not_configured=messages.PLATFORM_NOT_CONFIGURED,
)
async def sign_in_identity(client: PlatformClient, email: str, password: str) -> Result[AuthIdentity]:
    if not email or not password:
        return Result.failure(messages.EMAIL_AND_PASSWORD_REQUIRED, VALIDATION_CODE)

    logger.info(f"Starting signin process for: {email}")
    session = await client.sign_in_with_password(email.strip(), password)
    logger.info("Signin successful")
    return Result.success(session.user)


@service_call(messages.SIGNOUT_UNEXPECTED)
async def sign_out_identity(client: PlatformClient) -> Result[None]:
    await client.sign_out()
    return Result.success()


@service_call(messages.VERIFICATION_EMAIL_FAILED)
async def send_verification_email(client: PlatformClient, email: str) -> Result[None]:
    await client.resend_signup(email.strip())
    return Result.success()


@service_call(messages.VERIFY_EMAIL_FAILED)
async def verify_email(client: PlatformClient, token_hash: str) -> Result[Session]:
    return Result.success(await client.verify_email(token_hash))


@service_call(messages.PASSWORD_RESET_FAILED)
async def send_password_reset_email(
    client: PlatformClient, email: str, redirect_to: str | None = None
) -> Result[None]:
    await client.reset_password_for_email(email.strip(), redirect_to)
    return Result.success()
