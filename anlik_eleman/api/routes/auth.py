"""Auth endpoints: session state and the store's operations."""

from fastapi import APIRouter, Depends, HTTPException, Request

from anlik_eleman.api.deps import get_client, get_store, unwrap
from anlik_eleman.api.limiter import limiter
from anlik_eleman.api.schemas import (
    AuthStateResponse,
    EmailRequest,
    EmailVerificationRequest,
    MessageResponse,
    PasswordResetRequest,
    ProfileUpdate,
    SignInRequest,
    SignUpRequest,
    SignUpResponse,
)
from anlik_eleman.auth.store import SessionStore
from anlik_eleman.db import identity, messages
from anlik_eleman.remote import PlatformClient

router = APIRouter()


@router.get("/state", response_model=AuthStateResponse)
def get_state(store: SessionStore = Depends(get_store)):
    """Current user, profile, phase and last error."""
    return AuthStateResponse.from_state(store.state)


@router.post("/sign-up", response_model=SignUpResponse)
@limiter.limit("5/minute")
async def sign_up(
    request: Request,
    data: SignUpRequest,
    store: SessionStore = Depends(get_store),
):
    """Register a new account. Unconfirmed accounts must verify their email first."""
    result = await store.sign_up(data.email, data.password, data.attributes())
    identity_ = unwrap(result)
    return SignUpResponse(
        user_id=identity_.id,
        email_confirmed=identity_.is_confirmed,
        state=AuthStateResponse.from_state(store.state),
    )


@router.post("/sign-in", response_model=AuthStateResponse)
@limiter.limit("5/minute")
async def sign_in(
    request: Request,
    data: SignInRequest,
    store: SessionStore = Depends(get_store),
):
    unwrap(await store.sign_in(data.email, data.password))
    return AuthStateResponse.from_state(store.state)


@router.post("/sign-out", response_model=AuthStateResponse)
async def sign_out(store: SessionStore = Depends(get_store)):
    unwrap(await store.sign_out())
    return AuthStateResponse.from_state(store.state)


@router.patch("/profile", response_model=AuthStateResponse)
async def update_profile(data: ProfileUpdate, store: SessionStore = Depends(get_store)):
    """Update the signed-in user's profile and return the reloaded state."""
    if store.state.user is None:
        raise HTTPException(status_code=401, detail=messages.NO_ACTIVE_USER)
    unwrap(await store.update_profile(data.model_dump(exclude_unset=True)))
    return AuthStateResponse.from_state(store.state)


@router.post("/clear-error", response_model=AuthStateResponse)
def clear_error(store: SessionStore = Depends(get_store)):
    store.clear_error()
    return AuthStateResponse.from_state(store.state)


@router.post("/verification-email", response_model=MessageResponse)
@limiter.limit("3/minute")
async def send_verification_email(
    request: Request,
    data: EmailRequest,
    client: PlatformClient = Depends(get_client),
):
    unwrap(await identity.send_verification_email(client, data.email))
    return MessageResponse(message="Doğrulama e-postası gönderildi")


@router.post("/password-reset", response_model=MessageResponse)
@limiter.limit("3/minute")
async def send_password_reset(
    request: Request,
    data: PasswordResetRequest,
    client: PlatformClient = Depends(get_client),
):
    unwrap(await identity.send_password_reset_email(client, data.email, data.redirect_to))
    return MessageResponse(message="Şifre sıfırlama e-postası gönderildi")


@router.post("/verify-email", response_model=AuthStateResponse)
@limiter.limit("5/minute")
async def verify_email(
    request: Request,
    data: EmailVerificationRequest,
    client: PlatformClient = Depends(get_client),
    store: SessionStore = Depends(get_store),
):
    """Confirm an email with the link token; a returned session signs the user in."""
    unwrap(await identity.verify_email(client, data.token_hash))
    await store.settled()
    return AuthStateResponse.from_state(store.state)
