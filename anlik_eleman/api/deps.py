"""Shared route dependencies."""

from typing import TypeVar

from fastapi import Depends, HTTPException, Request

from anlik_eleman.auth.store import SessionStore
from anlik_eleman.db import messages
from anlik_eleman.db.base import NOT_CONFIGURED_CODE, Result
from anlik_eleman.db.rows import Profile
from anlik_eleman.remote import PlatformClient

T = TypeVar("T")

FORBIDDEN = "Bu işlem için yetkiniz yok"


def get_store(request: Request) -> SessionStore:
    return request.app.state.store


def get_client(request: Request) -> PlatformClient:
    return request.app.state.client


def current_profile(store: SessionStore = Depends(get_store)) -> Profile:
    """The signed-in user's profile; 401 while anonymous or still loading."""
    state = store.state
    if state.user is None or state.profile is None:
        raise HTTPException(status_code=401, detail=messages.NO_ACTIVE_USER)
    return state.profile


def require_role(*roles: str):
    def dependency(profile: Profile = Depends(current_profile)) -> Profile:
        if profile.user_type not in roles:
            raise HTTPException(status_code=403, detail=FORBIDDEN)
        return profile

    return dependency


def unwrap(result: Result[T]) -> T:
    """Return ``result.data`` or raise the matching HTTP error."""
    if result.error is None:
        return result.data
    if result.is_not_found:
        status_code = 404
    elif result.error.code == NOT_CONFIGURED_CODE:
        status_code = 503
    else:
        status_code = 400
    raise HTTPException(status_code=status_code, detail=result.error.message)
