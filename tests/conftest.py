"""Shared fixtures: an in-memory auth gateway and platform client helpers."""

import asyncio
import json
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import httpx
import pytest

from anlik_eleman.auth import AuthGateway, SessionStore
from anlik_eleman.config import Settings
from anlik_eleman.db.base import NOT_FOUND_CODE, Result
from anlik_eleman.db.rows import Company, CompanyInsert, Profile, ProfileInsert
from anlik_eleman.remote import AuthChangeEvent, AuthEventChannel, AuthIdentity, PlatformClient, Session
from anlik_eleman.remote.events import AuthListener, Subscription
from anlik_eleman.remote.session_storage import SessionStorage

PLATFORM_URL = "https://example.supabase.co"


def make_identity(
    user_id: str = "user-1",
    email: str = "ayse@example.com",
    metadata: dict[str, Any] | None = None,
    confirmed: bool = True,
) -> AuthIdentity:
    return AuthIdentity(
        id=user_id,
        email=email,
        email_confirmed_at=datetime.now(UTC) if confirmed else None,
        user_metadata=metadata or {},
    )


def make_session(identity: AuthIdentity) -> Session:
    return Session(access_token=f"token-{identity.id}", refresh_token="refresh", user=identity)


def job_seeker_metadata(**overrides: Any) -> dict[str, Any]:
    metadata = {
        "first_name": "Ayşe",
        "last_name": "Yılmaz",
        "user_type": "job_seeker",
        "phone": "",
        "city": "İstanbul",
        "company_name": "",
    }
    metadata.update(overrides)
    return metadata


def employer_metadata(**overrides: Any) -> dict[str, Any]:
    metadata = job_seeker_metadata(
        first_name="Mehmet",
        last_name="Demir",
        user_type="employer",
        city="Ankara",
        company_name="Demir Lojistik",
    )
    metadata.update(overrides)
    return metadata


class FakeGateway:
    """In-memory ``AuthGateway`` that records every call.

    Sign-in, auto-confirmed sign-up and sign-out emit auth events the way the
    platform client does, unless ``emit_events`` is False.
    """

    def __init__(
        self,
        identity: AuthIdentity | None = None,
        *,
        signed_in: bool = False,
        profiles: dict[str, Profile] | None = None,
        emit_events: bool = True,
    ):
        self.identity = identity
        self.session = make_session(identity) if identity and signed_in else None
        self.profiles: dict[str, Profile] = dict(profiles or {})
        self.companies: list[Company] = []
        self.emit_events = emit_events
        self.events = AuthEventChannel()
        self.calls: list[str] = []
        self.inserted_profile: ProfileInsert | None = None

        # Failure switches
        self.session_result: Result[Session] | None = None
        self.session_raises: Exception | None = None
        self.profile_error: Result[Profile] | None = None
        self.insert_profile_error: Result[Profile] | None = None
        self.update_error: Result[Profile] | None = None
        self.sign_in_error: Result[AuthIdentity] | None = None
        self.sign_out_error: Result[None] | None = None
        self.company_exists_error: Result[bool] | None = None
        self.insert_company_error: Result[Company] | None = None

        # Set to hold profile lookups until released
        self.profile_gate: asyncio.Event | None = None

    def count(self, name: str) -> int:
        return self.calls.count(name)

    async def emit(self, event: AuthChangeEvent, session: Session | None) -> None:
        await self.events.emit(event, session)

    async def get_session(self) -> Result[Session]:
        self.calls.append("get_session")
        if self.session_raises is not None:
            raise self.session_raises
        if self.session_result is not None:
            return self.session_result
        return Result.success(self.session)

    async def get_current_identity(self) -> Result[AuthIdentity]:
        self.calls.append("get_current_identity")
        if self.identity is None:
            return Result.failure("Kullanıcı bilgileri alınamadı", "session_not_found")
        return Result.success(self.identity)

    def on_auth_state_change(self, listener: AuthListener) -> Subscription:
        self.calls.append("on_auth_state_change")
        return self.events.subscribe(listener)

    async def sign_up_identity(
        self, email: str, password: str, attributes: dict[str, Any]
    ) -> Result[AuthIdentity]:
        self.calls.append("sign_up_identity")
        return Result.success(self.identity)

    async def sign_in_identity(self, email: str, password: str) -> Result[AuthIdentity]:
        self.calls.append("sign_in_identity")
        if self.sign_in_error is not None:
            return self.sign_in_error
        self.session = make_session(self.identity)
        if self.emit_events:
            await self.emit(AuthChangeEvent.SIGNED_IN, self.session)
        return Result.success(self.identity)

    async def sign_out_identity(self) -> Result[None]:
        self.calls.append("sign_out_identity")
        if self.sign_out_error is not None:
            return self.sign_out_error
        self.session = None
        if self.emit_events:
            await self.emit(AuthChangeEvent.SIGNED_OUT, None)
        return Result.success()

    async def get_profile_by_id(self, user_id: str) -> Result[Profile]:
        self.calls.append("get_profile_by_id")
        if self.profile_gate is not None:
            await self.profile_gate.wait()
        if self.profile_error is not None:
            return self.profile_error
        if user_id not in self.profiles:
            return Result.failure("Profil bilgileri alınamadı: Kayıt bulunamadı", NOT_FOUND_CODE)
        return Result.success(self.profiles[user_id])

    async def insert_profile(self, profile: ProfileInsert) -> Result[Profile]:
        self.calls.append("insert_profile")
        self.inserted_profile = profile
        if self.insert_profile_error is not None:
            return self.insert_profile_error
        row = Profile(**profile.model_dump())
        self.profiles[row.id] = row
        return Result.success(row)

    async def update_profile(self, user_id: str, updates: dict[str, Any]) -> Result[Profile]:
        self.calls.append("update_profile")
        if self.update_error is not None:
            return self.update_error
        row = self.profiles[user_id].model_copy(update=updates)
        self.profiles[user_id] = row
        return Result.success(row)

    async def company_exists_for_owner(self, owner_id: str) -> Result[bool]:
        self.calls.append("company_exists_for_owner")
        if self.company_exists_error is not None:
            return self.company_exists_error
        return Result.success(any(c.owner_id == owner_id for c in self.companies))

    async def insert_company(self, company: CompanyInsert) -> Result[Company]:
        self.calls.append("insert_company")
        if self.insert_company_error is not None:
            return self.insert_company_error
        row = Company(id=f"company-{len(self.companies) + 1}", **company.model_dump())
        self.companies.append(row)
        return Result.success(row)


async def online() -> bool:
    return True


async def offline() -> bool:
    return False


@pytest.fixture
async def make_store() -> Callable[..., SessionStore]:
    stores: list[SessionStore] = []

    def factory(gateway: AuthGateway, online_check=online) -> SessionStore:
        store = SessionStore(gateway, online_check=online_check)
        stores.append(store)
        return store

    yield factory
    for store in stores:
        store.dispose()
    # Let cancelled event consumers finish
    await asyncio.sleep(0)


# ============== Platform client helpers ==============


def platform_settings(**overrides: Any) -> Settings:
    values = {
        "supabase_url": PLATFORM_URL,
        "supabase_anon_key": "anon-key",
        "environment": "development",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def json_response(status_code: int, body: Any = None, **kwargs: Any) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(body).encode(), **kwargs)


@pytest.fixture
async def platform():
    """Build a ``PlatformClient`` whose requests go to ``handler``.

    Every request is recorded in ``client.requests``.
    """
    clients: list[PlatformClient] = []

    def factory(
        handler: Callable[[httpx.Request], httpx.Response],
        storage: SessionStorage | None = None,
        **settings: Any,
    ) -> PlatformClient:
        requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        client = PlatformClient(
            platform_settings(**settings), storage=storage, transport=httpx.MockTransport(record)
        )
        client.requests = requests
        clients.append(client)
        return client

    yield factory
    for client in clients:
        await client.aclose()


def session_body(user_id: str = "user-1", access_token: str = "access", **user: Any) -> dict[str, Any]:
    return {
        "access_token": access_token,
        "refresh_token": "refresh",
        "token_type": "bearer",
        "expires_in": 3600,
        "user": {
            "id": user_id,
            "email": "ayse@example.com",
            "email_confirmed_at": "2024-05-01T10:00:00Z",
            "user_metadata": {},
            **user,
        },
    }
