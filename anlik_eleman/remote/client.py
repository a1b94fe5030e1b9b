"""
HTTP client for the hosted identity and data platform.

Wraps three services behind one ``httpx.AsyncClient``:
- identity (``/auth/v1``): sign up, sign in, sign out, token refresh, user
- rows (``/rest/v1``): filtered select, insert, update, delete, RPC
- storage (``/storage/v1``): object upload and public URLs

Errors from the platform are raised as ``PlatformError``; transport errors
propagate as ``httpx`` exceptions. The data access façade converts both.
"""

import asyncio
import logging
import re
from typing import Any

import httpx

from anlik_eleman.config import PLACEHOLDER_KEY, PLACEHOLDER_URL, Settings
from anlik_eleman.remote.errors import PlatformError, error_from_response
from anlik_eleman.remote.events import AuthChangeEvent, AuthEventChannel, AuthListener, Subscription
from anlik_eleman.remote.models import AuthIdentity, Session
from anlik_eleman.remote.session_storage import (
    FileSessionStorage,
    MemorySessionStorage,
    SessionStorage,
)

logger = logging.getLogger(__name__)

SINGLE_OBJECT = "application/vnd.pgrst.object+json"
CONTENT_RANGE_TOTAL = re.compile(r"/(\d+|\*)$")


# PostgREST filter operators
def eq(value: Any) -> str:
    return f"eq.{_format(value)}"


def neq(value: Any) -> str:
    return f"neq.{_format(value)}"


def gte(value: Any) -> str:
    return f"gte.{_format(value)}"


def lte(value: Any) -> str:
    return f"lte.{_format(value)}"


def in_(values: list[Any]) -> str:
    return "in.(" + ",".join(_format(v) for v in values) + ")"


def or_(*conditions: str) -> str:
    """Combine ``column.op.value`` conditions with OR."""
    return "(" + ",".join(conditions) + ")"


def _format(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


class PlatformClient:
    """Async client for one platform project."""

    def __init__(
        self,
        settings: Settings,
        storage: SessionStorage | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not settings.is_configured:
            if settings.is_production:
                raise ValueError("Missing platform configuration: set SUPABASE_URL and SUPABASE_ANON_KEY")
            logger.warning("Platform environment variables not found, using placeholder values")

        self.settings = settings
        self.url = (settings.supabase_url or PLACEHOLDER_URL).rstrip("/")
        self.anon_key = settings.supabase_anon_key or PLACEHOLDER_KEY
        self.storage = storage or _default_storage(settings)
        self.events = AuthEventChannel()
        self._session: Session | None = None
        self._refresh_lock = asyncio.Lock()
        self._http = httpx.AsyncClient(
            base_url=self.url,
            headers={
                "apikey": self.anon_key,
                "X-Client-Info": settings.client_info,
            },
            transport=transport,
        )

    @property
    def is_configured(self) -> bool:
        return self.settings.is_configured

    async def aclose(self) -> None:
        await self._http.aclose()

    # ============== Transport ==============

    def _auth_header(self) -> dict[str, str]:
        token = self._session.access_token if self._session else self.anon_key
        return {"Authorization": f"Bearer {token}"}

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
        token: str | None = None,
    ) -> httpx.Response:
        if token is None and self._session is not None and self._session.is_expired():
            await self.get_session()
        merged = self._auth_header()
        if token is not None:
            merged["Authorization"] = f"Bearer {token}"
        merged.update(headers or {})

        response = await self._http.request(
            method, path, params=params, json=json, content=content, headers=merged
        )
        if response.is_error:
            raise error_from_response(response)
        return response

    # ============== Identity ==============

    def on_auth_state_change(self, listener: AuthListener) -> Subscription:
        return self.events.subscribe(listener)

    async def _set_session(self, session: Session, event: AuthChangeEvent) -> None:
        self._session = session
        self.storage.save(session)
        await self.events.emit(event, session)

    async def _drop_session(self) -> None:
        had_session = self._session is not None
        self._session = None
        self.storage.clear()
        if had_session:
            await self.events.emit(AuthChangeEvent.SIGNED_OUT, None)

    async def sign_up(self, email: str, password: str, data: dict[str, Any]) -> AuthIdentity:
        """Create an identity. Emits SIGNED_IN when the platform auto-confirms."""
        response = await self._request(
            "POST",
            "/auth/v1/signup",
            json={"email": email, "password": password, "data": data},
        )
        body = response.json()
        if "access_token" in body:
            session = Session.model_validate(body)
            await self._set_session(session, AuthChangeEvent.SIGNED_IN)
            return session.user
        return AuthIdentity.model_validate(body.get("user", body))

    async def sign_in_with_password(self, email: str, password: str) -> Session:
        response = await self._request(
            "POST",
            "/auth/v1/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        session = Session.model_validate(response.json())
        await self._set_session(session, AuthChangeEvent.SIGNED_IN)
        return session

    async def _exchange_refresh_token(self) -> Session:
        current = self._session or self.storage.load()
        if current is None or not current.refresh_token:
            raise PlatformError("Auth session missing!", code="session_not_found", status=400)
        response = await self._request(
            "POST",
            "/auth/v1/token",
            params={"grant_type": "refresh_token"},
            json={"refresh_token": current.refresh_token},
            token=self.anon_key,
        )
        session = Session.model_validate(response.json())
        self._session = session
        self.storage.save(session)
        return session

    async def refresh_session(self) -> Session:
        async with self._refresh_lock:
            session = await self._exchange_refresh_token()
        await self.events.emit(AuthChangeEvent.TOKEN_REFRESHED, session)
        return session

    async def get_session(self) -> Session | None:
        """Return the current session, restoring and refreshing it as needed.

        Concurrent callers share one refresh; listeners are notified after it
        completes.
        """
        if self._session is None:
            self._session = self.storage.load()
        if self._session is None or not self._session.is_expired():
            return self._session

        refreshed: Session | None = None
        rejected: PlatformError | None = None
        async with self._refresh_lock:
            if self._session is not None and self._session.is_expired():
                logger.info("Session expired, refreshing")
                try:
                    refreshed = await self._exchange_refresh_token()
                except PlatformError as e:
                    # A rejected refresh token ends the session; transport errors propagate
                    if e.status is None or not 400 <= e.status < 500:
                        raise
                    rejected = e

        if rejected is not None:
            await self._drop_session()
            raise rejected
        if refreshed is not None:
            await self.events.emit(AuthChangeEvent.TOKEN_REFRESHED, refreshed)
        return self._session

    async def get_user(self) -> AuthIdentity | None:
        """Fetch the authoritative identity for the current session."""
        session = await self.get_session()
        if session is None:
            return None
        response = await self._request("GET", "/auth/v1/user", token=session.access_token)
        return AuthIdentity.model_validate(response.json())

    async def sign_out(self) -> None:
        """Revoke the session remotely and clear it locally."""
        session = self._session or self.storage.load()
        if session is not None:
            try:
                await self._request("POST", "/auth/v1/logout", token=session.access_token)
            except PlatformError as e:
                # Already revoked or expired sessions still sign out locally
                if e.status not in (401, 403, 404):
                    raise
        self._session = session
        await self._drop_session()

    async def resend_signup(self, email: str) -> None:
        await self._request("POST", "/auth/v1/resend", json={"type": "signup", "email": email})

    async def verify_email(self, token_hash: str) -> Session | None:
        response = await self._request(
            "POST", "/auth/v1/verify", json={"type": "email", "token_hash": token_hash}
        )
        body = response.json()
        if "access_token" not in body:
            return None
        session = Session.model_validate(body)
        await self._set_session(session, AuthChangeEvent.SIGNED_IN)
        return session

    async def reset_password_for_email(self, email: str, redirect_to: str | None = None) -> None:
        params = {"redirect_to": redirect_to} if redirect_to else None
        await self._request("POST", "/auth/v1/recover", params=params, json={"email": email})

    # ============== Rows ==============

    @staticmethod
    def _query(
        filters: dict[str, str] | None,
        columns: str,
        order: str | None,
        limit: int | None,
        offset: int | None,
    ) -> dict[str, Any]:
        params: dict[str, Any] = {"select": columns}
        params.update(filters or {})
        if order:
            params["order"] = order
        if limit is not None:
            params["limit"] = limit
        if offset:
            params["offset"] = offset
        return params

    async def select(
        self,
        table: str,
        filters: dict[str, str] | None = None,
        *,
        columns: str = "*",
        order: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[dict[str, Any]]:
        response = await self._request(
            "GET", f"/rest/v1/{table}", params=self._query(filters, columns, order, limit, offset)
        )
        return response.json()

    async def select_single(
        self, table: str, filters: dict[str, str], *, columns: str = "*"
    ) -> dict[str, Any]:
        """Fetch exactly one row; zero or many rows raise code PGRST116."""
        response = await self._request(
            "GET",
            f"/rest/v1/{table}",
            params=self._query(filters, columns, None, None, None),
            headers={"Accept": SINGLE_OBJECT},
        )
        return response.json()

    async def select_maybe_single(
        self, table: str, filters: dict[str, str], *, columns: str = "*"
    ) -> dict[str, Any] | None:
        rows = await self.select(table, filters, columns=columns, limit=1)
        return rows[0] if rows else None

    async def count(self, table: str, filters: dict[str, str] | None = None) -> int:
        """Exact row count read from the Content-Range header."""
        response = await self._request(
            "HEAD",
            f"/rest/v1/{table}",
            params=self._query(filters, "*", None, None, None),
            headers={"Prefer": "count=exact"},
        )
        match = CONTENT_RANGE_TOTAL.search(response.headers.get("content-range", ""))
        if not match or match.group(1) == "*":
            return 0
        return int(match.group(1))

    async def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        response = await self._request(
            "POST",
            f"/rest/v1/{table}",
            params={"select": "*"},
            json=row,
            headers={"Prefer": "return=representation", "Accept": SINGLE_OBJECT},
        )
        return response.json()

    async def update(
        self, table: str, filters: dict[str, str], values: dict[str, Any], *, single: bool = True
    ) -> Any:
        headers = {"Prefer": "return=representation"}
        if single:
            headers["Accept"] = SINGLE_OBJECT
        params = {"select": "*", **filters}
        response = await self._request(
            "PATCH", f"/rest/v1/{table}", params=params, json=values, headers=headers
        )
        return response.json()

    async def delete(self, table: str, filters: dict[str, str]) -> None:
        if not filters:
            raise ValueError("Refusing to delete without filters")
        await self._request("DELETE", f"/rest/v1/{table}", params=filters)

    async def rpc(self, function: str, args: dict[str, Any] | None = None) -> Any:
        response = await self._request("POST", f"/rest/v1/rpc/{function}", json=args or {})
        if not response.content:
            return None
        return response.json()

    # ============== Storage ==============

    async def upload(
        self, bucket: str, path: str, content: bytes, content_type: str = "application/octet-stream"
    ) -> str:
        response = await self._request(
            "POST",
            f"/storage/v1/object/{bucket}/{path.lstrip('/')}",
            content=content,
            headers={"Content-Type": content_type, "x-upsert": "false"},
        )
        return response.json().get("Key", f"{bucket}/{path}")

    def public_url(self, bucket: str, path: str) -> str:
        return f"{self.url}/storage/v1/object/public/{bucket}/{path.lstrip('/')}"


def _default_storage(settings: Settings) -> SessionStorage:
    if settings.session_file:
        return FileSessionStorage(settings.session_file)
    return MemorySessionStorage()
