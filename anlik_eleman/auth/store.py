"""
Session store: the current user, kept in sync with the identity service.

One store serves one client. It restores the session on ``init()``,
follows auth changes reported by the identity service, and makes sure a
profile exists for every signed-in identity, provisioning it (and an
employer's company) on first sight.

The startup routine, auth-change handling and every profile reload run
under one ``asyncio.Lock``, so they never interleave on the shared state;
whichever finishes last defines the final state.

The identity service delivers auth changes inline, possibly from inside a
call the store made while holding the lock (a token refresh during startup,
for example). The listener therefore only queues the change; a single
consumer task applies queued changes in order. ``settled()`` waits for the
queue to drain. After ``dispose()`` late responses are dropped instead of
written.
"""

import asyncio
import logging
from typing import Any

from anlik_eleman.auth.connectivity import OnlineCheck, always_online
from anlik_eleman.auth.gateway import AuthGateway
from anlik_eleman.auth.provisioning import (
    CompanyProvisioning,
    CompanyProvisioningStatus,
    build_profile_row,
    provision_company,
)
from anlik_eleman.auth.state import BUSY_PHASES, TRANSITIONS, AuthPhase, AuthState, transition, update
from anlik_eleman.db import messages
from anlik_eleman.db.base import VALIDATION_CODE, Result, ServiceError
from anlik_eleman.db.rows import Profile
from anlik_eleman.remote import AuthIdentity, Session
from anlik_eleman.remote.events import AuthChangeEvent, Subscription

logger = logging.getLogger(__name__)

FIRST_NAME_REQUIRED = "Ad alanı zorunludur"
LAST_NAME_REQUIRED = "Soyad alanı zorunludur"
EMAIL_REQUIRED = "E-posta adresi gereklidir"
PASSWORD_REQUIRED = "Şifre gereklidir"


def _blank(value: Any) -> bool:
    return not value or not str(value).strip()


class SessionStore:
    """Owner of the shared ``AuthState``; pages only read ``state``."""

    def __init__(self, gateway: AuthGateway, online_check: OnlineCheck = always_online):
        self._gateway = gateway
        self._online_check = online_check
        self._state = AuthState()
        self._mounted = False
        self._disposed = False
        self._lock: asyncio.Lock | None = None
        self._changes: asyncio.Queue[tuple[AuthChangeEvent, Session | None]] | None = None
        self._consumer: asyncio.Task[None] | None = None
        self._subscription: Subscription | None = None
        self.last_company_provisioning: CompanyProvisioning | None = None

    @property
    def state(self) -> AuthState:
        return self._state

    @property
    def mounted(self) -> bool:
        return self._mounted

    # ============== Lifecycle ==============

    async def init(self) -> None:
        """Subscribe to auth changes and restore the current session."""
        if self._mounted:
            return
        if self._disposed:
            raise RuntimeError("SessionStore cannot be initialized again after dispose()")

        self._mounted = True
        self._lock = asyncio.Lock()
        self._changes = asyncio.Queue()
        self._consumer = asyncio.create_task(self._consume_auth_changes())
        self._subscription = self._gateway.on_auth_state_change(self._on_auth_change)
        await self._initialize()
        await self.settled()

    def dispose(self) -> None:
        """Stop listening; responses still in flight are discarded."""
        self._mounted = False
        self._disposed = True
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        if self._consumer is not None:
            self._consumer.cancel()
            self._consumer = None
        if self._changes is not None:
            while not self._changes.empty():
                self._changes.get_nowait()
                self._changes.task_done()

    async def settled(self) -> None:
        """Wait until every auth change received so far has been applied.

        Must not be awaited while holding the store lock.
        """
        if self._changes is not None:
            await self._changes.join()

    def _require_mounted(self) -> asyncio.Lock:
        if not self._mounted or self._lock is None:
            raise RuntimeError("SessionStore is not initialized; call init() first")
        return self._lock

    # ============== State writes ==============

    def _commit(self, phase: AuthPhase, **changes: Any) -> bool:
        if not self._mounted:
            logger.debug(f"Store disposed, dropping transition to {phase.value}")
            return False
        previous = self._state.phase
        self._state = transition(self._state, phase, **changes)
        logger.debug(f"Auth phase {previous.value} -> {phase.value}")
        return True

    def _patch(self, **changes: Any) -> bool:
        if not self._mounted:
            return False
        self._state = update(self._state, **changes)
        return True

    def _fail(self, message: str) -> None:
        """Surface an unexpected failure, entering ERRORED when the phase allows it."""
        if AuthPhase.ERRORED in TRANSITIONS[self._state.phase]:
            self._commit(AuthPhase.ERRORED, loading=False, error=message)
        else:
            self._patch(loading=False, error=message)

    def _reject(self, message: str) -> Result[Any]:
        self._patch(error=message)
        return Result.failure(message, VALIDATION_CODE)

    def _finish_operation(self) -> None:
        # A queued auth change may still be loading; it clears the flag itself
        if self._state.phase not in BUSY_PHASES:
            self._patch(loading=False)

    # ============== Bootstrap ==============

    async def _initialize(self) -> None:
        async with self._require_mounted():
            self._commit(AuthPhase.INITIALIZING, loading=True, error=None)
            logger.info("Initializing auth...")
            try:
                result = await self._gateway.get_session()
                if not self._mounted:
                    return

                if result.error:
                    logger.error(f"Session error: {result.error.message}")
                    self._commit(
                        AuthPhase.ERRORED,
                        user=None,
                        profile=None,
                        session=None,
                        loading=False,
                        error=messages.SESSION_LOAD_FAILED,
                    )
                    return

                session = result.data
                if session is None:
                    logger.info("No user in session")
                    self._commit(
                        AuthPhase.ANONYMOUS, user=None, profile=None, session=None, loading=False
                    )
                    return

                logger.info("User found in session, loading profile...")
                await self._load_profile(session.user.id, session=session, user=session.user)
            except Exception:
                logger.exception("Initialize auth error")
                self._fail(messages.AUTH_INIT_FAILED)

    async def _on_auth_change(self, event: AuthChangeEvent, session: Session | None) -> None:
        if not self._mounted or self._changes is None:
            return
        email = session.user.email if session else None
        logger.info(f"Auth state changed: {event.value} {email}")
        self._changes.put_nowait((event, session))

    async def _consume_auth_changes(self) -> None:
        while True:
            event, session = await self._changes.get()
            try:
                await self._apply_auth_change(event, session)
            finally:
                self._changes.task_done()

    async def _apply_auth_change(self, event: AuthChangeEvent, session: Session | None) -> None:
        async with self._lock:
            if not self._mounted:
                return
            try:
                if session is not None:
                    await self._load_profile(
                        session.user.id, session=session, user=session.user, error=None
                    )
                else:
                    self._commit(
                        AuthPhase.ANONYMOUS,
                        session=None,
                        user=None,
                        profile=None,
                        loading=False,
                        error=None,
                    )
            except Exception:
                logger.exception("Auth state change error")
                self._fail(messages.AUTH_CHANGE_FAILED)

    async def _load_profile(self, user_id: str, **changes: Any) -> None:
        """Fetch the profile; a missing row starts provisioning. Caller holds the lock."""
        if not self._commit(AuthPhase.LOADING_PROFILE, loading=True, **changes):
            return
        logger.info(f"Loading profile for user: {user_id}")

        result = await self._gateway.get_profile_by_id(user_id)
        if not self._mounted:
            return

        if result.error is None:
            logger.info(f"Profile loaded successfully: {user_id}")
            self._commit(AuthPhase.READY, profile=result.data, loading=False)
        elif result.is_not_found:
            await self._provision(user_id)
        else:
            logger.error(f"Error loading profile: {result.error.message}")
            self._commit(AuthPhase.ERRORED, loading=False, error=messages.PROFILE_LOAD_FAILED)

    async def _provision(self, user_id: str) -> None:
        self._commit(AuthPhase.PROVISIONING)
        logger.info(f"Profile not found, creating profile for user: {user_id}")

        identity = await self._gateway.get_current_identity()
        if not self._mounted:
            return
        if identity.error or identity.data is None:
            reason = identity.error.message if identity.error else "no identity"
            logger.error(f"Cannot read signup metadata for {user_id}: {reason}")
            self._commit(AuthPhase.ERRORED, loading=False, error=messages.PROFILE_CREATE_UNEXPECTED)
            return

        metadata = identity.data.user_metadata or {}
        created = await self._gateway.insert_profile(build_profile_row(user_id, metadata))
        if not self._mounted:
            return
        if created.error:
            logger.error(f"Create profile error: {created.error.message}")
            self._commit(AuthPhase.ERRORED, loading=False, error=created.error.message)
            return

        profile = created.data
        self._commit(AuthPhase.READY, profile=profile, loading=False)
        logger.info(f"Profile created successfully: {profile.id}")

        if profile.user_type == "employer":
            self.last_company_provisioning = await self._provision_company(profile, metadata)

    async def _provision_company(self, profile: Profile, metadata: dict[str, Any]) -> CompanyProvisioning:
        try:
            outcome = await provision_company(self._gateway, profile, metadata)
        except Exception as e:
            logger.exception(f"Create company for employer {profile.id} error")
            outcome = CompanyProvisioning(CompanyProvisioningStatus.FAILED, error=ServiceError(str(e)))

        if outcome.failed:
            message = outcome.error.message if outcome.error else "unknown"
            logger.warning(
                f"Company creation failed for {profile.id}, but the profile was created: {message}"
            )
        elif outcome.status is CompanyProvisioningStatus.CREATED:
            logger.info(f"Company created successfully for employer: {profile.id}")
        return outcome

    # ============== Operations ==============

    async def sign_up(
        self, email: str, password: str, attributes: dict[str, Any]
    ) -> Result[AuthIdentity]:
        """Register a new identity; loads the profile at once if already confirmed."""
        lock = self._require_mounted()
        self._patch(loading=True, error=None)
        try:
            if _blank(attributes.get("first_name")):
                return self._reject(FIRST_NAME_REQUIRED)
            if _blank(attributes.get("last_name")):
                return self._reject(LAST_NAME_REQUIRED)
            if not await self._online_check():
                return self._reject(messages.OFFLINE)

            result = await self._gateway.sign_up_identity(email, password, attributes)
            if result.error:
                logger.error(f"Sign up error: {result.error.message}")
                self._patch(error=result.error.message)
                return result

            identity = result.data
            if identity is not None and identity.is_confirmed:
                logger.info(f"User confirmed immediately, loading profile: {identity.id}")
                async with lock:
                    if self._mounted:
                        await self._load_profile(identity.id, user=identity)
                await self.settled()
            else:
                logger.info("User not confirmed yet, profile will be created on confirmation")
            return result
        except Exception:
            logger.exception("Sign up error")
            self._fail(messages.SIGNUP_UNEXPECTED)
            return Result.failure(messages.SIGNUP_UNEXPECTED)
        finally:
            self._finish_operation()

    async def sign_in(self, email: str, password: str) -> Result[AuthIdentity]:
        """Authenticate. The profile is loaded by the resulting auth change event."""
        self._require_mounted()
        self._patch(loading=True, error=None)
        try:
            if _blank(email):
                return self._reject(EMAIL_REQUIRED)
            if not password:
                return self._reject(PASSWORD_REQUIRED)
            if not await self._online_check():
                return self._reject(messages.OFFLINE)

            result = await self._gateway.sign_in_identity(email.strip(), password)
            if result.error:
                logger.error(f"Sign in error: {result.error.message}")
                self._patch(error=result.error.message)
            else:
                logger.info("Sign in successful")
                await self.settled()
            return result
        except Exception:
            logger.exception("Sign in error")
            self._patch(error=messages.SIGNIN_UNEXPECTED)
            return Result.failure(messages.SIGNIN_UNEXPECTED)
        finally:
            self._finish_operation()

    async def sign_out(self) -> Result[None]:
        """Sign out remotely; on success clear the local user without waiting for the event."""
        lock = self._require_mounted()
        self._patch(loading=True, error=None)
        try:
            result = await self._gateway.sign_out_identity()
            if result.error:
                logger.error(f"Sign out error: {result.error.message}")
                self._patch(error=messages.SIGNOUT_FAILED)
                return result

            async with lock:
                self._commit(
                    AuthPhase.ANONYMOUS, user=None, profile=None, session=None, loading=False
                )
            await self.settled()
            logger.info("Sign out successful")
            return result
        except Exception:
            logger.exception("Sign out error")
            self._patch(error=messages.SIGNOUT_UNEXPECTED)
            return Result.failure(messages.SIGNOUT_UNEXPECTED)
        finally:
            self._finish_operation()

    async def update_profile(self, updates: dict[str, Any]) -> Result[Profile]:
        """Write profile changes, then re-read the whole profile."""
        lock = self._require_mounted()
        user = self._state.user
        if user is None:
            self._patch(error=messages.NO_ACTIVE_USER)
            return Result.failure(messages.NO_ACTIVE_USER, "no_user")

        self._patch(error=None)
        try:
            result = await self._gateway.update_profile(user.id, updates)
            if result.error:
                logger.error(f"Update profile error: {result.error.message}")
                self._patch(error=messages.PROFILE_UPDATE_FAILED)
                return result

            async with lock:
                if self._mounted:
                    await self._load_profile(user.id)
            logger.info("Profile updated successfully")
            return result
        except Exception:
            logger.exception("Update profile error")
            self._fail(messages.PROFILE_UPDATE_UNEXPECTED)
            return Result.failure(messages.PROFILE_UPDATE_UNEXPECTED)

    def clear_error(self) -> None:
        self._patch(error=None)
