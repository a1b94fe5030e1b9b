"""
Auth state change channel.

Listeners subscribe with an async callback and receive every change the
client observes (sign in, sign out, token refresh). Each subscription is
owned by the subscriber and cancelled through ``unsubscribe()``.
"""

import itertools
import logging
from collections.abc import Awaitable, Callable
from enum import Enum

from anlik_eleman.remote.models import Session

logger = logging.getLogger(__name__)


class AuthChangeEvent(str, Enum):
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
    USER_UPDATED = "USER_UPDATED"
    PASSWORD_RECOVERY = "PASSWORD_RECOVERY"


AuthListener = Callable[[AuthChangeEvent, Session | None], Awaitable[None]]


class Subscription:
    """Handle returned by ``AuthEventChannel.subscribe``."""

    def __init__(self, channel: "AuthEventChannel", subscription_id: int):
        self._channel = channel
        self.id = subscription_id

    @property
    def active(self) -> bool:
        return self.id in self._channel._listeners

    def unsubscribe(self) -> None:
        self._channel._listeners.pop(self.id, None)


class AuthEventChannel:
    """Observer registry for auth state changes."""

    def __init__(self) -> None:
        self._listeners: dict[int, AuthListener] = {}
        self._ids = itertools.count(1)

    def subscribe(self, listener: AuthListener) -> Subscription:
        subscription_id = next(self._ids)
        self._listeners[subscription_id] = listener
        return Subscription(self, subscription_id)

    async def emit(self, event: AuthChangeEvent, session: Session | None) -> None:
        """Deliver an event to every listener in subscription order."""
        for subscription_id, listener in list(self._listeners.items()):
            if subscription_id not in self._listeners:
                continue
            try:
                await listener(event, session)
            except Exception:
                logger.exception(f"Auth listener {subscription_id} failed on {event.value}")
