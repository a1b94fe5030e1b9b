"""Hosted platform client package."""

from anlik_eleman.remote.client import PlatformClient, eq, gte, in_, lte, neq, or_
from anlik_eleman.remote.errors import PlatformError
from anlik_eleman.remote.events import AuthChangeEvent, AuthEventChannel, Subscription
from anlik_eleman.remote.models import AuthIdentity, Session
from anlik_eleman.remote.session_storage import FileSessionStorage, MemorySessionStorage

__all__ = [
    "PlatformClient",
    "PlatformError",
    "AuthChangeEvent",
    "AuthEventChannel",
    "Subscription",
    "AuthIdentity",
    "Session",
    "FileSessionStorage",
    "MemorySessionStorage",
    "eq",
    "neq",
    "gte",
    "lte",
    "in_",
    "or_",
]
