"""
Result type and the error boundary shared by every façade request.

Requests never raise: platform errors, transport errors and unexpected
exceptions all come back as ``Result(data=None, error=ServiceError(...))``
carrying a localized message.
"""

import functools
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, ParamSpec, TypeVar

import httpx

from anlik_eleman.db import messages
from anlik_eleman.remote.errors import PlatformError

logger = logging.getLogger(__name__)

# "JSON object requested, multiple (or no) rows returned"
NOT_FOUND_CODE = "PGRST116"
NETWORK_CODE = "network"
TIMEOUT_CODE = "timeout"
NOT_CONFIGURED_CODE = "not_configured"
VALIDATION_CODE = "validation"

T = TypeVar("T")
P = ParamSpec("P")


@dataclass(frozen=True)
class ServiceError:
    message: str
    code: str | None = None


@dataclass(frozen=True)
class Result(Generic[T]):
    """A ``{data, error}`` pair; exactly one side is meaningful."""

    data: T | None = None
    error: ServiceError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def is_not_found(self) -> bool:
        return self.error is not None and self.error.code == NOT_FOUND_CODE

    @classmethod
    def success(cls, data: T | None = None) -> "Result[T]":
        return cls(data=data)

    @classmethod
    def failure(cls, message: str, code: str | None = None, data: T | None = None) -> "Result[T]":
        return cls(data=data, error=ServiceError(message, code))


Localizer = Callable[[PlatformError, str], str]


def service_call(
    fallback: str,
    *,
    localize: Localizer = messages.localize_data_error,
    not_configured: str | None = None,
    quiet_codes: tuple[str, ...] = (),
    default_factory: Callable[[], Any] | None = None,
) -> Callable[[Callable[P, Awaitable[Result[T]]]], Callable[P, Awaitable[Result[T]]]]:
    """Wrap a request so that it always returns a ``Result``.

    Args:
        fallback: Localized message for this operation
        localize: Maps a platform error to the message shown to the user
        not_configured: When set, short-circuit with this message if the
            platform is not configured (first argument must be the client)
        quiet_codes: Platform error codes that are expected and not logged
        default_factory: Builds the ``data`` carried alongside an error, called
            once per failure (e.g. ``int`` for counts, ``list`` for listings)
    """

    def decorator(func: Callable[P, Awaitable[Result[T]]]) -> Callable[P, Awaitable[Result[T]]]:
        label = func.__name__

        def failure(message: str, code: str | None) -> Result[T]:
            data = default_factory() if default_factory is not None else None
            return Result.failure(message, code, data)

        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> Result[T]:
            if not_configured is not None and args and not getattr(args[0], "is_configured", True):
                return failure(not_configured, NOT_CONFIGURED_CODE)
            try:
                return await func(*args, **kwargs)
            except PlatformError as e:
                if e.code not in quiet_codes:
                    logger.error(f"{label} error: {e.message} (code={e.code}, status={e.status})")
                return failure(localize(e, fallback), e.code)
            except httpx.TimeoutException as e:
                logger.error(f"{label} timed out: {e!r}")
                return failure(messages.REQUEST_TIMED_OUT, TIMEOUT_CODE)
            except httpx.TransportError as e:
                logger.error(f"{label} network error: {e!r}")
                return failure(messages.NETWORK_ERROR, NETWORK_CODE)
            except Exception:
                logger.exception(f"{label} failed unexpectedly")
                return failure(fallback, None)

        return wrapper

    return decorator
