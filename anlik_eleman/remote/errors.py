"""Errors raised by the platform client."""

import httpx


class PlatformError(Exception):
    """A non-2xx response from the hosted platform."""

    def __init__(self, message: str, code: str | None = None, status: int | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status

    def __repr__(self) -> str:
        return f"PlatformError(message={self.message!r}, code={self.code!r}, status={self.status!r})"


def error_from_response(response: httpx.Response) -> PlatformError:
    """Build a PlatformError from an error response body.

    The identity service and the REST layer use different body shapes:
    identity errors carry ``msg``/``error_code`` or OAuth-style
    ``error``/``error_description``; REST errors carry ``message``/``code``.
    """
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    message = (
        body.get("msg")
        or body.get("error_description")
        or body.get("message")
        or body.get("error")
        or response.reason_phrase
        or f"HTTP {response.status_code}"
    )
    code = body.get("code") or body.get("error_code")
    if code is not None:
        code = str(code)
    return PlatformError(str(message), code=code, status=response.status_code)
