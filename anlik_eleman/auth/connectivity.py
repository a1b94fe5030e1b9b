"""Network availability check used before identity calls."""

import asyncio
import logging
import socket
from collections.abc import Awaitable, Callable
from urllib.parse import urlparse

from anlik_eleman.config import PLACEHOLDER_URL

logger = logging.getLogger(__name__)

OnlineCheck = Callable[[], Awaitable[bool]]


async def host_reachable(url: str) -> bool:
    """True when the platform host name resolves.

    An unconfigured URL counts as reachable so that the façade can report
    the configuration problem instead.
    """
    if not url or url.rstrip("/") == PLACEHOLDER_URL:
        return True
    parsed = urlparse(url)
    host = parsed.hostname
    if not host:
        return True
    port = parsed.port or (443 if parsed.scheme == "https" else 80)
    try:
        await asyncio.get_running_loop().getaddrinfo(host, port, type=socket.SOCK_STREAM)
    except OSError as e:
        logger.warning(f"Platform host {host} unreachable: {e}")
        return False
    return True


def online_check_for(url: str) -> OnlineCheck:
    async def check() -> bool:
        return await host_reachable(url)

    return check


async def always_online() -> bool:
    return True
