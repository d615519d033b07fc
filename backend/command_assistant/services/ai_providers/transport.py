"""
HTTP client factory for provider calls.

All outbound provider requests use a client from create_http_client(), so the
configured timeout applies everywhere and tests can swap in a mock transport.
"""

from typing import Optional

import httpx

from command_assistant.core.config import get_config


def create_http_client(timeout: Optional[float] = None) -> httpx.AsyncClient:
    """Return a new AsyncClient; callers close it with `async with`."""
    if timeout is None:
        timeout = get_config().assistant.request_timeout
    return httpx.AsyncClient(timeout=timeout)
