# propfeed/adapters/clients/http_fetch.py
from __future__ import annotations

import logging
from typing import Any

import httpx

from ...config import settings
from ...errors import FetchError

log = logging.getLogger(__name__)


def redact_url(url: str) -> str:
    """Hide the access_token query value before a URL reaches the logs."""
    try:
        u = httpx.URL(url)
    except httpx.InvalidURL:
        return "<invalid url>"
    if "access_token" not in u.params:
        return url
    return str(u.copy_set_param("access_token", "***"))


async def fetch_json(
    url: str,
    *,
    timeout_s: float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict[str, Any]:
    """
    Single GET, no retries. Returns the JSON object body of a 2xx response.

    Any transport failure, non-2xx status or non-object body raises FetchError.
    """
    timeout = httpx.Timeout(float(timeout_s if timeout_s is not None else settings.HTTP_TIMEOUT_S))
    safe_url = redact_url(url)
    hdrs = {"accept": "application/json"}

    log.debug("GET %s", safe_url)
    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            resp = await client.get(url, headers=hdrs)
    except httpx.TimeoutException as e:
        raise FetchError(f"timeout after {timeout.read}s: GET {safe_url}", url=safe_url) from e
    except httpx.HTTPError as e:
        raise FetchError(f"request failed: GET {safe_url}: {type(e).__name__}: {e}", url=safe_url) from e
    except httpx.InvalidURL as e:
        raise FetchError(f"invalid URL: {safe_url}: {e}", url=safe_url) from e

    if not resp.is_success:
        raise FetchError(
            f"HTTP {resp.status_code} from GET {safe_url}",
            url=safe_url,
            status_code=resp.status_code,
        )

    try:
        data = resp.json()
    except ValueError as e:
        raise FetchError(f"response body is not valid JSON: GET {safe_url}", url=safe_url, status_code=resp.status_code) from e

    if not isinstance(data, dict):
        raise FetchError(
            f"expected a JSON object, got {type(data).__name__}: GET {safe_url}",
            url=safe_url,
            status_code=resp.status_code,
        )

    return data
