from typing import Any, AsyncIterator, Dict, Optional

import httpx
from fastapi import Depends

from tokenview.config import Settings, get_settings

# -----------------------------------------------------------------------------
# HTTP client
# -----------------------------------------------------------------------------
# Single attempt per call; the client timeout bounds every request.


def get_transport() -> Optional[httpx.AsyncBaseTransport]:
    return None


async def get_http_client(
    config: Settings = Depends(get_settings),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_transport),
) -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(timeout=config.HTTP_TIMEOUT_SECONDS, transport=transport) as client:
        yield client


async def http_post_json(
    client: httpx.AsyncClient,
    url: str,
    json: Dict[str, Any],
    headers: Optional[Dict[str, str]] = None,
) -> Any:
    r = await client.post(url, json=json, headers=headers)
    r.raise_for_status()
    return r.json()


async def http_get_json(
    client: httpx.AsyncClient,
    url: str,
    headers: Optional[Dict[str, str]] = None,
    params: Optional[Dict[str, Any]] = None,
) -> Any:
    r = await client.get(url, headers=headers, params=params)
    r.raise_for_status()
    return r.json()


def describe_http_error(e: Exception) -> str:
    if isinstance(e, httpx.HTTPStatusError):
        return f"HTTP {e.response.status_code} from {e.request.url.host}"
    if isinstance(e, httpx.TimeoutException):
        return f"timeout: {e!r}"
    return str(e) or e.__class__.__name__
