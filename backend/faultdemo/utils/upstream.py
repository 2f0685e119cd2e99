from __future__ import annotations

from typing import Any, AsyncIterator

import httpx

from faultdemo import config


class UpstreamError(Exception):
    """An upstream call in the price chain did not produce usable JSON."""

    def __init__(self, service: str, url: str, reason: str, status: int | None = None, body: str = ""):
        super().__init__(f"Fetch failed ({status or reason}) {url}")
        self.service = service
        self.url = url
        self.reason = reason
        self.status = status
        self.body = body


async def get_upstream_client() -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(
        base_url=config.upstream_base_url(),
        timeout=config.upstream_timeout_seconds(),
    ) as client:
        yield client


async def fetch_json(
    client: httpx.AsyncClient,
    service: str,
    url: str,
    params: dict[str, str] | None = None,
    headers: dict[str, str] | None = None,
) -> dict[str, Any]:
    try:
        r = await client.get(url, params=params, headers=headers)
    except httpx.TimeoutException as exc:
        raise UpstreamError(service, url, "TIMEOUT") from exc
    except httpx.ConnectError as exc:
        raise UpstreamError(service, url, "CONNECT_ERROR") from exc
    except httpx.HTTPError as exc:
        raise UpstreamError(service, url, type(exc).__name__) from exc

    if not r.is_success:
        raise UpstreamError(service, url, f"HTTP_{r.status_code}", status=r.status_code, body=r.text)

    try:
        return r.json()
    except ValueError as exc:
        raise UpstreamError(service, url, "INVALID_JSON", status=r.status_code, body=r.text) from exc
