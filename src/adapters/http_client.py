"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers y la política de respuestas de todos los
  orígenes.
- Facilita testeo: el transporte se puede sustituir por `httpx.MockTransport`.

Política:
- 200 -> cuerpo JSON decodificado.
- cualquier otro status -> `None` (se omite en silencio, no es error).
- errores de transporte (DNS, conexión rechazada, timeout) se propagan y
  abortan la ejecución. Sin reintentos.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Sequence, TypeVar

import httpx

from core.config import AppSettings

logger = logging.getLogger(__name__)

T = TypeVar("T")


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with the project defaults."""

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


async def fetch_json(client: httpx.AsyncClient, url: str) -> Any | None:
    """GET `url` and decode its JSON body; `None` unless the status is 200."""

    resp = await client.get(url)
    if resp.status_code != 200:
        logger.debug("Skipping %s: HTTP %s", url, resp.status_code)
        return None
    return resp.json()


async def fetch_all_json(
    client: httpx.AsyncClient,
    urls: Sequence[str],
    *,
    max_concurrency: int = 8,
) -> list[Any]:
    """Fetch many URLs with at most `max_concurrency` requests in flight.

    Results keep the order of `urls`; non-200 responses are left out.
    """

    sem = asyncio.Semaphore(max(1, max_concurrency))

    async def fetch_one(url: str) -> Any | None:
        async with sem:
            return await fetch_json(client, url)

    results = await gather_or_cancel(*(fetch_one(url) for url in urls))
    return [body for body in results if body is not None]


async def gather_or_cancel(*aws: Awaitable[T]) -> list[T]:
    """Like `asyncio.gather`, but the first failure cancels the siblings.

    No request is left running against a client that is about to close.
    """

    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
