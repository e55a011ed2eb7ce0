"""Imagery aggregation pipeline.

discover -> fetch (bounded parallel, per origin) -> normalize -> sort.

The origins run concurrently; inside each origin at most
`settings.max_concurrency` requests are in flight. Network errors are not
caught here: they abort the whole run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Sequence

import httpx

from adapters.http_client import build_async_client, gather_or_cancel
from adapters.imagery_sources import ImageryCatalogProvider, TesseraProvider, WebOdmProvider
from core.config import AppSettings
from core.domain.models import ImageryDocument, ImagerySource
from core.interfaces.provider import ImageryProvider
from core.services.normalizer import convert_sources

logger = logging.getLogger(__name__)


@dataclass
class CollectResult:
    """Raw sources gathered from every origin, in origin order."""

    sources: list[ImagerySource] = field(default_factory=list)
    counts: dict[str, int] = field(default_factory=dict)


def default_providers(settings: AppSettings) -> list[ImageryProvider]:
    return [
        TesseraProvider(settings),
        ImageryCatalogProvider(settings),
        WebOdmProvider(settings),
    ]


async def collect_sources(
    client: httpx.AsyncClient,
    providers: Sequence[ImageryProvider],
) -> CollectResult:
    groups = await gather_or_cancel(*(provider.fetch(client) for provider in providers))

    result = CollectResult()
    for provider, sources in zip(providers, groups):
        result.counts[provider.name] = len(sources)
        result.sources.extend(sources)
    logger.info("Collected %d sources %s", len(result.sources), result.counts)
    return result


async def build_imagery_document(
    *,
    settings: AppSettings,
    client: httpx.AsyncClient | None = None,
    providers: Sequence[ImageryProvider] | None = None,
    now: datetime | None = None,
) -> ImageryDocument:
    """Run the whole pipeline and return the editor document."""

    providers = list(providers) if providers is not None else default_providers(settings)

    if client is None:
        async with build_async_client(settings) as own_client:
            collected = await collect_sources(own_client, providers)
    else:
        collected = await collect_sources(client, providers)

    imagery = convert_sources(
        collected.sources,
        extra_sources=settings.extra_sources,
        blocklist=settings.blocklist,
        now=now,
        max_age_years=settings.max_age_years,
    )
    return ImageryDocument(data_imagery=imagery)
