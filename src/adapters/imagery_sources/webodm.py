"""Imagery origin: WebODM orthophotos.

Each task exposes `/api/projects/{project}/tasks/{task}/orthophoto/tiles.json`.
Tile templates are host-relative, so they are prefixed with the WebODM
origin.
"""

from __future__ import annotations

import asyncio
import logging

import httpx

from adapters.http_client import fetch_all_json
from adapters.imagery_sources.discovery import discover_webodm_tasks
from core.config import AppSettings
from core.domain.models import ImagerySource, TileJSON
from core.interfaces.provider import ImageryProvider
from core.services.normalizer import tilejson_to_source

logger = logging.getLogger(__name__)


class WebOdmProvider(ImageryProvider):
    name = "webodm"

    def __init__(self, settings: AppSettings | None = None) -> None:
        self._settings = settings or AppSettings()

    @property
    def origin(self) -> str:
        return f"http://{self._settings.webodm_fqdn}"

    def urls(self) -> list[str]:
        return [
            f"{self.origin}/api/projects/{task}/orthophoto/tiles.json"
            for task in discover_webodm_tasks(self._settings.webodm_project_path)
        ]

    async def fetch(self, client: httpx.AsyncClient) -> list[ImagerySource]:
        urls = await asyncio.to_thread(self.urls)
        bodies = await fetch_all_json(
            client,
            urls,
            max_concurrency=self._settings.max_concurrency,
        )
        logger.debug("webodm: %d of %d orthophotos", len(bodies), len(urls))
        return [
            tilejson_to_source(TileJSON.model_validate(body), prefix=self.origin)
            for body in bodies
        ]
