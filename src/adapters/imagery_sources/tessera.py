"""Imagery origin: local tile server (Tessera).

Each mount path serves a TileJSON descriptor at `{path}/index.json`.
"""

from __future__ import annotations

import asyncio
import logging

import httpx

from adapters.http_client import fetch_all_json
from adapters.imagery_sources.discovery import discover_tessera_paths
from core.config import AppSettings
from core.domain.models import ImagerySource, TileJSON
from core.interfaces.provider import ImageryProvider
from core.services.normalizer import tilejson_to_source

logger = logging.getLogger(__name__)


class TesseraProvider(ImageryProvider):
    name = "tessera"

    def __init__(self, settings: AppSettings | None = None) -> None:
        self._settings = settings or AppSettings()

    def urls(self) -> list[str]:
        fqdn = self._settings.posm_fqdn
        return [
            f"http://{fqdn}{path}/index.json"
            for path in discover_tessera_paths(self._settings.tessera_config_dir)
        ]

    async def fetch(self, client: httpx.AsyncClient) -> list[ImagerySource]:
        urls = await asyncio.to_thread(self.urls)
        bodies = await fetch_all_json(
            client,
            urls,
            max_concurrency=self._settings.max_concurrency,
        )
        logger.debug("tessera: %d of %d descriptors", len(bodies), len(urls))
        return [tilejson_to_source(TileJSON.model_validate(body)) for body in bodies]
