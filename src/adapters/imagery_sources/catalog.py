"""Imagery origin: imagery catalog API (`/imagery`).

The catalog answers a JSON object keyed by tileset; only tilesets whose
ingestion succeeded are published. The tileset name becomes the id and
the uploader's name, when known, the display name.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from adapters.http_client import fetch_json
from core.config import AppSettings
from core.domain.models import CatalogMeta, ImagerySource, TileJSON
from core.interfaces.provider import ImageryProvider
from core.services.normalizer import tilejson_to_source

logger = logging.getLogger(__name__)

INGEST_SUCCESS = "SUCCESS"


def is_published(raw: Any) -> bool:
    """Whether a raw catalog entry finished ingesting."""

    if not isinstance(raw, dict) or not isinstance(raw.get("meta"), dict):
        return False
    return CatalogMeta.model_validate(raw["meta"]).ingest_state == INGEST_SUCCESS


def catalog_entry_to_source(entry: TileJSON) -> ImagerySource:
    renamed = entry.model_copy(update={"id": entry.name})
    meta = entry.meta
    if meta is not None and meta.user is not None and meta.user.name:
        renamed = renamed.model_copy(update={"name": meta.user.name})
    return tilejson_to_source(renamed)


def parse_catalog(body: Any) -> list[ImagerySource]:
    if not isinstance(body, dict):
        raise ValueError("imagery catalog: expected a JSON object")

    return [
        catalog_entry_to_source(TileJSON.model_validate(raw))
        for raw in body.values()
        if is_published(raw)
    ]


class ImageryCatalogProvider(ImageryProvider):
    name = "catalog"

    def __init__(self, settings: AppSettings | None = None) -> None:
        self._settings = settings or AppSettings()

    @property
    def url(self) -> str:
        return f"http://{self._settings.posm_fqdn}/imagery"

    async def fetch(self, client: httpx.AsyncClient) -> list[ImagerySource]:
        body = await fetch_json(client, self.url)
        if body is None:
            return []
        sources = parse_catalog(body)
        logger.debug("catalog: %d published tilesets", len(sources))
        return sources
