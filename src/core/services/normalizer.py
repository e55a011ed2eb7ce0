"""Normalization of imagery sources into the editor schema.

Two steps:
- `tilejson_to_source`: one TileJSON descriptor (tile server, catalog,
  WebODM) into the common `ImagerySource` record.
- `convert_sources`: filter, map and sort `ImagerySource` records into
  `EditorImagery` entries.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping

from core.domain.models import (
    Attribution,
    BoundingBox,
    EditorImagery,
    Extent,
    ImagerySource,
    TileJSON,
)

logger = logging.getLogger(__name__)

SUPPORTED_TYPES: frozenset[str] = frozenset({"tms", "bing"})

# Fallback descriptions for well-known layers that ship without one.
DESCRIPTIONS: dict[str, str] = {
    "Bing": "Satellite and aerial imagery.",
    "Mapbox": "Satellite and aerial imagery.",
    "MAPNIK": "The default OpenStreetMap layer.",
}

NO_OVERZOOM_IDS: frozenset[str] = frozenset({"mapbox_locator_overlay"})

DEFAULT_MIN_ZOOM = 0
DEFAULT_MAX_ZOOM = 20

_YEAR_RE = re.compile(r"^\d{4}$")
_YEAR_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")


def tilejson_to_source(tilejson: TileJSON, prefix: str = "") -> ImagerySource:
    """Map a TileJSON descriptor to an `ImagerySource`.

    `prefix` is prepended to the first tile URL (WebODM serves relative
    templates).
    """

    bbox = BoundingBox.from_bounds(tilejson.bounds) if tilejson.bounds else None
    return ImagerySource(
        id=tilejson.id or tilejson.name,
        name=tilejson.name,
        description=tilejson.description,
        type="tms",
        url=prefix + tilejson.tiles[0],
        default=True,
        attribution=Attribution(text=tilejson.attribution),
        extent=Extent(
            min_zoom=tilejson.minzoom,
            max_zoom=tilejson.maxzoom,
            bbox=bbox,
        ),
    )


def parse_end_date(value: str) -> datetime | None:
    """Parse an imagery `end_date`; `None` when it is not a date.

    Accepts `YYYY`, `YYYY-MM` and ISO-8601 dates/datetimes. Naive values
    are taken as UTC.
    """

    text = value.strip()
    try:
        if _YEAR_RE.match(text):
            parsed = datetime(int(text), 1, 1)
        elif match := _YEAR_MONTH_RE.match(text):
            parsed = datetime(int(match.group(1)), int(match.group(2)), 1)
        else:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def cutoff_date(now: datetime, years: int) -> datetime:
    """`now` moved back by `years` calendar years (Feb 29 rolls to Mar 1)."""

    try:
        return now.replace(year=now.year - years)
    except ValueError:
        return now.replace(year=now.year - years, month=3, day=1)


def _is_expired(source: ImagerySource, cutoff: datetime) -> bool:
    if not source.end_date:
        return False
    end = parse_end_date(source.end_date)
    return end is not None and end <= cutoff


def to_editor_imagery(source: ImagerySource) -> EditorImagery:
    """Map one (already filtered) source to the editor schema."""

    imagery = EditorImagery(
        id=source.id,
        name=source.name,
        type=source.type,
        template=source.url,
        description=source.description or DESCRIPTIONS.get(source.id),
    )

    extent = source.extent or Extent()
    # A zoom of 0 counts as absent.
    if extent.min_zoom or extent.max_zoom:
        imagery.scale_extent = (
            extent.min_zoom or DEFAULT_MIN_ZOOM,
            extent.max_zoom or DEFAULT_MAX_ZOOM,
        )

    if extent.polygon:
        imagery.polygon = extent.polygon
    elif extent.bbox:
        imagery.polygon = extent.bbox.to_polygon()

    if source.id in NO_OVERZOOM_IDS:
        imagery.overzoom = False

    attribution = source.attribution or Attribution()
    imagery.terms_url = attribution.url or None
    imagery.terms_text = attribution.text or None
    imagery.terms_html = attribution.html or None

    for flag in ("default", "overlay", "best"):
        if getattr(source, flag):
            setattr(imagery, flag, True)

    return imagery


def sort_key(imagery: EditorImagery) -> tuple[str, str]:
    return (imagery.name.casefold(), imagery.name)


def convert_sources(
    sources: Iterable[ImagerySource | None],
    *,
    extra_sources: Iterable[Mapping[str, Any]] = (),
    blocklist: Iterable[str] = (),
    now: datetime | None = None,
    max_age_years: int = 20,
) -> list[EditorImagery]:
    """Filter, map and sort sources for the editor.

    Dropped: `None` entries, unsupported types, blocklisted ids and
    imagery whose `end_date` is at or before the age cutoff.
    """

    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    cutoff = cutoff_date(now, max_age_years)
    blocked = set(blocklist)

    candidates: list[ImagerySource | None] = list(sources)
    candidates.extend(ImagerySource.model_validate(extra) for extra in extra_sources)

    out: list[EditorImagery] = []
    for source in candidates:
        if source is None or source.type not in SUPPORTED_TYPES:
            continue
        if source.id in blocked:
            continue
        if _is_expired(source, cutoff):
            logger.debug("Dropping %s: end_date %s is too old", source.id, source.end_date)
            continue
        out.append(to_editor_imagery(source))

    out.sort(key=sort_key)
    return out
