"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación en el borde de los descriptores remotos (TileJSON, catálogo).
- Serialización estable del documento final (aliases, campos opcionales
  omitidos).

Tres familias:
- Descriptores de entrada (`TileJSON` y el bloque `meta` del catálogo).
- `ImagerySource`: registro común al que se mapea cada origen (forma del
  editor-layer-index: extent, attribution, end_date...).
- `EditorImagery` / `ImageryDocument`: lo que consume el editor.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

Ring = list[list[float]]


class CatalogUser(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str | None = None


class IngestStatus(BaseModel):
    model_config = ConfigDict(extra="ignore")

    state: str | None = None


class CatalogStatus(BaseModel):
    model_config = ConfigDict(extra="ignore")

    ingest: IngestStatus | None = None


class CatalogMeta(BaseModel):
    """`meta` block attached to imagery catalog entries."""

    model_config = ConfigDict(extra="ignore")

    user: CatalogUser | None = None
    status: CatalogStatus | None = None

    @property
    def ingest_state(self) -> str | None:
        if self.status is None or self.status.ingest is None:
            return None
        return self.status.ingest.state


class TileJSON(BaseModel):
    """Tile-service descriptor (TileJSON subset)."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    name: str = Field(..., description="Display name of the tileset.")
    description: str | None = None
    attribution: str | None = None
    bounds: tuple[float, float, float, float] | None = Field(
        default=None,
        description="[min_lon, min_lat, max_lon, max_lat]",
    )
    minzoom: int | None = None
    maxzoom: int | None = None
    tiles: list[str] = Field(..., min_length=1, description="Tile URL templates.")
    meta: CatalogMeta | None = None


class BoundingBox(BaseModel):
    min_lon: float
    min_lat: float
    max_lon: float
    max_lat: float

    @classmethod
    def from_bounds(cls, bounds: tuple[float, float, float, float]) -> "BoundingBox":
        return cls(
            min_lon=bounds[0],
            min_lat=bounds[1],
            max_lon=bounds[2],
            max_lat=bounds[3],
        )

    def to_polygon(self) -> list[Ring]:
        """Closed ring, counter-clockwise from the south-west corner."""

        return [
            [
                [self.min_lon, self.min_lat],
                [self.min_lon, self.max_lat],
                [self.max_lon, self.max_lat],
                [self.max_lon, self.min_lat],
                [self.min_lon, self.min_lat],
            ]
        ]


class Extent(BaseModel):
    model_config = ConfigDict(extra="ignore")

    min_zoom: int | None = None
    max_zoom: int | None = None
    bbox: BoundingBox | None = None
    polygon: list[Ring] | None = None


class Attribution(BaseModel):
    model_config = ConfigDict(extra="ignore")

    url: str | None = None
    text: str | None = None
    html: str | None = None


class ImagerySource(BaseModel):
    """Raw imagery source, before filtering and mapping to the editor schema."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    type: str
    url: str
    description: str | None = None
    extent: Extent | None = None
    attribution: Attribution | None = None
    end_date: str | None = None
    default: bool | None = None
    overlay: bool | None = None
    best: bool | None = None


class EditorImagery(BaseModel):
    """One entry of the editor's `dataImagery` list.

    Optional fields left as `None` are omitted on export.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    type: str
    template: str
    description: str | None = None
    scale_extent: tuple[int, int] | None = Field(default=None, alias="scaleExtent")
    polygon: list[Ring] | None = None
    overzoom: bool | None = None
    terms_url: str | None = None
    terms_text: str | None = None
    terms_html: str | None = None
    default: bool | None = None
    overlay: bool | None = None
    best: bool | None = None


class ImageryDocument(BaseModel):
    """Top-level output document."""

    model_config = ConfigDict(populate_by_name=True)

    data_imagery: list[EditorImagery] = Field(default_factory=list, alias="dataImagery")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
