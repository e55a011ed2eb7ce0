"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (HTTP/discovery) lean config de forma consistente.

Precedencia: entorno/.env > config POSM (`/etc/posm.json`) > defaults. Del
fichero POSM solo se leen los nombres de host.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_POSM_CONFIG = Path("/etc/posm.json")

_POSM_KEYS = ("posm_fqdn", "webodm_fqdn")


class AppSettings(BaseSettings):
    """Central application settings."""

    model_config = SettingsConfigDict(
        env_prefix="POSM_IMAGERY_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    posm_config_path: Path = Field(
        default=DEFAULT_POSM_CONFIG,
        description="Optional POSM process config (JSON).",
    )
    posm_fqdn: str = Field(
        default="posm.io",
        min_length=1,
        description="Host serving the tile server and the imagery catalog.",
    )
    webodm_fqdn: str = Field(
        default="webodm.posm.io",
        min_length=1,
        description="Host serving WebODM.",
    )
    tessera_config_dir: Path = Field(
        default=Path("/etc/tessera.conf.d"),
        description="Directory of tile-server config fragments.",
    )
    webodm_project_path: Path = Field(
        default=Path("/opt/data/webodm/project"),
        description="WebODM project directory ({project}/task/{task}).",
    )

    max_concurrency: int = Field(
        default=8,
        ge=1,
        le=64,
        description="Maximum concurrent requests per source group.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout per request (seconds).",
    )
    user_agent: str = Field(
        default="posm-imagery/0.1",
        min_length=1,
        description="User-Agent for outgoing requests.",
    )

    max_age_years: int = Field(
        default=20,
        ge=0,
        description="Imagery whose end_date is older than this is dropped.",
    )
    blocklist: set[str] = Field(
        default_factory=set,
        description="Source ids excluded from the output.",
    )
    extra_sources: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Raw source records appended before normalization.",
    )

    log_level: str = Field(
        default="WARNING",
        description="Logging level (DEBUG/INFO/WARNING/ERROR).",
    )


def load_posm_config(path: Path) -> dict[str, Any]:
    """Read the POSM config file; any failure yields an empty mapping."""

    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError:
        logger.warning("Could not read POSM config %s", path, exc_info=True)
        return {}

    try:
        data = json.loads(raw)
    except ValueError:
        logger.warning("Ignoring malformed POSM config %s", path, exc_info=True)
        return {}

    if not isinstance(data, dict):
        logger.warning("Ignoring POSM config %s: expected a JSON object", path)
        return {}
    return data


def load_settings(**overrides: Any) -> AppSettings:
    """Build settings: env/.env > POSM config > defaults."""

    settings = AppSettings(**overrides)
    posm = load_posm_config(settings.posm_config_path)

    updates = {
        key: posm[key]
        for key in _POSM_KEYS
        if isinstance(posm.get(key), str) and posm[key] and key not in settings.model_fields_set
    }
    if not updates:
        return settings
    return settings.model_copy(update=updates)
