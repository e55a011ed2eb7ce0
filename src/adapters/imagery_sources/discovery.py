"""Descubrimiento de orígenes locales.

Lee el sistema de ficheros para derivar los endpoints:
- Tessera: cada fragmento del directorio de config es un objeto JSON cuyas
  claves son rutas de montaje del tile server.
- WebODM: directorios `{project}/task/{task}` bajo la ruta de proyectos.

Los fallos son blandos: se registran y el origen no aporta nada.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def _read_tessera_fragment(path: Path) -> list[str]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object of mount paths")
    return list(data.keys())


def discover_tessera_paths(config_dir: Path) -> list[str]:
    """Mount paths declared by the tile-server config fragments."""

    try:
        fragments = sorted(config_dir.iterdir())
        paths: list[str] = []
        for fragment in fragments:
            paths.extend(_read_tessera_fragment(fragment))
    except (OSError, ValueError):
        logger.warning("No tile-server sources from %s", config_dir, exc_info=True)
        return []
    return paths


def discover_webodm_tasks(project_dir: Path) -> list[str]:
    """Task paths (`{project}/tasks/{task}`) relative to the WebODM API."""

    try:
        tasks: list[str] = []
        for project in sorted(project_dir.iterdir()):
            for task in sorted((project / "task").iterdir()):
                tasks.append(f"{project.name}/tasks/{task.name}")
    except OSError:
        logger.warning("No WebODM sources from %s", project_dir, exc_info=True)
        return []
    return tasks
