"""Orígenes de imagery (providers concretos).

Por qué un paquete:
- Agrupa un módulo por origen (tile server, catálogo, WebODM).
- Cada módulo implementa `core.interfaces.provider.ImageryProvider`.
"""

from adapters.imagery_sources.catalog import ImageryCatalogProvider
from adapters.imagery_sources.discovery import discover_tessera_paths, discover_webodm_tasks
from adapters.imagery_sources.tessera import TesseraProvider
from adapters.imagery_sources.webodm import WebOdmProvider

__all__ = [
	"ImageryCatalogProvider",
	"TesseraProvider",
	"WebOdmProvider",
	"discover_tessera_paths",
	"discover_webodm_tasks",
]
