"""Contrato de orígenes de imagery.

Por qué Protocol:
- Contrato estructural (duck typing) sin herencia rígida.
- Permite alimentar el pipeline con orígenes falsos en tests.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import httpx

from core.domain.models import ImagerySource


@runtime_checkable
class ImageryProvider(Protocol):
    """One origin of imagery sources.

    Rules:
    - `fetch` is async because it performs HTTP I/O.
    - Network errors propagate; non-200 responses yield no sources.
    """

    name: str

    async def fetch(self, client: httpx.AsyncClient) -> list[ImagerySource]:
        """Fetch and convert every source of this origin."""

        ...
