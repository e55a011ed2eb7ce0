"""Logging configuration.

Stdout carries the JSON document, so every log record goes to stderr
through Rich.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_CONFIGURED_ATTR = "_posm_imagery_configured"


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger once."""

    root = logging.getLogger()
    if getattr(root, _CONFIGURED_ATTR, False):
        if level:
            root.setLevel(_resolve_level(level))
        return

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(_resolve_level(level or "WARNING"))
    setattr(root, _CONFIGURED_ATTR, True)


def _resolve_level(name: str) -> int:
    value = logging.getLevelName(name.strip().upper())
    return value if isinstance(value, int) else logging.WARNING
