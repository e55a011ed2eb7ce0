"""Exportación JSON del documento de imagery.

Por qué compacto (sin espacios):
- Lo consume el build del editor, no una persona.
"""

from __future__ import annotations

import json
import os
import sys
from typing import TextIO

from core.domain.models import ImageryDocument


def render_imagery_json(document: ImageryDocument) -> str:
    return json.dumps(document.to_payload(), ensure_ascii=False, separators=(",", ":"))


def write_imagery_json(document: ImageryDocument, stream: TextIO | None = None) -> None:
    """Write the document to `stream` (stdout by default).

    A downstream consumer that closes the pipe early (`| head`) is not an
    error.
    """

    stream = stream or sys.stdout
    try:
        stream.write(render_imagery_json(document))
        stream.flush()
    except BrokenPipeError:
        if stream is sys.stdout:
            # Keep the interpreter from flushing into the closed pipe at exit.
            devnull = os.open(os.devnull, os.O_WRONLY)
            os.dup2(devnull, sys.stdout.fileno())
