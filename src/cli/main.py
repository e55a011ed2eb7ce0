"""CLI entry point (Typer).

`posm-imagery` with no subcommand builds the imagery document and writes
it to stdout. Logs go to stderr.

Without an install: `python -m cli.main` from `src/`.
"""

from __future__ import annotations

import asyncio

import typer

from adapters.json_exporter import write_imagery_json
from cli import doctor
from core.config import load_settings
from core.logging_setup import setup_logging
from core.services.imagery_pipeline import build_imagery_document

app = typer.Typer(
    invoke_without_command=True,
    add_completion=False,
    help="Aggregate POSM imagery sources into an editor imagery document.",
)
app.add_typer(doctor.app, name="doctor")


@app.callback()
def main(ctx: typer.Context) -> None:
    """Build the imagery document (default command)."""

    if ctx.invoked_subcommand is not None:
        return

    setup_logging()
    settings = load_settings()
    setup_logging(settings.log_level)
    document = asyncio.run(build_imagery_document(settings=settings))
    write_imagery_json(document)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
