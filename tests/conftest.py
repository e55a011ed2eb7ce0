"""Shared fixtures: isolated settings and a fake HTTP layer."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from adapters.http_client import build_async_client
from core.config import AppSettings

FIXTURES = Path(__file__).parent / "fixtures"

Route = tuple[int, Any]


def load_fixture(name: str) -> Any:
    return json.loads((FIXTURES / name).read_text(encoding="utf-8"))


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep the developer's environment and .env out of the tests."""

    for key in list(os.environ):
        if key.upper().startswith("POSM_IMAGERY_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings(tmp_path: Path) -> AppSettings:
    tessera = tmp_path / "tessera.conf.d"
    webodm = tmp_path / "webodm" / "project"
    tessera.mkdir()
    webodm.mkdir(parents=True)
    return AppSettings(
        posm_config_path=tmp_path / "posm.json",
        posm_fqdn="posm.test",
        webodm_fqdn="webodm.test",
        tessera_config_dir=tessera,
        webodm_project_path=webodm,
    )


@pytest.fixture
def routes() -> dict[str, Route]:
    """URL -> (status, JSON body). Unknown URLs answer 404."""

    return {}


@pytest.fixture
def requested() -> list[str]:
    return []


@pytest.fixture
def make_client(
    settings: AppSettings,
    routes: dict[str, Route],
    requested: list[str],
) -> Callable[[], httpx.AsyncClient]:
    def handler(request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        requested.append(url)
        status, body = routes.get(url, (404, {"detail": "not found"}))
        return httpx.Response(status, json=body)

    def factory() -> httpx.AsyncClient:
        return build_async_client(settings, transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def fixture_json() -> Callable[[str], Any]:
    return load_fixture
