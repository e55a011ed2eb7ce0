"""Unit tests for the Typer entry point."""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

import cli.doctor
import cli.main
from core.domain.models import EditorImagery, ImageryDocument

runner = CliRunner()


async def fake_build(*, settings):
    return ImageryDocument(
        data_imagery=[
            EditorImagery(id=settings.posm_fqdn, name="Fake", type="tms", template="http://t")
        ]
    )


def test_default_command_prints_document(monkeypatch):
    monkeypatch.setattr(cli.main, "build_imagery_document", fake_build)
    monkeypatch.setattr(cli.main, "setup_logging", lambda level=None: None)
    monkeypatch.setenv("POSM_IMAGERY_POSM_FQDN", "cli.test")

    result = runner.invoke(cli.main.app, [])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {
        "dataImagery": [{"id": "cli.test", "name": "Fake", "type": "tms", "template": "http://t"}]
    }


def test_errors_exit_non_zero(monkeypatch):
    async def failing_build(*, settings):
        raise RuntimeError("network down")

    monkeypatch.setattr(cli.main, "build_imagery_document", failing_build)
    monkeypatch.setattr(cli.main, "setup_logging", lambda level=None: None)

    result = runner.invoke(cli.main.app, [])

    assert result.exit_code != 0
    assert isinstance(result.exception, RuntimeError)


def test_doctor_reports_local_origins(monkeypatch, tmp_path):
    tessera = tmp_path / "tessera"
    tessera.mkdir()
    (tessera / "a.json").write_text(json.dumps({"/osm": {}}), encoding="utf-8")
    monkeypatch.setenv("POSM_IMAGERY_TESSERA_CONFIG_DIR", str(tessera))
    monkeypatch.setenv("POSM_IMAGERY_WEBODM_PROJECT_PATH", str(tmp_path / "none"))
    monkeypatch.setenv("POSM_IMAGERY_POSM_CONFIG_PATH", str(tmp_path / "posm.json"))
    monkeypatch.setattr(cli.doctor, "setup_logging", lambda level=None: None)
    monkeypatch.setenv("COLUMNS", "200")

    async def offline(settings, url):
        return False, "offline"

    monkeypatch.setattr(cli.doctor, "_check_http", offline)

    result = runner.invoke(cli.main.app, ["doctor", "run"])

    assert result.exit_code == 0, result.output
    assert "Tile server sources" in result.stdout
    assert "1 in" in result.stdout
    assert "FAIL" in result.stdout


def test_show_config_reflects_posm_file(monkeypatch, tmp_path):
    posm = tmp_path / "posm.json"
    posm.write_text(json.dumps({"posm_fqdn": "box.local"}), encoding="utf-8")
    monkeypatch.setenv("POSM_IMAGERY_POSM_CONFIG_PATH", str(posm))

    result = runner.invoke(cli.main.app, ["doctor", "show-config"])

    assert result.exit_code == 0, result.output
    config = json.loads(result.stdout)
    assert config["posm_fqdn"] == "box.local"
    assert config["webodm_fqdn"] == "webodm.posm.io"


def test_run_uses_process_arguments(monkeypatch, capsys, tmp_path):
    monkeypatch.setenv("POSM_IMAGERY_POSM_CONFIG_PATH", str(tmp_path / "posm.json"))
    monkeypatch.setattr("sys.argv", ["posm-imagery", "doctor", "show-config"])

    with pytest.raises(SystemExit) as exc:
        cli.main.run()

    assert exc.value.code == 0
    assert json.loads(capsys.readouterr().out)["posm_fqdn"] == "posm.io"
