"""Unit tests for local origin discovery (soft-fail on filesystem errors)."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from adapters.imagery_sources.discovery import discover_tessera_paths, discover_webodm_tasks


def write_json(path: Path, data) -> None:
    path.write_text(json.dumps(data), encoding="utf-8")


class TestTessera:
    def test_collects_keys_of_every_fragment(self, tmp_path: Path):
        write_json(tmp_path / "b.json", {"/osm": {}, "/hot": {}})
        write_json(tmp_path / "a.json", {"/lagos": {}})

        assert discover_tessera_paths(tmp_path) == ["/lagos", "/osm", "/hot"]

    def test_missing_directory(self, tmp_path: Path, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.WARNING):
            assert discover_tessera_paths(tmp_path / "absent") == []

        assert "No tile-server sources" in caplog.text

    def test_one_broken_fragment_empties_the_origin(self, tmp_path: Path):
        write_json(tmp_path / "a.json", {"/lagos": {}})
        (tmp_path / "b.json").write_text("{broken", encoding="utf-8")

        assert discover_tessera_paths(tmp_path) == []

    def test_fragment_must_be_an_object(self, tmp_path: Path):
        write_json(tmp_path / "a.json", ["/lagos"])

        assert discover_tessera_paths(tmp_path) == []


class TestWebOdm:
    def test_lists_tasks_per_project(self, tmp_path: Path):
        for project, task in (("2", "zz"), ("1", "b"), ("1", "a")):
            (tmp_path / project / "task" / task).mkdir(parents=True)

        assert discover_webodm_tasks(tmp_path) == ["1/tasks/a", "1/tasks/b", "2/tasks/zz"]

    def test_missing_directory(self, tmp_path: Path, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.WARNING):
            assert discover_webodm_tasks(tmp_path / "absent") == []

        assert "No WebODM sources" in caplog.text

    def test_project_without_task_dir_empties_the_origin(self, tmp_path: Path):
        (tmp_path / "1" / "task" / "a").mkdir(parents=True)
        (tmp_path / "2").mkdir()

        assert discover_webodm_tasks(tmp_path) == []
