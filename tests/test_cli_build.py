from __future__ import annotations

import json
from pathlib import Path

import pytest

from ingest_cli import build as build_cli
from ingest_core.connection import IndexConnection


def _write(tmp_path: Path, name: str, text: str) -> Path:
    p = tmp_path / name
    p.write_text(text, encoding="utf-8")
    return p


def test_build_writes_manifests(tmp_path: Path, capsys):
    src = _write(tmp_path, "people.csv", "id,name\n1,Ada\n2,Alan\n")
    out = tmp_path / "out"
    status = build_cli.main([str(src), "--output-dir", str(out), "--timestamp-field", "ts"])
    assert status == 0
    files = list(out.glob("documents-people-*.json"))
    assert len(files) == 1
    data = json.loads(files[0].read_text(encoding="utf-8"))
    assert data["count"] == 2
    assert [it["unique_id"] for it in data["items"]] == ["1", "2"]
    assert "ts" in data["items"][0]["content"]
    assert "Built 2 documents from 1 file(s)." in capsys.readouterr().out


def test_build_with_yaml_config(tmp_path: Path):
    src = _write(tmp_path, "geo.csv", "latitude;longitude;id\n1.5;2.5;x\n")
    cfg = _write(
        tmp_path,
        "ingest.yml",
        "builder:\n  type: csv_geo\n  unique_id_field: 2\n  format:\n    delimiter: ';'\n",
    )
    out = tmp_path / "out"
    assert build_cli.main([str(src), "--config", str(cfg), "--output-dir", str(out)]) == 0
    data = json.loads(next(out.glob("documents-geo-*.json")).read_text(encoding="utf-8"))
    assert data["items"][0]["unique_id"] == "x"
    assert data["items"][0]["content"]["location"] == {"lat": 1.5, "lon": 2.5}


def test_build_failure_sets_exit_status(tmp_path: Path):
    empty = _write(tmp_path, "empty.csv", "")
    good = _write(tmp_path, "good.csv", "id\n1\n")
    out = tmp_path / "out"
    assert build_cli.main([str(empty), str(good), "--output-dir", str(out)]) == 1
    assert len(list(out.glob("documents-good-*.json"))) == 1


def test_row_failure_sets_exit_status(tmp_path: Path):
    src = _write(tmp_path, "ragged.csv", "id,a\nx,1\n")
    out = tmp_path / "out"
    assert build_cli.main([str(src), "--unique-id-field", "5", "--output-dir", str(out)]) == 1
    assert list(out.glob("*.json")) == []


def test_ping_failure_stops_before_building(tmp_path: Path, monkeypatch):
    src = _write(tmp_path, "people.csv", "id\n1\n")
    cfg = _write(tmp_path, "ingest.yml", "index_url: http://es:9200\n")
    monkeypatch.setattr(IndexConnection, "ping", lambda self: False)
    out = tmp_path / "out"
    assert build_cli.main([str(src), "--config", str(cfg), "--ping", "--output-dir", str(out)]) == 2
    assert not out.exists()


@pytest.mark.parametrize(
    "flags",
    [
        ["--builder", "simple"],
        ["--unique-id-field", "1"],
        ["--timestamp-field", "ts"],
    ],
)
def test_overrides_cannot_be_combined_with_config(tmp_path: Path, flags):
    src = _write(tmp_path, "people.csv", "id\n1\n")
    cfg = _write(tmp_path, "ingest.yml", "builder:\n  type: csv\n")
    with pytest.raises(SystemExit) as exc:
        build_cli.main([str(src), "--config", str(cfg), *flags, "--output-dir", str(tmp_path / "out")])
    assert exc.value.code == 2
