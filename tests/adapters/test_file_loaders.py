from __future__ import annotations

import json
from pathlib import Path

import pytest

from lib_object_mapper.adapters.file_loaders import structured as structured_module
from lib_object_mapper.adapters.file_loaders.structured import (
    JSONFileLoader,
    TOMLFileLoader,
    YAMLFileLoader,
    loader_for,
)
from lib_object_mapper.domain.errors import InvalidPayload, PayloadNotFound


def test_toml_loader(tmp_path: Path) -> None:
    path = tmp_path / "record.toml"
    path.write_text('first_name = "John"\nlast_name = "Denver"\n', encoding="utf-8")
    data = TOMLFileLoader().load(str(path))
    assert data == {"first_name": "John", "last_name": "Denver"}


def test_toml_loader_missing_file(tmp_path: Path) -> None:
    with pytest.raises(PayloadNotFound):
        TOMLFileLoader().load(str(tmp_path / "missing.toml"))


def test_json_loader_invalid(tmp_path: Path) -> None:
    path = tmp_path / "records.json"
    path.write_text("{invalid}", encoding="utf-8")
    with pytest.raises(InvalidPayload):
        JSONFileLoader().load(str(path))


def test_json_loader_accepts_list_of_records(tmp_path: Path) -> None:
    path = tmp_path / "records.json"
    path.write_text(json.dumps([{"id": 1}, {"id": 2}]), encoding="utf-8")
    assert JSONFileLoader().load(str(path)) == [{"id": 1}, {"id": 2}]


@pytest.mark.parametrize("content", ["42", '"text"', "[1, 2]", '[{"id": 1}, 3]'])
def test_json_loader_rejects_non_records(tmp_path: Path, content: str) -> None:
    path = tmp_path / "records.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(InvalidPayload):
        JSONFileLoader().load(str(path))


@pytest.mark.skipif(structured_module.yaml is None, reason="PyYAML not available")
def test_yaml_loader_handles_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "record.yaml"
    path.write_text("# empty file\n", encoding="utf-8")
    assert YAMLFileLoader().load(str(path)) == {}


@pytest.mark.skipif(structured_module.yaml is None, reason="PyYAML not available")
def test_yaml_loader_reads_list(tmp_path: Path) -> None:
    path = tmp_path / "records.yml"
    path.write_text("- id: 1\n- id: 2\n", encoding="utf-8")
    assert YAMLFileLoader().load(str(path)) == [{"id": 1}, {"id": 2}]


def test_loader_for_selects_by_suffix() -> None:
    assert isinstance(loader_for("a.JSON"), JSONFileLoader)
    assert isinstance(loader_for("a.toml"), TOMLFileLoader)
    assert isinstance(loader_for("a.yml"), YAMLFileLoader)
    with pytest.raises(InvalidPayload):
        loader_for("a.csv")
