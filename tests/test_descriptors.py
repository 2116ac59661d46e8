"""Tests for descriptor locating, parsing and mapping."""

import json
import tempfile
from pathlib import Path

import pytest

from mlagent.descriptors.app_info import AppInfo, compose_app_info
from mlagent.descriptors.locator import ArtifactKind, locate
from mlagent.descriptors.mapper import (
    DescriptorValidationError,
    ModelEntry,
    PipelineEntry,
    ResourceEntry,
    is_true,
    map_record,
)
from mlagent.descriptors.parser import DescriptorParseError, parse

APP_INFO = compose_app_info("pkgA", "rpk", "1.0")


# --- Locator ---


def test_descriptor_filenames():
    assert ArtifactKind.MODEL.descriptor_filename == "model_description.json"
    assert ArtifactKind.PIPELINE.descriptor_filename == "pipeline_description.json"
    assert ArtifactKind.RESOURCE.descriptor_filename == "resource_description.json"


def test_kinds_iterate_in_fixed_order():
    assert list(ArtifactKind) == [ArtifactKind.MODEL, ArtifactKind.PIPELINE, ArtifactKind.RESOURCE]


def test_locate_existing_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "model_description.json"
        path.write_text("{}")
        assert locate(tmpdir, ArtifactKind.MODEL) == path


def test_locate_missing_file_warns(caplog):
    with tempfile.TemporaryDirectory() as tmpdir:
        assert locate(tmpdir, ArtifactKind.PIPELINE) is None
    assert "pipeline_description.json" in caplog.text


def test_locate_rejects_directory():
    with tempfile.TemporaryDirectory() as tmpdir:
        (Path(tmpdir) / "resource_description.json").mkdir()
        assert locate(tmpdir, ArtifactKind.RESOURCE) is None


# --- Parser ---


def _write(tmpdir: str, content: str, name: str = "model_description.json") -> Path:
    path = Path(tmpdir) / name
    path.write_text(content, encoding="utf-8")
    return path


def test_parse_single_object():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _write(tmpdir, json.dumps({"name": "m1", "model": "m1.tflite"}))
        assert parse(path) == [{"name": "m1", "model": "m1.tflite"}]


def test_parse_array_keeps_order():
    with tempfile.TemporaryDirectory() as tmpdir:
        records = [{"name": "a"}, {"name": "b"}, {"name": "c"}]
        path = _write(tmpdir, json.dumps(records))
        assert [r["name"] for r in parse(path)] == ["a", "b", "c"]


def test_parse_array_passes_non_objects_through():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _write(tmpdir, json.dumps([{"name": "a"}, 42, "text"]))
        assert parse(path) == [{"name": "a"}, 42, "text"]


def test_parse_syntax_error():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _write(tmpdir, '{"name": "m1",')
        with pytest.raises(DescriptorParseError) as exc:
            parse(path)
        assert exc.value.path == path
        assert "Failed to parse json file" in str(exc.value)


def test_parse_unreadable_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        with pytest.raises(DescriptorParseError):
            parse(Path(tmpdir) / "missing.json")


# --- Mapper ---


def test_map_model_with_defaults():
    entry = map_record(ArtifactKind.MODEL, {"name": "m1", "model": "m1.tflite"}, APP_INFO)
    assert entry == ModelEntry(name="m1", model_path="m1.tflite", app_info=APP_INFO)
    assert entry.description == ""
    assert not entry.active
    assert not entry.clear_previous


def test_map_model_flags_case_insensitive():
    record = {
        "name": "m1",
        "model": "m1.tflite",
        "description": "a model",
        "activate": "TRUE",
        "clear": "True",
    }
    entry = map_record(ArtifactKind.MODEL, record, APP_INFO)
    assert entry.active
    assert entry.clear_previous
    assert entry.description == "a model"


def test_flags_are_strict_literal():
    assert is_true("true")
    assert is_true("tRuE")
    assert not is_true(True)
    assert not is_true("yes")
    assert not is_true("1")
    assert not is_true(" true")
    assert not is_true(None)


def test_map_model_missing_model_field():
    with pytest.raises(DescriptorValidationError) as exc:
        map_record(ArtifactKind.MODEL, {"name": "m1"}, APP_INFO)
    assert exc.value.missing_field == "model"


def test_map_model_empty_name_rejected():
    with pytest.raises(DescriptorValidationError) as exc:
        map_record(ArtifactKind.MODEL, {"name": "", "model": "m.tflite"}, APP_INFO)
    assert exc.value.missing_field == "name"


def test_map_pipeline():
    entry = map_record(
        ArtifactKind.PIPELINE, {"name": "p1", "description": "videotestsrc ! fakesink"}, APP_INFO
    )
    assert entry == PipelineEntry(name="p1", description="videotestsrc ! fakesink")


def test_map_pipeline_requires_description():
    with pytest.raises(DescriptorValidationError) as exc:
        map_record(ArtifactKind.PIPELINE, {"name": "p1"}, APP_INFO)
    assert exc.value.missing_field == "description"


def test_map_resource():
    record = {"name": "r1", "path": "labels.txt", "clear": "true", "extra": "ignored"}
    entry = map_record(ArtifactKind.RESOURCE, record, APP_INFO)
    assert entry == ResourceEntry(
        name="r1", path="labels.txt", app_info=APP_INFO, clear_previous=True
    )


def test_map_resource_requires_path():
    with pytest.raises(DescriptorValidationError) as exc:
        map_record(ArtifactKind.RESOURCE, {"name": "r1"}, APP_INFO)
    assert exc.value.missing_field == "path"


def test_map_non_object_record():
    with pytest.raises(DescriptorValidationError) as exc:
        map_record(ArtifactKind.MODEL, 42, APP_INFO)
    assert exc.value.missing_field == "name"


# --- App-info ---


def test_app_info_round_trip():
    info = compose_app_info("pkgA", "rpk", "1.0")
    parsed = AppInfo.from_json(info.to_json())
    assert parsed.package_id == "pkgA"
    assert parsed.resource_type == "rpk"
    assert parsed.resource_version == "1.0"
    assert parsed == info


def test_app_info_json_keys():
    data = json.loads(compose_app_info("app1", "rpk", "2").to_json())
    assert data == {"is_rpk": "T", "app_id": "app1", "res_type": "rpk", "res_version": "2"}


def test_parse_deeply_nested_json():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = _write(tmpdir, "[" * 100000 + "]" * 100000)
        with pytest.raises(DescriptorParseError):
            parse(path)
