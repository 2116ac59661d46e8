"""Artifact validator & mapper — turn raw descriptor records into typed entries.

Each kind has its own required fields. A record missing one is rejected on
its own; the caller moves on to the next record.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from mlagent.descriptors.app_info import AppInfo
from mlagent.descriptors.locator import ArtifactKind

REQUIRED_FIELDS = {
    ArtifactKind.MODEL: ("name", "model"),
    ArtifactKind.PIPELINE: ("name", "description"),
    ArtifactKind.RESOURCE: ("name", "path"),
}


class DescriptorValidationError(Exception):
    """A descriptor record lacks a field its kind requires."""

    def __init__(self, kind: ArtifactKind, missing_field: str) -> None:
        super().__init__(f"{kind.value} descriptor missing required field '{missing_field}'")
        self.kind = kind
        self.missing_field = missing_field


@dataclass(frozen=True)
class ModelEntry:
    name: str
    model_path: str
    app_info: AppInfo
    description: str = ""
    active: bool = False
    clear_previous: bool = False


@dataclass(frozen=True)
class PipelineEntry:
    name: str
    description: str


@dataclass(frozen=True)
class ResourceEntry:
    name: str
    path: str
    app_info: AppInfo
    description: str = ""
    clear_previous: bool = False


ArtifactEntry = Union[ModelEntry, PipelineEntry, ResourceEntry]


def is_true(value: Any) -> bool:
    """Strict flag check: only the string "true", in any case, counts."""
    return isinstance(value, str) and value.lower() == "true"


def _optional_str(record: dict, key: str) -> str:
    value = record.get(key)
    return value if isinstance(value, str) else ""


def _check_required(kind: ArtifactKind, record: Any) -> dict:
    if not isinstance(record, dict):
        raise DescriptorValidationError(kind, REQUIRED_FIELDS[kind][0])
    for field_name in REQUIRED_FIELDS[kind]:
        value = record.get(field_name)
        if not isinstance(value, str) or not value:
            raise DescriptorValidationError(kind, field_name)
    return record


def map_record(kind: ArtifactKind, record: Any, app_info: AppInfo) -> ArtifactEntry:
    """Validate one record and build the typed entry for ``kind``."""
    record = _check_required(kind, record)

    if kind == ArtifactKind.MODEL:
        return ModelEntry(
            name=record["name"],
            model_path=record["model"],
            app_info=app_info,
            description=_optional_str(record, "description"),
            active=is_true(record.get("activate")),
            clear_previous=is_true(record.get("clear")),
        )

    if kind == ArtifactKind.PIPELINE:
        return PipelineEntry(name=record["name"], description=record["description"])

    return ResourceEntry(
        name=record["name"],
        path=record["path"],
        app_info=app_info,
        description=_optional_str(record, "description"),
        clear_previous=is_true(record.get("clear")),
    )
