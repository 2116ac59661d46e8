"""Artifact descriptors shipped inside resource packages.

This package provides:
- Locating: the fixed descriptor filename per artifact kind
- Parsing: single-object or array-of-objects JSON files
- Mapping: per-kind field checks into typed entries
- App-info: provenance attached to registered artifacts
"""

from mlagent.descriptors.app_info import AppInfo, compose_app_info
from mlagent.descriptors.locator import ArtifactKind, locate
from mlagent.descriptors.mapper import (
    ArtifactEntry,
    DescriptorValidationError,
    ModelEntry,
    PipelineEntry,
    ResourceEntry,
    map_record,
)
from mlagent.descriptors.parser import DescriptorParseError, parse

__all__ = [
    "AppInfo",
    "ArtifactEntry",
    "ArtifactKind",
    "DescriptorParseError",
    "DescriptorValidationError",
    "ModelEntry",
    "PipelineEntry",
    "ResourceEntry",
    "compose_app_info",
    "locate",
    "map_record",
    "parse",
]
