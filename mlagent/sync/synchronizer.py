"""Registry synchronizer — apply validated artifact entries to the registry.

Models and resources honor ``clear_previous`` with a best-effort delete
before the add. Pipelines are a plain upsert. A failed registry operation
is reported in the returned outcome, never raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from mlagent.descriptors.locator import ArtifactKind
from mlagent.descriptors.mapper import ArtifactEntry, ModelEntry, PipelineEntry, ResourceEntry
from mlagent.registry.local_registry import LocalRegistry, RegistryError

logger = logging.getLogger(__name__)


@dataclass
class SyncOutcome:
    """Result of applying one entry to the registry."""

    kind: ArtifactKind
    name: str
    ok: bool
    version: int = 0  # Assigned model version, 0 for other kinds
    error: str = ""


class RegistrySynchronizer:
    """Drives create/replace/delete operations against a registry."""

    def __init__(self, registry: LocalRegistry) -> None:
        self.registry = registry

    def apply(self, entry: ArtifactEntry) -> SyncOutcome:
        if isinstance(entry, ModelEntry):
            return self.sync_model(entry)
        if isinstance(entry, PipelineEntry):
            return self.sync_pipeline(entry)
        return self.sync_resource(entry)

    def sync_model(self, entry: ModelEntry) -> SyncOutcome:
        if entry.clear_previous:
            try:
                self.registry.delete_all_model_versions(entry.name)
            except RegistryError as e:
                logger.debug("Nothing cleared for model '%s': %s", entry.name, e)

        try:
            version = self.registry.add_model(
                entry.name,
                entry.model_path,
                entry.active,
                entry.description,
                entry.app_info.to_json(),
            )
        except RegistryError as e:
            logger.error("Failed to register the model with name '%s': %s", entry.name, e)
            return SyncOutcome(ArtifactKind.MODEL, entry.name, ok=False, error=str(e))

        logger.info("The model with name '%s' is registered as version '%d'.", entry.name, version)
        return SyncOutcome(ArtifactKind.MODEL, entry.name, ok=True, version=version)

    def sync_pipeline(self, entry: PipelineEntry) -> SyncOutcome:
        try:
            self.registry.set_pipeline(entry.name, entry.description)
        except RegistryError as e:
            logger.error("Failed to register pipeline with name '%s': %s", entry.name, e)
            return SyncOutcome(ArtifactKind.PIPELINE, entry.name, ok=False, error=str(e))

        logger.info("The pipeline description with name '%s' is registered.", entry.name)
        return SyncOutcome(ArtifactKind.PIPELINE, entry.name, ok=True)

    def sync_resource(self, entry: ResourceEntry) -> SyncOutcome:
        if entry.clear_previous:
            try:
                self.registry.delete_resource(entry.name)
            except RegistryError as e:
                logger.debug("Nothing cleared for resource '%s': %s", entry.name, e)

        try:
            self.registry.add_resource(
                entry.name, entry.path, entry.description, entry.app_info.to_json()
            )
        except RegistryError as e:
            logger.error("Failed to register the resource with name '%s': %s", entry.name, e)
            return SyncOutcome(ArtifactKind.RESOURCE, entry.name, ok=False, error=str(e))

        logger.info("The resource with name '%s' is registered.", entry.name)
        return SyncOutcome(ArtifactKind.RESOURCE, entry.name, ok=True)
