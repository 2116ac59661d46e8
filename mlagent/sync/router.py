"""Event router — turn package lifecycle events into registry updates.

Only events for the resource package category are considered. An
install-completed event runs every artifact kind through
locate -> parse -> map -> sync, in ``ArtifactKind`` order. Failures are
logged and recorded in the returned report; nothing is raised to the
event source.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from mlagent.config import AgentConfig
from mlagent.descriptors.app_info import AppInfo, compose_app_info
from mlagent.descriptors.locator import ArtifactKind, locate
from mlagent.descriptors.mapper import DescriptorValidationError, map_record
from mlagent.descriptors.parser import DescriptorParseError, parse
from mlagent.events.models import EventKind, EventPhase, LifecycleEvent
from mlagent.events.source import EventSource
from mlagent.packages.info import PackageInfoError, PackageInfoProvider
from mlagent.registry.local_registry import LocalRegistry
from mlagent.sync.synchronizer import RegistrySynchronizer, SyncOutcome

logger = logging.getLogger(__name__)


@dataclass
class SyncReport:
    """What one install-completed event did to the registry."""

    package_id: str
    app_info: AppInfo | None = None
    outcomes: list[SyncOutcome] = field(default_factory=list)
    missing_kinds: list[ArtifactKind] = field(default_factory=list)
    unparsable_kinds: list[ArtifactKind] = field(default_factory=list)
    skipped_records: list[str] = field(default_factory=list)
    aborted: bool = False
    error: str = ""

    @property
    def registered(self) -> list[SyncOutcome]:
        return [o for o in self.outcomes if o.ok]

    @property
    def failed(self) -> list[SyncOutcome]:
        return [o for o in self.outcomes if not o.ok]

    def summary(self) -> str:
        if self.aborted:
            return f"{self.package_id}: aborted, {self.error}"
        return (
            f"{self.package_id}: {len(self.registered)} registered, "
            f"{len(self.failed)} failed, {len(self.skipped_records)} skipped"
        )


class EventRouter:
    """Single ingestion point for package lifecycle events.

    If an event source is given, the router subscribes to it and owns it
    until ``close()``.
    """

    def __init__(
        self,
        registry: LocalRegistry,
        package_info: PackageInfoProvider,
        config: AgentConfig | None = None,
        source: EventSource | None = None,
    ) -> None:
        self.config = config or AgentConfig()
        self.package_info = package_info
        self.synchronizer = RegistrySynchronizer(registry)
        self.source = source
        if source is not None:
            source.subscribe(self.handle)

    def __enter__(self) -> EventRouter:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        """Release the event source subscription."""
        if self.source is not None:
            self.source.close()
            self.source = None

    def handle(self, event: LifecycleEvent) -> None:
        self.process(event)

    def process(self, event: LifecycleEvent) -> SyncReport | None:
        """Handle one event. Returns a report for install-completed events."""
        logger.info(
            "type: %s, package_name: %s, event_type: %s, event_state: %s",
            event.package_category,
            event.package_id,
            event.kind.value,
            event.phase.value,
        )

        if event.kind == EventKind.RES_COPY:
            logger.info("resource package copy is being started")
            return None

        if event.package_category.lower() != self.config.package_category.lower():
            logger.debug("Ignoring %s package %s", event.package_category, event.package_id)
            return None

        if event.kind == EventKind.INSTALL and event.phase == EventPhase.COMPLETED:
            return self.on_install_completed(event.package_id)
        if event.kind == EventKind.UNINSTALL and event.phase == EventPhase.STARTED:
            self.on_uninstall_started(event.package_id)
        elif event.kind == EventKind.UPDATE and event.phase == EventPhase.COMPLETED:
            self.on_update_completed(event.package_id)
        return None

    def on_install_completed(self, package_id: str) -> SyncReport:
        report = SyncReport(package_id=package_id)

        try:
            info = self.package_info.lookup(package_id)
        except PackageInfoError as e:
            logger.error("Failed to get resource info of package %s: %s", package_id, e)
            report.aborted = True
            report.error = str(e)
            return report

        logger.info(
            "resource package %s is installed. res_type: %s, res_version: %s",
            package_id,
            info.resource_type,
            info.resource_version,
        )

        report.app_info = compose_app_info(package_id, info.resource_type, info.resource_version)
        root = self.config.artifact_root(package_id, info.resource_type)

        for kind in ArtifactKind:
            self.sync_kind(root, kind, report)

        logger.info(report.summary())
        return report

    def sync_kind(self, root: Path, kind: ArtifactKind, report: SyncReport) -> None:
        """Register every valid record of one descriptor file."""
        path = locate(root, kind)
        if path is None:
            report.missing_kinds.append(kind)
            return

        try:
            records = parse(path)
        except DescriptorParseError as e:
            logger.error(str(e))
            report.unparsable_kinds.append(kind)
            return

        for index, record in enumerate(records):
            try:
                entry = map_record(kind, record, report.app_info)
            except DescriptorValidationError as e:
                logger.error("Skipping record %d of json file '%s': %s", index, path, e)
                report.skipped_records.append(f"{path}[{index}]: {e}")
                continue
            report.outcomes.append(self.synchronizer.apply(entry))

    def on_uninstall_started(self, package_id: str) -> None:
        logger.info("resource package %s is being uninstalled", package_id)
        self._echo_package_path(self.config.package_root(package_id))
        # TODO: invalidate models registered from this package (match on app_info.app_id)
        logger.warning("Registry entries of %s are not invalidated on uninstall", package_id)

    def on_update_completed(self, package_id: str) -> None:
        logger.info("resource package %s is updated", package_id)
        self._echo_package_path(self.config.package_root(package_id))
        # TODO: re-sync descriptors of the updated package
        logger.warning("Registry entries of %s are not refreshed on update", package_id)

    def _echo_package_path(self, path: Path) -> None:
        if not path.is_dir():
            return
        logger.info("package path: %s", path)
        try:
            children = sorted(path.iterdir())
        except OSError as e:
            logger.warning("Cannot list %s: %s", path, e)
            return
        for child in children:
            logger.info("- file: %s", child.name)
