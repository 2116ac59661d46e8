"""Package lifecycle event models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class EventKind(Enum):
    """What the package manager is doing to a package."""

    INSTALL = "install"
    UNINSTALL = "uninstall"
    UPDATE = "update"
    RES_COPY = "res_copy"  # Resource copy into a shared area


class EventPhase(Enum):
    """Where the package manager is in the request."""

    STARTED = "started"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class LifecycleEvent:
    """A single notification from the package manager."""

    package_category: str  # e.g. "rpk", "tpk", "wgt"
    package_id: str
    kind: EventKind
    phase: EventPhase
    progress: int = 0  # 0 - 100, advisory only
    error: int | None = None

    @classmethod
    def from_dict(cls, data: dict) -> LifecycleEvent:
        """Build an event from its dict form. Raises ValueError on bad input."""
        if not isinstance(data, dict):
            raise ValueError(f"Event must be an object, got {type(data).__name__}")
        for key in ("package_category", "package_id", "kind", "phase"):
            if not isinstance(data.get(key), str):
                raise ValueError(f"Event field '{key}' must be a string")

        progress = data.get("progress", 0)
        if isinstance(progress, bool) or not isinstance(progress, int):
            raise ValueError("Event field 'progress' must be an integer")
        error = data.get("error")
        if error is not None and (isinstance(error, bool) or not isinstance(error, int)):
            raise ValueError("Event field 'error' must be an integer or null")

        return cls(
            package_category=data["package_category"],
            package_id=data["package_id"],
            kind=EventKind(data["kind"].lower()),
            phase=EventPhase(data["phase"].lower()),
            progress=progress,
            error=error,
        )

    def to_dict(self) -> dict:
        return {
            "package_category": self.package_category,
            "package_id": self.package_id,
            "kind": self.kind.value,
            "phase": self.phase.value,
            "progress": self.progress,
            "error": self.error,
        }
