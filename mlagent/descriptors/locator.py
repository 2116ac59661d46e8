"""Descriptor locator — find the descriptor file for an artifact kind."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)


class ArtifactKind(Enum):
    """Kinds of ML artifacts a resource package can ship.

    Declaration order is the order descriptors are processed in.
    """

    MODEL = "model"
    PIPELINE = "pipeline"
    RESOURCE = "resource"

    @property
    def descriptor_filename(self) -> str:
        return f"{self.value}_description.json"


def locate(root: str | Path, kind: ArtifactKind) -> Path | None:
    """Return the descriptor path for ``kind`` under ``root``, or None if absent."""
    path = Path(root) / kind.descriptor_filename
    if not path.is_file():
        logger.warning(
            "Failed to find json file '%s'. Packages using the ML service should provide it.",
            path,
        )
        return None
    return path
