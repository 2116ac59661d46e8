"""Registry data models — stored models, pipelines and resources."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ModelRecord:
    """One registered version of a model."""

    name: str
    version: int
    path: str
    active: bool = False
    description: str = ""
    app_info: str = ""  # JSON text, empty when not installed from a package

    @property
    def qualified_id(self) -> str:
        return f"{self.name}@{self.version}"


@dataclass
class PipelineRecord:
    """A named pipeline description."""

    name: str
    description: str


@dataclass
class ResourceRecord:
    """A registered resource. Several may share a name, one per path."""

    name: str
    path: str
    description: str = ""
    app_info: str = ""
