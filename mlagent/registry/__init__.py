"""Registry — the persistent store of ML artifacts on the device.

The registry provides:
- Models: versioned per name, with one optionally activated version
- Pipelines: name to description, replaced on every set
- Resources: named file paths, several per name
"""

from mlagent.registry.local_registry import (
    LocalRegistry,
    ModelNotFoundError,
    PipelineNotFoundError,
    RegistryError,
    ResourceNotFoundError,
)
from mlagent.registry.models import ModelRecord, PipelineRecord, ResourceRecord

__all__ = [
    "LocalRegistry",
    "ModelNotFoundError",
    "ModelRecord",
    "PipelineNotFoundError",
    "PipelineRecord",
    "RegistryError",
    "ResourceNotFoundError",
    "ResourceRecord",
]
