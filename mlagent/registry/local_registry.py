"""Local file-based registry implementation.

A file-system-backed store for models, pipelines and resources.
Everything lives in a single JSON index inside the registry directory.
Model versions are assigned per name from a high-water mark that survives
deletion, so a version number is never handed out twice.

Every change is written through to disk. If the write fails the in-memory
index is rolled back, so a failed operation leaves no trace.
"""

from __future__ import annotations

import copy
import json
import threading
from contextlib import contextmanager
from dataclasses import asdict
from pathlib import Path
from typing import Iterator

from mlagent.registry.models import ModelRecord, PipelineRecord, ResourceRecord


class RegistryError(Exception):
    """A registry operation could not be carried out."""


class ModelNotFoundError(RegistryError):
    pass


class PipelineNotFoundError(RegistryError):
    pass


class ResourceNotFoundError(RegistryError):
    pass


class LocalRegistry:
    """File-based local registry for ML artifacts."""

    INDEX_FILE = "index.json"

    def __init__(self, registry_dir: str | Path):
        self.registry_dir = Path(registry_dir)
        self.registry_dir.mkdir(parents=True, exist_ok=True)
        self.index_path = self.registry_dir / self.INDEX_FILE
        self._lock = threading.RLock()
        self._index: dict[str, dict] = self._load_index()

    # ------------------------------------------------------------------
    # Pipelines
    # ------------------------------------------------------------------

    def set_pipeline(self, name: str, description: str) -> None:
        """Insert or replace the pipeline description for ``name``."""
        if not name:
            raise RegistryError("Pipeline name must not be empty")
        with self._writing() as index:
            index["pipelines"][name] = description

    def get_pipeline(self, name: str) -> PipelineRecord:
        with self._lock:
            if name not in self._index["pipelines"]:
                raise PipelineNotFoundError(f"No pipeline named '{name}'")
            return PipelineRecord(name=name, description=self._index["pipelines"][name])

    def delete_pipeline(self, name: str) -> None:
        with self._writing() as index:
            if index["pipelines"].pop(name, None) is None:
                raise PipelineNotFoundError(f"No pipeline named '{name}'")

    def list_pipelines(self) -> list[PipelineRecord]:
        with self._lock:
            return [
                PipelineRecord(name=n, description=d)
                for n, d in self._index["pipelines"].items()
            ]

    # ------------------------------------------------------------------
    # Models
    # ------------------------------------------------------------------

    def add_model(
        self,
        name: str,
        path: str,
        active: bool = False,
        description: str = "",
        app_info: str = "",
    ) -> int:
        """Register a new version of model ``name`` and return its version.

        Adding an active version deactivates every other version of the name.
        """
        if not name or not path:
            raise RegistryError("Model name and path must not be empty")
        with self._writing() as index:
            slot = index["models"].setdefault(name, {"last_version": 0, "versions": []})
            version = slot["last_version"] + 1
            if active:
                for v in slot["versions"]:
                    v["active"] = False
            record = ModelRecord(
                name=name,
                version=version,
                path=path,
                active=active,
                description=description,
                app_info=app_info,
            )
            slot["versions"].append(asdict(record))
            slot["last_version"] = version
        return version

    def get_model(self, name: str, version: int) -> ModelRecord:
        with self._lock:
            return _dict_to_model(self._find_version(name, version))

    def get_activated_model(self, name: str) -> ModelRecord:
        with self._lock:
            for v in self._versions(name):
                if v["active"]:
                    return _dict_to_model(v)
        raise ModelNotFoundError(f"No activated version of model '{name}'")

    def get_models(self, name: str) -> list[ModelRecord]:
        """All registered versions of ``name``, oldest first."""
        with self._lock:
            return [_dict_to_model(v) for v in self._versions(name)]

    def list_models(self) -> list[ModelRecord]:
        with self._lock:
            return [
                _dict_to_model(v)
                for slot in self._index["models"].values()
                for v in slot["versions"]
            ]

    def activate_model(self, name: str, version: int) -> None:
        with self._writing():
            target = self._find_version(name, version)
            for v in self._versions(name):
                v["active"] = v is target

    def update_model_description(self, name: str, version: int, description: str) -> None:
        with self._writing():
            self._find_version(name, version)["description"] = description

    def delete_model(self, name: str, version: int) -> None:
        """Delete one version of a model. Version 0 deletes every version."""
        if version == 0:
            self.delete_all_model_versions(name)
            return
        with self._writing() as index:
            target = self._find_version(name, version)
            slot = index["models"][name]
            slot["versions"] = [v for v in slot["versions"] if v is not target]

    def delete_all_model_versions(self, name: str) -> None:
        with self._writing() as index:
            if not self._versions(name):
                raise ModelNotFoundError(f"No model named '{name}'")
            index["models"][name]["versions"] = []

    # ------------------------------------------------------------------
    # Resources
    # ------------------------------------------------------------------

    def add_resource(
        self, name: str, path: str, description: str = "", app_info: str = ""
    ) -> None:
        """Register a resource. An existing (name, path) pair is replaced."""
        if not name or not path:
            raise RegistryError("Resource name and path must not be empty")
        record = ResourceRecord(name=name, path=path, description=description, app_info=app_info)
        with self._writing() as index:
            items = index["resources"].setdefault(name, [])
            items[:] = [r for r in items if r["path"] != path]
            items.append(asdict(record))

    def get_resources(self, name: str) -> list[ResourceRecord]:
        with self._lock:
            items = self._index["resources"].get(name)
            if not items:
                raise ResourceNotFoundError(f"No resource named '{name}'")
            return [ResourceRecord(**r) for r in items]

    def list_resources(self) -> list[ResourceRecord]:
        with self._lock:
            return [
                ResourceRecord(**r)
                for items in self._index["resources"].values()
                for r in items
            ]

    def delete_resource(self, name: str) -> None:
        """Delete every resource registered under ``name``."""
        with self._writing() as index:
            if not index["resources"].pop(name, None):
                raise ResourceNotFoundError(f"No resource named '{name}'")

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @contextmanager
    def _writing(self) -> Iterator[dict[str, dict]]:
        """Hold the lock, then persist the changes or roll them back."""
        with self._lock:
            snapshot = copy.deepcopy(self._index)
            try:
                yield self._index
                self._save_index()
            except Exception:
                self._index = snapshot
                raise

    def _versions(self, name: str) -> list[dict]:
        slot = self._index["models"].get(name)
        return slot["versions"] if slot else []

    def _find_version(self, name: str, version: int) -> dict:
        for v in self._versions(name):
            if v["version"] == version:
                return v
        raise ModelNotFoundError(f"No model '{name}' with version {version}")

    def _load_index(self) -> dict[str, dict]:
        index: dict[str, dict] = {"models": {}, "pipelines": {}, "resources": {}}
        if self.index_path.exists():
            with open(self.index_path) as f:
                index.update(json.load(f))
        return index

    def _save_index(self):
        tmp_path = self.index_path.with_suffix(".tmp")
        try:
            with open(tmp_path, "w") as f:
                json.dump(self._index, f, indent=2)
            tmp_path.replace(self.index_path)
        except OSError as e:
            raise RegistryError(f"Failed to write registry index: {e}") from e


def _dict_to_model(data: dict) -> ModelRecord:
    return ModelRecord(
        name=data["name"],
        version=data["version"],
        path=data["path"],
        active=data.get("active", False),
        description=data.get("description", ""),
        app_info=data.get("app_info", ""),
    )
