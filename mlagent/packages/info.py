"""Package metadata lookup.

Answers "what resource type and version does this installed package carry?".
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml


class PackageInfoError(Exception):
    """The metadata of a package could not be looked up."""


@dataclass(frozen=True)
class PackageResourceInfo:
    resource_type: str
    resource_version: str


class PackageInfoProvider:
    """Interface for metadata lookups."""

    def lookup(self, package_id: str) -> PackageResourceInfo:
        raise NotImplementedError


class StaticPackageInfoProvider(PackageInfoProvider):
    """In-memory lookup table, keyed by package id."""

    def __init__(self, packages: dict[str, PackageResourceInfo] | None = None) -> None:
        self.packages = dict(packages or {})

    def add(self, package_id: str, resource_type: str, resource_version: str) -> None:
        self.packages[package_id] = PackageResourceInfo(resource_type, resource_version)

    def lookup(self, package_id: str) -> PackageResourceInfo:
        try:
            return self.packages[package_id]
        except KeyError:
            raise PackageInfoError(f"Unknown package '{package_id}'") from None


class ManifestPackageInfoProvider(PackageInfoProvider):
    """Reads ``res_type`` and ``res_version`` from ``<apps_root>/<package_id>/package.yaml``.

    Both values must be YAML strings; quote versions such as ``"1.10"``.
    """

    MANIFEST_FILE = "package.yaml"

    def __init__(self, apps_root: str | Path) -> None:
        self.apps_root = Path(apps_root)

    def lookup(self, package_id: str) -> PackageResourceInfo:
        path = self.apps_root / package_id / self.MANIFEST_FILE
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise PackageInfoError(f"Cannot read manifest for '{package_id}': {e}") from e
        except yaml.YAMLError as e:
            raise PackageInfoError(f"Invalid manifest for '{package_id}': {e}") from e

        if not isinstance(data, dict):
            raise PackageInfoError(f"Manifest for '{package_id}' is not a mapping")

        for key in ("res_type", "res_version"):
            if not data.get(key):
                raise PackageInfoError(f"Manifest for '{package_id}' missing '{key}'")
            # Unquoted YAML scalars such as 1.10 load as numbers and lose digits.
            if not isinstance(data[key], str):
                raise PackageInfoError(
                    f"Manifest for '{package_id}': '{key}' must be a quoted string"
                )

        return PackageResourceInfo(
            resource_type=data["res_type"],
            resource_version=data["res_version"],
        )
