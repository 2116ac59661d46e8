"""Installed package metadata."""

from mlagent.packages.info import (
    ManifestPackageInfoProvider,
    PackageInfoError,
    PackageInfoProvider,
    PackageResourceInfo,
    StaticPackageInfoProvider,
)

__all__ = [
    "ManifestPackageInfoProvider",
    "PackageInfoError",
    "PackageInfoProvider",
    "PackageResourceInfo",
    "StaticPackageInfoProvider",
]
