"""App-info — provenance attached to every artifact registered from a package."""

from __future__ import annotations

import json
from dataclasses import dataclass

RPK_FLAG = "T"


@dataclass(frozen=True)
class AppInfo:
    """Which package an artifact was installed from."""

    package_id: str
    resource_type: str
    resource_version: str
    is_rpk: str = RPK_FLAG

    def to_json(self) -> str:
        return json.dumps(
            {
                "is_rpk": self.is_rpk,
                "app_id": self.package_id,
                "res_type": self.resource_type,
                "res_version": self.resource_version,
            },
            indent=2,
        )

    @classmethod
    def from_json(cls, text: str) -> AppInfo:
        data = json.loads(text)
        return cls(
            package_id=data["app_id"],
            resource_type=data["res_type"],
            resource_version=data["res_version"],
            is_rpk=data.get("is_rpk", RPK_FLAG),
        )


def compose_app_info(package_id: str, resource_type: str, resource_version: str) -> AppInfo:
    return AppInfo(
        package_id=package_id,
        resource_type=resource_type,
        resource_version=resource_version,
    )
