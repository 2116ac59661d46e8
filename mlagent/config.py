"""Agent configuration.

Settings are resolved from defaults, then an optional YAML file, then
``MLAGENT_*`` environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

DEFAULT_REGISTRY_PATH = "/var/lib/ml-agent/registry"
DEFAULT_APPS_ROOT = "/opt/usr/globalapps"
DEFAULT_RESOURCE_SUBPATH = "res/global"
DEFAULT_PACKAGE_CATEGORY = "rpk"

ENV_OVERRIDES = {
    "MLAGENT_REGISTRY_PATH": "registry_path",
    "MLAGENT_APPS_ROOT": "apps_root",
    "MLAGENT_PACKAGE_CATEGORY": "package_category",
}


@dataclass
class AgentConfig:
    """Runtime settings for the agent."""

    registry_path: str = DEFAULT_REGISTRY_PATH
    apps_root: str = DEFAULT_APPS_ROOT
    resource_subpath: str = DEFAULT_RESOURCE_SUBPATH
    package_category: str = DEFAULT_PACKAGE_CATEGORY
    verbose: bool = False

    def package_root(self, package_id: str) -> Path:
        """Resource area of an installed package."""
        return Path(self.apps_root) / package_id / self.resource_subpath

    def artifact_root(self, package_id: str, resource_type: str) -> Path:
        """Directory holding the descriptor files of a package."""
        return self.package_root(package_id) / resource_type


def load_config(path: str | Path | None = None, environ: dict | None = None) -> AgentConfig:
    """Build an AgentConfig from an optional YAML file and the environment."""
    config = AgentConfig()
    known = {f.name for f in fields(AgentConfig)}

    if path:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        for key, value in data.items():
            if key in known:
                setattr(config, key, value)

    env = os.environ if environ is None else environ
    for var, attr in ENV_OVERRIDES.items():
        if env.get(var):
            setattr(config, attr, env[var])

    return config
