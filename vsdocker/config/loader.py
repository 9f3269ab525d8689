# SPDX-License-Identifier: BUSL-1.1
"""YAML settings file discovery, loading, and saving."""

import os
from pathlib import Path
from typing import Optional

import yaml

from vsdocker.config.resources import Settings, settings_from_dict


CONFIG_DIR = Path(os.environ.get("VSDOCKER_CONFIG_DIR", "") or Path.home() / ".config" / "vsdocker")

WORKSPACE_FILE = ".vsdocker.yaml"


class ConfigStore:
    """Manages the global and per-workspace settings files.

    Layout:
        ~/.config/vsdocker/
        ├── global.yaml              # defaults applied to every workspace
        └── locks/                   # per-image command locks
        <workspace>/.vsdocker.yaml   # workspace overrides
    """

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = config_dir or CONFIG_DIR
        self.global_file = self.config_dir / "global.yaml"
        self._global_cache = None

    def ensure_dirs(self):
        """Create config directory structure."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.locks_dir().mkdir(exist_ok=True)

    def locks_dir(self) -> Path:
        return self.config_dir / "locks"

    # ── Global config ────────────────────────────────────────────────

    def load_global(self) -> dict:
        """Load global.yaml."""
        if self._global_cache is not None:
            return self._global_cache
        self._global_cache = _read_yaml(self.global_file)
        return self._global_cache

    def save_global(self, data: dict):
        """Write global.yaml."""
        self.ensure_dirs()
        _write_yaml(self.global_file, data)
        self._global_cache = data

    # ── Workspace config ─────────────────────────────────────────────

    @staticmethod
    def workspace_file(workspace: Path) -> Path:
        return Path(workspace) / WORKSPACE_FILE

    def load_workspace(self, workspace: Path) -> dict:
        """Load <workspace>/.vsdocker.yaml, or {} when absent."""
        return _read_yaml(self.workspace_file(workspace))

    def save_workspace(self, workspace: Path, data: dict):
        _write_yaml(self.workspace_file(workspace), data)

    # ── Resolve ──────────────────────────────────────────────────────

    def resolve_settings(self, workspace: Path) -> Settings:
        """Return effective settings: defaults < global.yaml < workspace file."""
        settings = settings_from_dict(self.load_global())
        return settings_from_dict(self.load_workspace(workspace), base=settings)


def _read_yaml(path: Path) -> dict:
    if not path.exists():
        return {}
    with open(path) as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"{path}: invalid YAML: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping of settings")
    return data


def _write_yaml(path: Path, data: dict):
    with open(path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)
