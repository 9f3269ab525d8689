# SPDX-License-Identifier: BUSL-1.1
"""Image identity — resolve the registry/user/name:version tag for a workspace."""

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_VERSION = "latest"
DIRTY_SUFFIX = "-dirty"


class ImageResolutionError(Exception):
    """Raised when the image version cannot be derived from git."""


@dataclass(frozen=True)
class ImageReference:
    name: str
    version: str = DEFAULT_VERSION
    registry: Optional[str] = None
    user: Optional[str] = None

    def __post_init__(self):
        if not self.name:
            raise ValueError("image name must not be empty")

    @property
    def repository(self) -> str:
        """Return the name without the version tag."""
        parts = [p for p in (self.registry, self.user, self.name) if p]
        return "/".join(parts)

    def __str__(self) -> str:
        return f"{self.repository}:{self.version}"


def _git(workspace: Path, *args) -> str:
    """Run a git command in the workspace and return its stdout.

    Raises ImageResolutionError on a non-zero exit or a missing git binary.
    """
    cmd = ["git", "-C", str(workspace), *args]
    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except FileNotFoundError as e:
        raise ImageResolutionError(f"git is not installed: {e}") from e
    if result.returncode != 0:
        output = (result.stderr or result.stdout or "").strip()
        raise ImageResolutionError(
            f"'git {' '.join(args)}' exited with {result.returncode}: {output}"
        )
    return result.stdout


def resolve_version(workspace: Path, override: str = "") -> str:
    """Return the image version for a workspace.

    An explicit override wins. Without a .git directory the version is
    "latest"; otherwise it is the short revision of HEAD, suffixed with
    "-dirty" when `git status --porcelain` reports changes.
    """
    if override:
        return override
    workspace = Path(workspace)
    if not (workspace / ".git").exists():
        return DEFAULT_VERSION

    revision = _git(workspace, "log", "-1", "--pretty=format:%h").strip()
    if not revision:
        raise ImageResolutionError(f"no commits found in {workspace}")
    status = _git(workspace, "status", "--porcelain")
    if status.strip():
        return f"{revision}{DIRTY_SUFFIX}"
    return revision


def resolve_image_reference(workspace: Path, settings) -> ImageReference:
    """Compute the ImageReference for a workspace from its settings."""
    workspace = Path(workspace).resolve()
    name = (settings.image_name or "").strip() or workspace.name
    return ImageReference(
        name=name,
        version=resolve_version(workspace, (settings.image_version or "").strip()),
        registry=(settings.registry or "").strip().rstrip("/") or None,
        user=(settings.image_user or "").strip() or None,
    )


def resolve_image_name(workspace: Path, settings) -> str:
    """Return the "[registry/][user/]name:version" tag for a workspace."""
    return str(resolve_image_reference(workspace, settings))
