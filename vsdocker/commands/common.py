# SPDX-License-Identifier: BUSL-1.1
"""Helpers shared by the vsdocker commands."""

from pathlib import Path

from vsdocker.config import ConfigStore, validate_settings
from vsdocker.docker import DockerContext
from vsdocker.image import resolve_image_reference


def workspace_dir(args) -> Path:
    """Return the workspace root named on the command line (default: cwd)."""
    raw = str(getattr(args, "workspace", "") or "").strip()
    workspace = Path(raw).expanduser() if raw else Path.cwd()
    workspace = workspace.resolve()
    if not workspace.is_dir():
        raise ValueError(f"workspace '{workspace}' is not a directory")
    return workspace


def load_workspace(args, store: ConfigStore = None):
    """Resolve (store, workspace, settings, image reference) for a command.

    The image reference is recomputed on every call. Invalid settings raise
    ValidationError before any daemon call is made.
    """
    store = store or ConfigStore()
    workspace = workspace_dir(args)
    settings = store.resolve_settings(workspace)
    result = validate_settings(settings)
    for w in result.warnings:
        print(f"Warning: {w}")
    result.raise_if_invalid()
    ref = resolve_image_reference(workspace, settings)
    return store, workspace, settings, ref


def docker_context(settings) -> DockerContext:
    return DockerContext(base_url=settings.docker_host)
