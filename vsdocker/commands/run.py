# SPDX-License-Identifier: BUSL-1.1
"""vsdocker run — build the workspace image and (re)start its container."""

import sys
from pathlib import Path
from typing import Optional

from vsdocker.commands.common import docker_context, load_workspace
from vsdocker.docker import (
    DockerContext,
    build_image,
    container_label,
    find_container,
    image_id,
    run_container,
    stop_container,
    stream_logs,
)
from vsdocker.lock import image_lock
from vsdocker.manifest import read_exposed_ports
from vsdocker.utils import confirm


def _build(ctx: DockerContext, image_name: str, workspace: Path, settings, silent: bool) -> bool:
    outcome = build_image(ctx, image_name, workspace, dockerfile=settings.dockerfile, silent=silent)
    if not outcome.succeeded:
        print(f"Build failed: {outcome.detail or 'unknown error'}")
    return outcome.succeeded


def start_workspace(
    ctx: DockerContext,
    workspace: Path,
    settings,
    image_name: str,
    autorun: bool = False,
    silent: bool = False,
) -> Optional[str]:
    """Build image_name, replace a running container for it, and start a new one.

    With autorun a running container is stopped without asking; otherwise
    the user must confirm. Returns the new container id, or None when the
    build failed or the restart was declined.
    """
    previous_id = image_id(ctx, image_name)
    if not _build(ctx, image_name, workspace, settings, silent):
        return None

    existing = find_container(ctx, image_name, previous_id)
    if existing is not None:
        label = container_label(existing)
        if not autorun and not confirm(
            f"Container {label} is already running. Stop it and rebuild?", default=False
        ):
            print("Run cancelled.")
            return None
        print(f"Stopping {label}...")
        stop_container(ctx, existing["Id"])
        if not _build(ctx, image_name, workspace, settings, silent):
            return None

    ports = read_exposed_ports(workspace / (settings.dockerfile or "Dockerfile"))
    container_id = run_container(ctx, image_name, ports)
    published = ", ".join(f"{p}/tcp" for p in ports) or "no ports"
    print(f"Container running: {container_id[:12]} ({published})")
    return container_id


def run_workspace(args, autorun: bool = False, silent: bool = False, store=None) -> Optional[str]:
    """Shared body of `run` and `save`."""
    store, workspace, settings, ref = load_workspace(args, store)
    image_name = str(ref)
    detach = getattr(args, "detach", False)

    print(f"Building and running {image_name}")
    with docker_context(settings) as ctx:
        with image_lock(store.locks_dir(), ref.repository):
            container_id = start_workspace(
                ctx, workspace, settings, image_name, autorun=autorun, silent=silent,
            )
        if container_id and not detach:
            stream_logs(ctx, container_id)
    return container_id


def cmd_run(args):
    container_id = run_workspace(args, autorun=False, silent=getattr(args, "quiet", False))
    if container_id is None:
        sys.exit(1)
