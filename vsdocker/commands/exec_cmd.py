# SPDX-License-Identifier: BUSL-1.1
"""vsdocker exec — open a shell in the workspace container."""

from vsdocker.commands.common import docker_context, load_workspace
from vsdocker.commands.run import start_workspace
from vsdocker.docker import exec_into_container, find_container
from vsdocker.lock import image_lock
from vsdocker.utils import confirm


def cmd_exec(args):
    store, workspace, settings, ref = load_workspace(args)
    image_name = str(ref)

    with docker_context(settings) as ctx:
        container = find_container(ctx, image_name)
        if container is not None:
            container_id = container["Id"]
        else:
            if not confirm(f"No container running for '{image_name}'. Start one?", default=True):
                print("Exec cancelled.")
                return
            with image_lock(store.locks_dir(), ref.repository):
                container_id = start_workspace(ctx, workspace, settings, image_name)
            if container_id is None:
                return

    exec_into_container(container_id, docker_host=settings.docker_host, shell=args.shell)
