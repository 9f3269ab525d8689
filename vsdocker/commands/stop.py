# SPDX-License-Identifier: BUSL-1.1
"""vsdocker kill — stop the running container for the workspace image."""

import sys

from vsdocker.commands.common import docker_context, load_workspace
from vsdocker.docker import container_label, find_container, stop_container
from vsdocker.lock import image_lock


def cmd_stop(args):
    store, _, settings, ref = load_workspace(args)
    image_name = str(ref)

    with image_lock(store.locks_dir(), ref.repository):
        with docker_context(settings) as ctx:
            container = find_container(ctx, image_name)
            if container is None:
                print(f"Error: No running container for '{image_name}'.")
                sys.exit(1)
            print(f"Stopping {container_label(container)}...")
            stop_container(ctx, container["Id"])
    print("Container stopped.")
