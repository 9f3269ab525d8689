# SPDX-License-Identifier: BUSL-1.1
"""vsdocker find — show the running container for the workspace image."""

from vsdocker.commands.common import docker_context, load_workspace
from vsdocker.docker import container_label, find_container


def cmd_find(args):
    _, _, settings, ref = load_workspace(args)
    image_name = str(ref)

    with docker_context(settings) as ctx:
        container = find_container(ctx, image_name)

    if container is None:
        print(f"No running container for '{image_name}'.")
        return None
    print(f"Found container: {container_label(container)}")
    return container
