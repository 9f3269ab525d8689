# SPDX-License-Identifier: BUSL-1.1
"""vsdocker logs — follow the logs of the workspace container."""

import sys

from vsdocker.commands.common import docker_context, load_workspace
from vsdocker.docker import find_container, stream_logs


def cmd_logs(args):
    _, _, settings, ref = load_workspace(args)
    image_name = str(ref)

    with docker_context(settings) as ctx:
        container = find_container(ctx, image_name)
        if container is None:
            print(f"Error: No running container for '{image_name}'.")
            sys.exit(1)
        stream_logs(ctx, container["Id"])
