# SPDX-License-Identifier: BUSL-1.1
"""vsdocker push — push the workspace image to its registry."""

import sys

from vsdocker.commands.common import docker_context, load_workspace
from vsdocker.docker import load_auth_config, push_image
from vsdocker.lock import image_lock


def cmd_push(args):
    store, _, settings, ref = load_workspace(args)
    image_name = str(ref)
    auth_config = load_auth_config(settings.auth_config_path)
    if ref.registry is None and ref.user is None:
        print(f"Warning: '{image_name}' has no registry or user; pushing to docker.io/library.")

    print(f"Pushing {image_name}")
    with image_lock(store.locks_dir(), ref.repository):
        with docker_context(settings) as ctx:
            outcome = push_image(ctx, ref.repository, ref.version, auth_config)

    if not outcome.succeeded:
        print(f"Push failed: {outcome.detail or 'unknown error'}")
        sys.exit(1)
    print("Push succeeded")
