# SPDX-License-Identifier: BUSL-1.1
"""vsdocker build — build the workspace image."""

import sys

from vsdocker.commands.common import docker_context, load_workspace
from vsdocker.docker import build_image
from vsdocker.lock import image_lock


def cmd_build(args):
    store, workspace, settings, ref = load_workspace(args)
    image_name = str(ref)

    print(f"Starting to build {image_name}")
    with image_lock(store.locks_dir(), ref.repository):
        with docker_context(settings) as ctx:
            outcome = build_image(
                ctx,
                image_name,
                workspace,
                dockerfile=settings.dockerfile,
                silent=getattr(args, "quiet", False),
            )

    if not outcome.succeeded:
        print(f"Build failed: {outcome.detail or 'unknown error'}")
        sys.exit(1)
    print("Build succeeded")
