# SPDX-License-Identifier: BUSL-1.1
"""vsdocker describe — show resolved settings and image identity for a workspace."""

import yaml

from vsdocker.commands.common import load_workspace
from vsdocker.config.resources import settings_to_dict
from vsdocker.manifest import read_exposed_ports


def cmd_describe(args):
    _, workspace, settings, ref = load_workspace(args)
    ports = read_exposed_ports(workspace / (settings.dockerfile or "Dockerfile"))

    print(f"=== Workspace: {workspace} ===\n")
    print(yaml.dump(settings_to_dict(settings), default_flow_style=False, sort_keys=False))
    print("=== Image ===\n")
    print(f"  registry:   {ref.registry or '(none)'}")
    print(f"  user:       {ref.user or '(none)'}")
    print(f"  name:       {ref.name}")
    print(f"  version:    {ref.version}")
    print(f"  reference:  {ref}")
    print(f"  ports:      {', '.join(f'{p}/tcp' for p in ports) or '(none)'}")
