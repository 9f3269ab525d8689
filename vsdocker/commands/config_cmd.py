# SPDX-License-Identifier: BUSL-1.1
"""vsdocker config — show or edit global or workspace settings."""

from pathlib import Path

from vsdocker.commands.common import workspace_dir
from vsdocker.config import ConfigStore
from vsdocker.config.resources import settings_keys, settings_to_dict

# argparse dest → settings key
_OPTIONS = {
    "image_name": "imageName",
    "image_user": "imageUser",
    "image_version": "imageVersion",
    "registry": "registry",
    "auth_config_path": "authConfigPath",
    "autorun": "autorun",
    "docker_host": "dockerHost",
    "dockerfile": "dockerfile",
}


def cmd_config(args):
    store = ConfigStore()
    workspace = workspace_dir(args)
    workspace_level = getattr(args, "workspace_level", False)
    data = dict(store.load_workspace(workspace) if workspace_level else store.load_global())
    changed = False

    for dest, key in _OPTIONS.items():
        value = getattr(args, dest, None)
        if value is None:
            continue
        if key == "autorun":
            value = value == "on"
        elif key == "authConfigPath" and value:
            p = Path(value).expanduser().resolve()
            if not p.is_file():
                print(f"Warning: auth config not found: {p}")
            value = str(p)
        if value == "":
            data.pop(key, None)
        else:
            data[key] = value
        changed = True

    if changed:
        if workspace_level:
            store.save_workspace(workspace, data)
            print(f"Workspace config updated ({store.workspace_file(workspace)}).")
        else:
            store.save_global(data)
            print(f"Config updated ({store.global_file}).")

    effective = settings_to_dict(store.resolve_settings(workspace))
    global_data = store.load_global()
    local_data = store.load_workspace(workspace)
    print(f"\nEffective settings for {workspace}:")
    for key in settings_keys():
        if key in local_data:
            source = "workspace"
        elif key in global_data:
            source = "global"
        else:
            source = "default"
        value = effective[key]
        shown = "(not set)" if value == "" else value
        print(f"  {key + ':':<16}{shown!s:<32} [{source}]")
