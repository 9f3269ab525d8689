# SPDX-License-Identifier: BUSL-1.1
"""vsdocker save — autorun hook for an editor's on-save event."""

from vsdocker.commands.common import workspace_dir
from vsdocker.commands.run import run_workspace
from vsdocker.config import ConfigStore


def cmd_save(args):
    """Rebuild and restart without confirmation when autorun is enabled."""
    store = ConfigStore()
    settings = store.resolve_settings(workspace_dir(args))
    if not settings.autorun:
        print("autorun is disabled for this workspace; nothing to do.")
        print("Enable it with 'vsdocker config --autorun on'.")
        return None
    return run_workspace(args, autorun=True, silent=True, store=store)
