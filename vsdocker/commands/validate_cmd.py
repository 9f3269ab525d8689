# SPDX-License-Identifier: BUSL-1.1
"""vsdocker validate — check workspace settings."""

import sys

from vsdocker.commands.common import workspace_dir
from vsdocker.config import ConfigStore, validate_settings


def cmd_validate(args):
    workspace = workspace_dir(args)
    settings = ConfigStore().resolve_settings(workspace)
    result = validate_settings(settings, workspace=workspace)

    for w in result.warnings:
        print(f"  WARNING: {w}")
    for e in result.errors:
        print(f"  ERROR: {e}")

    if result.valid:
        print(f"Settings for {workspace} are valid.")
    else:
        print(f"\nSettings for {workspace} have {len(result.errors)} error(s).")
        sys.exit(1)
