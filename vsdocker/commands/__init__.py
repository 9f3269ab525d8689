# SPDX-License-Identifier: BUSL-1.1
"""Command implementations for vsdocker CLI."""

from vsdocker.commands.build import cmd_build
from vsdocker.commands.run import cmd_run
from vsdocker.commands.find import cmd_find
from vsdocker.commands.stop import cmd_stop
from vsdocker.commands.push import cmd_push
from vsdocker.commands.logs import cmd_logs
from vsdocker.commands.exec_cmd import cmd_exec
from vsdocker.commands.save import cmd_save
from vsdocker.commands.config_cmd import cmd_config
from vsdocker.commands.describe import cmd_describe
from vsdocker.commands.validate_cmd import cmd_validate
__all__ = [
    "cmd_build", "cmd_run", "cmd_find", "cmd_stop", "cmd_push", "cmd_logs",
    "cmd_exec", "cmd_save", "cmd_config", "cmd_describe", "cmd_validate",
]
