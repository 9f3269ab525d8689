# SPDX-License-Identifier: BUSL-1.1
"""CLI argument parsing and command dispatch."""

import argparse
import sys

from vsdocker import __version__


def _add_workspace_arg(parser):
    parser.add_argument(
        "-w", "--workspace",
        help="Workspace root used as the build context (default: current directory)",
    )


def build_parser():
    parser = argparse.ArgumentParser(
        prog="vsdocker",
        description="vsdocker - build, run and inspect a workspace's Docker container",
    )
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")

    # build
    p_build = sub.add_parser("build", help="Build the workspace image")
    _add_workspace_arg(p_build)
    p_build.add_argument("-q", "--quiet", action="store_true",
                         help="Do not print build output")

    # run
    p_run = sub.add_parser("run", help="Build the image and (re)start its container")
    _add_workspace_arg(p_run)
    p_run.add_argument("-d", "--detach", action="store_true",
                       help="Do not follow container logs after starting")
    p_run.add_argument("-q", "--quiet", action="store_true",
                       help="Do not print build output")

    # find
    p_find = sub.add_parser("find", help="Show the running container for the workspace image")
    _add_workspace_arg(p_find)

    # kill / stop
    p_kill = sub.add_parser("kill", aliases=["stop"], help="Stop the workspace container")
    _add_workspace_arg(p_kill)

    # push
    p_push = sub.add_parser("push", help="Push the workspace image to its registry")
    _add_workspace_arg(p_push)

    # logs
    p_logs = sub.add_parser("logs", help="Follow the workspace container's logs")
    _add_workspace_arg(p_logs)

    # exec
    p_exec = sub.add_parser("exec", help="Open a shell in the workspace container")
    _add_workspace_arg(p_exec)
    p_exec.add_argument("--shell", default="/bin/sh", help="Shell to start (default: /bin/sh)")

    # save
    p_save = sub.add_parser(
        "save",
        help="On-save hook: rebuild and restart when autorun is enabled",
    )
    _add_workspace_arg(p_save)
    p_save.add_argument("-d", "--detach", action="store_true",
                        help="Do not follow container logs after starting")

    # describe
    p_desc = sub.add_parser("describe", help="Show resolved settings and image name")
    _add_workspace_arg(p_desc)

    # validate
    p_val = sub.add_parser("validate", help="Validate workspace settings")
    _add_workspace_arg(p_val)

    # config
    p_cfg = sub.add_parser("config", help="Show or edit settings")
    _add_workspace_arg(p_cfg)
    p_cfg.add_argument("--workspace-level", action="store_true",
                       help="Edit the workspace's .vsdocker.yaml instead of global.yaml")
    p_cfg.add_argument("--image-name", help="Set image name (default: workspace directory name)")
    p_cfg.add_argument("--image-user", help="Set image user/namespace")
    p_cfg.add_argument("--image-version", help="Set fixed image version (default: from git)")
    p_cfg.add_argument("--registry", help="Set registry host[:port]")
    p_cfg.add_argument("--auth-config", dest="auth_config_path",
                       help="Set path to registry auth JSON used by push")
    p_cfg.add_argument("--autorun", choices=["on", "off"],
                       help="Rebuild and restart on save without confirmation")
    p_cfg.add_argument("--docker-host", help="Set Docker daemon URL (e.g. unix:///var/run/docker.sock)")
    p_cfg.add_argument("--dockerfile", help="Set Dockerfile path relative to the workspace")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Lazy import commands to keep startup fast
    from docker.errors import DockerException
    from vsdocker.commands import (
        cmd_build, cmd_run, cmd_find, cmd_stop, cmd_push, cmd_logs,
        cmd_exec, cmd_save, cmd_config, cmd_describe, cmd_validate,
    )
    from vsdocker.config import ValidationError
    from vsdocker.image import ImageResolutionError
    from vsdocker.lock import CommandBusyError
    from vsdocker.manifest import ManifestError
    from vsdocker.utils import die

    commands = {
        "build": cmd_build,
        "run": cmd_run,
        "find": cmd_find,
        "kill": cmd_stop,
        "stop": cmd_stop,
        "push": cmd_push,
        "logs": cmd_logs,
        "exec": cmd_exec,
        "save": cmd_save,
        "describe": cmd_describe,
        "validate": cmd_validate,
        "config": cmd_config,
    }
    try:
        commands[args.command](args)
    except ImageResolutionError as e:
        die(f"Cannot resolve image version: {e}")
    except (ManifestError, CommandBusyError, ValidationError, ValueError) as e:
        die(str(e))
    except (DockerException, OSError) as e:
        die(f"Docker daemon request failed: {e}")
    except KeyboardInterrupt:
        print()
        sys.exit(130)


if __name__ == "__main__":
    main()
