# SPDX-License-Identifier: BUSL-1.1
"""Shared utilities for vsdocker."""

import sys


def die(msg: str, code: int = 1):
    """Print error message and exit."""
    print(f"Error: {msg}")
    sys.exit(code)


def confirm(prompt: str, default: bool = False) -> bool:
    """Ask a yes/no question. Returns True for yes."""
    suffix = "[Y/n]" if default else "[y/N]"
    try:
        answer = input(f"{prompt} {suffix}: ").strip().lower()
    except EOFError:
        return default
    if not answer:
        return default
    return answer in ("y", "yes")
