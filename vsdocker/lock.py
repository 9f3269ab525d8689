# SPDX-License-Identifier: BUSL-1.1
"""Per-image advisory locks so overlapping commands do not race."""

import fcntl
import re
from contextlib import contextmanager
from pathlib import Path


class CommandBusyError(Exception):
    """Raised when another command already holds the lock for an image."""


def lock_path(locks_dir: Path, repository: str) -> Path:
    """Return the lock file for an image repository."""
    safe = re.sub(r"[^A-Za-z0-9._-]", "_", repository)
    return Path(locks_dir) / f"{safe}.lock"


@contextmanager
def image_lock(locks_dir: Path, repository: str):
    """Hold an exclusive, non-blocking lock for an image repository.

    Raises CommandBusyError when another process holds it.
    """
    path = lock_path(locks_dir, repository)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "a") as f:
        try:
            fcntl.flock(f.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
        except BlockingIOError as e:
            raise CommandBusyError(
                f"another vsdocker command is already running for '{repository}'"
            ) from e
        try:
            yield path
        finally:
            fcntl.flock(f.fileno(), fcntl.LOCK_UN)
