# SPDX-License-Identifier: BUSL-1.1
"""Validation of effective settings.

Checks that the pieces of the resolved image name are acceptable to the
Docker daemon and that referenced files and hosts look usable.
"""

import re
from pathlib import Path

# Docker repository path component and tag grammar.
_COMPONENT_RE = re.compile(r"^[a-z0-9]+(?:(?:[._]|__|-+)[a-z0-9]+)*$")
_TAG_RE = re.compile(r"^[\w][\w.-]{0,127}$")
_HOST_SCHEMES = ("unix://", "tcp://", "ssh://", "npipe://", "http://", "https://")


class ValidationError(Exception):
    """Raised when settings validation fails."""
    def __init__(self, errors: list, warnings: list = None):
        self.errors = errors
        self.warnings = warnings or []
        msg = "; ".join(errors)
        super().__init__(msg)


class ValidationResult:
    """Collects errors and warnings from validation."""
    def __init__(self):
        self.errors = []
        self.warnings = []

    def error(self, msg: str):
        self.errors.append(msg)

    def warn(self, msg: str):
        self.warnings.append(msg)

    @property
    def valid(self) -> bool:
        return len(self.errors) == 0

    def raise_if_invalid(self):
        if not self.valid:
            raise ValidationError(self.errors, self.warnings)


def validate_settings(settings, workspace: Path = None) -> ValidationResult:
    """Check settings for values the daemon would reject."""
    result = ValidationResult()
    s = settings

    if s.image_name:
        for part in s.image_name.split("/"):
            if not _COMPONENT_RE.match(part):
                result.error(
                    f"imageName '{s.image_name}' is not a valid repository name "
                    "(lower-case letters, digits and . _ - separators)"
                )
                break
    elif workspace is not None and not _COMPONENT_RE.match(Path(workspace).resolve().name):
        result.warn(
            f"workspace directory name '{Path(workspace).resolve().name}' is not a valid "
            "repository name; set imageName"
        )

    if s.image_user and not _COMPONENT_RE.match(s.image_user):
        result.error(f"imageUser '{s.image_user}' is not a valid repository namespace")

    if s.image_version and not _TAG_RE.match(s.image_version):
        result.error(f"imageVersion '{s.image_version}' is not a valid tag")

    if s.registry:
        if "://" in s.registry:
            result.error(f"registry '{s.registry}' must be a host[:port], not a URL")
        elif "/" in s.registry.strip("/"):
            result.error(f"registry '{s.registry}' must not contain a path")

    if s.auth_config_path:
        p = Path(s.auth_config_path).expanduser()
        if not p.is_file():
            result.warn(f"authConfigPath '{s.auth_config_path}' does not exist; push will be anonymous")

    if s.docker_host and not s.docker_host.startswith(_HOST_SCHEMES):
        result.error(
            f"dockerHost '{s.docker_host}' must start with one of: {', '.join(_HOST_SCHEMES)}"
        )

    if workspace is not None:
        dockerfile = Path(workspace) / (s.dockerfile or "Dockerfile")
        if not dockerfile.is_file():
            result.warn(f"no Dockerfile at {dockerfile}")

    return result
