# SPDX-License-Identifier: BUSL-1.1
"""vsdocker - build, run and inspect a workspace's Docker container."""

__version__ = "0.1.0"
