# SPDX-License-Identifier: BUSL-1.1
"""Configuration system — YAML settings loading, validation, and management."""

from vsdocker.config.resources import Settings
from vsdocker.config.loader import ConfigStore
from vsdocker.config.validation import validate_settings, ValidationError

__all__ = ["Settings", "ConfigStore", "validate_settings", "ValidationError"]
