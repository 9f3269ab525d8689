# SPDX-License-Identifier: BUSL-1.1
"""Settings dataclass and its YAML (camelCase) mapping."""

from dataclasses import dataclass, fields


@dataclass
class Settings:
    """Options recognized in global.yaml and the workspace .vsdocker.yaml."""
    image_name: str = ""            # default: workspace directory name
    image_user: str = ""            # namespace, e.g. "acme"
    image_version: str = ""         # default: git short hash (+ "-dirty") or "latest"
    registry: str = ""              # e.g. "registry.example.com:5000"
    auth_config_path: str = ""      # JSON file with registry credentials for push
    autorun: bool = False           # rebuild and restart on save without asking
    docker_host: str = ""           # default: DOCKER_HOST / local socket
    dockerfile: str = "Dockerfile"  # manifest path, relative to the workspace


def _camel(name: str) -> str:
    parts = name.split("_")
    return parts[0] + "".join(p.capitalize() for p in parts[1:])


def settings_keys() -> list:
    """Return the camelCase keys accepted in settings files, in field order."""
    return [_camel(f.name) for f in fields(Settings)]


def settings_to_dict(settings: Settings) -> dict:
    """Convert Settings to a YAML-serializable dict with camelCase keys."""
    return {_camel(f.name): getattr(settings, f.name) for f in fields(Settings)}


def settings_from_dict(data: dict, base: Settings = None) -> Settings:
    """Build Settings from a YAML dict, layering it over ``base``.

    Keys may be camelCase or snake_case; unknown keys are ignored. A key
    present with a null value leaves the base value in place.
    """
    alias_map = {}
    for f in fields(Settings):
        alias_map[_camel(f.name)] = f.name
        alias_map[f.name] = f.name

    kwargs = settings_to_snake(base) if base is not None else {}
    for key, val in (data or {}).items():
        field_name = alias_map.get(key)
        if field_name is None or val is None:
            continue
        if field_name == "autorun":
            kwargs[field_name] = _as_bool(val)
        elif isinstance(val, str):
            kwargs[field_name] = val.strip()
        else:
            # YAML has already converted unquoted scalars (1.10 -> 1.1).
            raise ValueError(
                f"setting '{key}' must be a string, got {type(val).__name__} {val!r}; "
                f"quote it, e.g. {key}: \"{val}\""
            )
    return Settings(**kwargs)


def settings_to_snake(settings: Settings) -> dict:
    return {f.name: getattr(settings, f.name) for f in fields(Settings)}


def _as_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)
