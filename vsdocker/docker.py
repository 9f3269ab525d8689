# SPDX-License-Identifier: BUSL-1.1
"""Docker operations — build images, run containers, query state."""

import codecs
import json
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import docker
from docker.errors import DockerException, NotFound

BUILD_CHANNEL = "Container Build"
LOGS_CHANNEL = "Container Logs"
PUSH_CHANNEL = "Container Push"

# Errors a daemon round trip can raise. requests' connection errors are OSErrors.
DAEMON_ERRORS = (DockerException, OSError)


@dataclass
class BuildOutcome:
    succeeded: bool
    detail: Optional[str] = None


class OutputChannel:
    """Append-only named text channel; prints its header before the first write."""

    def __init__(self, name: str, stream=None):
        self.name = name
        self.stream = stream
        self._started = False

    def append(self, text: str):
        if not text:
            return
        out = self.stream or sys.stdout
        if not self._started:
            out.write(f"── {self.name} ──\n")
            self._started = True
        out.write(text)
        out.flush()

    def append_line(self, text: str):
        self.append(text.rstrip("\n") + "\n")


class DockerContext:
    """Owns the daemon client and the output channels for one command.

    Use as a context manager, or call open() and close() explicitly.
    """

    def __init__(self, base_url: str = "", stream=None):
        self.base_url = base_url
        self.stream = stream
        self.client = None
        self._channels = {}

    def open(self):
        if self.client is None:
            if self.base_url:
                self.client = docker.DockerClient(base_url=self.base_url)
            else:
                self.client = docker.from_env()
        return self

    def close(self):
        if self.client is not None:
            self.client.close()
            self.client = None
        self._channels.clear()

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    @property
    def api(self):
        """Low-level APIClient of the open daemon client."""
        if self.client is None:
            raise RuntimeError("DockerContext is not open")
        return self.client.api

    def channel(self, name: str) -> OutputChannel:
        """Return the named output channel, creating it on first use."""
        if name not in self._channels:
            self._channels[name] = OutputChannel(name, stream=self.stream)
        return self._channels[name]


def _event_error(event) -> Optional[str]:
    """Return the error message carried by a decoded stream event, if any."""
    if not isinstance(event, dict):
        return None
    if event.get("errorDetail"):
        detail = event["errorDetail"]
        if isinstance(detail, dict):
            return detail.get("message") or event.get("error") or str(detail)
        return str(detail)
    if event.get("error"):
        return str(event["error"])
    return None


# ── Build ────────────────────────────────────────────────────────────────

def build_image(
    ctx: DockerContext,
    image_name: str,
    workspace: Path,
    dockerfile: str = "Dockerfile",
    silent: bool = False,
) -> BuildOutcome:
    """Build the workspace directory into image_name.

    The SDK packs the workspace into the tar build context. Any event with
    an error marks the build failed; later events never clear it.
    """
    output = ctx.channel(BUILD_CHANNEL)
    succeeded = True
    detail = None
    try:
        events = ctx.api.build(
            path=str(workspace),
            tag=image_name,
            dockerfile=dockerfile or "Dockerfile",
            rm=True,
            decode=True,
        )
        for event in events:
            error = _event_error(event)
            if error:
                succeeded = False
                if detail is None:
                    detail = error
                if not silent:
                    output.append_line(f"ERROR: {error}")
                continue
            if silent or not isinstance(event, dict):
                continue
            text = event.get("stream") or event.get("status") or ""
            if text:
                output.append(text)
    except DAEMON_ERRORS as e:
        return BuildOutcome(False, str(e))
    return BuildOutcome(succeeded, detail)


# ── Container queries ────────────────────────────────────────────────────

def image_id(ctx: DockerContext, image_name: str) -> Optional[str]:
    """Return the id the tag image_name currently points at, or None."""
    try:
        return ctx.api.inspect_image(image_name).get("Id")
    except NotFound:
        return None


def find_container(ctx: DockerContext, image_name: str, previous_id: str = None) -> Optional[dict]:
    """Return the first listed container whose Image equals image_name.

    Once a rebuild moves the tag, the daemon lists older containers by image
    id instead of name; previous_id (the id before the build) matches those.
    """
    for info in ctx.api.containers():
        if info.get("Image") == image_name:
            return info
        if previous_id and previous_id in (info.get("ImageID"), info.get("Image")):
            return info
    return None


def container_label(info: dict) -> str:
    """Return a short human label for a container summary."""
    names = [n.lstrip("/") for n in info.get("Names") or []]
    short_id = (info.get("Id") or "")[:12]
    if names:
        return f"{names[0]} ({short_id})"
    return short_id


# ── Run ──────────────────────────────────────────────────────────────────

def container_config(image_name: str, ports: list) -> dict:
    """Build the create-container config exposing each port on the same host port."""
    exposed = {}
    bindings = {}
    for port in ports:
        key = f"{port}/tcp"
        exposed[key] = {}
        bindings[key] = [{"HostPort": str(port)}]
    return {
        "Image": image_name,
        "ExposedPorts": exposed,
        "HostConfig": {"PortBindings": bindings},
    }


def run_container(ctx: DockerContext, image_name: str, ports: list = None) -> str:
    """Create and start a container for image_name; return its id."""
    config = container_config(image_name, ports or [])
    created = ctx.api.create_container_from_config(config)
    for warning in created.get("Warnings") or []:
        print(f"Warning: {warning}")
    container_id = created["Id"]
    ctx.api.start(container_id)
    return container_id


def stop_container(ctx: DockerContext, container_id: str):
    ctx.api.stop(container_id)


# ── Logs ─────────────────────────────────────────────────────────────────

def stream_logs(ctx: DockerContext, container_id: str):
    """Forward the container's combined stdout/stderr until the daemon closes it."""
    output = ctx.channel(LOGS_CHANNEL)
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    for chunk in ctx.api.logs(container_id, stdout=True, stderr=True, stream=True, follow=True):
        output.append(decoder.decode(chunk))
    output.append(decoder.decode(b"", final=True))


# ── Push ─────────────────────────────────────────────────────────────────

def load_auth_config(path: str) -> Optional[dict]:
    """Read registry credentials from a JSON file; None when no path is set."""
    if not path:
        return None
    p = Path(path).expanduser()
    try:
        with open(p) as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ValueError(f"cannot read auth config {p}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"auth config {p} must be a JSON object")
    return data


def push_image(
    ctx: DockerContext,
    repository: str,
    tag: str,
    auth_config: dict = None,
) -> BuildOutcome:
    """Push repository:tag to its registry, forwarding progress to the push channel."""
    output = ctx.channel(PUSH_CHANNEL)
    succeeded = True
    detail = None
    try:
        events = ctx.api.push(
            repository,
            tag=tag,
            auth_config=auth_config,
            stream=True,
            decode=True,
        )
        for event in events:
            error = _event_error(event)
            if error:
                succeeded = False
                if detail is None:
                    detail = error
                output.append_line(f"ERROR: {error}")
                continue
            if not isinstance(event, dict) or not event.get("status"):
                continue
            line = event["status"]
            if event.get("id"):
                line = f"{event['id']}: {line}"
            if event.get("progress"):
                line = f"{line} {event['progress']}"
            output.append_line(line)
    except DAEMON_ERRORS as e:
        return BuildOutcome(False, str(e))
    return BuildOutcome(succeeded, detail)


# ── Exec ─────────────────────────────────────────────────────────────────

def exec_into_container(container_id: str, docker_host: str = "", shell: str = "/bin/sh"):
    """Exec an interactive shell in a running container, replacing this process."""
    cmd = ["docker"]
    if docker_host:
        cmd.extend(["-H", docker_host])
    cmd.extend(["exec", "-it", container_id, shell])
    os.execvp("docker", cmd)
