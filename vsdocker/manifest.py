# SPDX-License-Identifier: BUSL-1.1
"""Dockerfile reading — extract the ports a workspace image exposes."""

import re
from pathlib import Path

_VAR_RE = re.compile(r"\$(?:\{(\w+)(?::-([^}]*))?\}|(\w+))")


class ManifestError(Exception):
    """Raised when the Dockerfile cannot be read or an EXPOSE value is malformed."""


def _logical_lines(content: str) -> list:
    """Join backslash continuations and drop comments and blank lines.

    Comment and blank lines inside a continuation are skipped without
    ending the instruction.
    """
    lines = []
    pending = []
    for raw in content.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        match = re.search(r"\\\s*$", line)
        if match:
            pending.append(line[:match.start()].strip())
            continue
        pending.append(line)
        lines.append(" ".join(p for p in pending if p))
        pending = []
    if pending:
        lines.append(" ".join(p for p in pending if p))
    return [line for line in lines if line]


def _substitute(value: str, variables: dict) -> str:
    def repl(match):
        name = match.group(1) or match.group(3)
        default = match.group(2)
        if name in variables:
            return variables[name]
        if default is not None:
            return default
        raise ManifestError(f"EXPOSE references undefined variable ${name}")
    return _VAR_RE.sub(repl, value)


def _parse_assignments(args: str, variables: dict):
    """Record ARG/ENV defaults so EXPOSE $PORT can be resolved."""
    if "=" in args:
        for item in args.split():
            if "=" in item:
                key, _, val = item.partition("=")
                variables[key] = val.strip("\"'")
    else:
        parts = args.split(None, 1)
        if len(parts) == 2:
            variables[parts[0]] = parts[1].strip("\"'")


def _expand_port(spec: str) -> list:
    """Return (port, protocol) pairs for one EXPOSE token."""
    port_part, _, proto = spec.partition("/")
    proto = (proto or "tcp").lower()
    if proto not in ("tcp", "udp", "sctp"):
        raise ManifestError(f"invalid EXPOSE protocol in '{spec}'")

    if "-" in port_part:
        start_s, _, end_s = port_part.partition("-")
    else:
        start_s = end_s = port_part
    if not (start_s.isdigit() and end_s.isdigit()):
        raise ManifestError(f"invalid EXPOSE port '{spec}'")
    start, end = int(start_s), int(end_s)
    if not (0 < start <= end <= 65535):
        raise ManifestError(f"EXPOSE port out of range: '{spec}'")
    return [(port, proto) for port in range(start, end + 1)]


def parse_exposed_ports(content: str) -> list:
    """Return TCP ports declared with EXPOSE, in declaration order, deduplicated.

    Ports declared for other protocols are skipped.
    """
    variables = {}
    ports = {}
    for line in _logical_lines(content):
        parts = line.split(None, 1)
        instruction = parts[0].upper()
        args = parts[1] if len(parts) > 1 else ""
        if instruction in ("ARG", "ENV"):
            _parse_assignments(args, variables)
        elif instruction == "FROM":
            # ARG and ENV values are scoped to a build stage.
            variables = {}
        elif instruction == "EXPOSE":
            if not args:
                raise ManifestError("EXPOSE requires at least one port")
            for token in _substitute(args, variables).split():
                for port, proto in _expand_port(token):
                    if proto == "tcp":
                        ports.setdefault(port)
    return list(ports)


def read_exposed_ports(dockerfile: Path) -> list:
    """Read a Dockerfile and return its exposed TCP ports.

    A missing Dockerfile exposes nothing.
    """
    dockerfile = Path(dockerfile)
    if not dockerfile.is_file():
        return []
    try:
        content = dockerfile.read_text()
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestError(f"cannot read {dockerfile}: {e}") from e
    return parse_exposed_ports(content)
