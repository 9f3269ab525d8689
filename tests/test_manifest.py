# SPDX-License-Identifier: BUSL-1.1
"""Tests for Dockerfile EXPOSE extraction."""

import sys
import tempfile
import textwrap
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from vsdocker.manifest import ManifestError, parse_exposed_ports, read_exposed_ports


class TestParseExposedPorts(unittest.TestCase):
    def test_single_port(self):
        self.assertEqual(parse_exposed_ports("FROM alpine\nEXPOSE 8080\n"), [8080])

    def test_multiple_ports_and_lines(self):
        content = textwrap.dedent("""\
            FROM python:3.12-slim
            EXPOSE 8000 9000/tcp
            expose 8000
            EXPOSE 5353/udp
        """)
        self.assertEqual(parse_exposed_ports(content), [8000, 9000])

    def test_comments_and_continuations(self):
        content = textwrap.dedent("""\
            FROM alpine
            # EXPOSE 1111
            EXPOSE 80 \\
                443
        """)
        self.assertEqual(parse_exposed_ports(content), [80, 443])

    def test_comment_inside_continuation(self):
        content = "FROM a\nEXPOSE 80 \\\n# web\n    81\n"
        self.assertEqual(parse_exposed_ports(content), [80, 81])

    def test_port_range(self):
        self.assertEqual(parse_exposed_ports("EXPOSE 7000-7002\n"), [7000, 7001, 7002])

    def test_wide_range_deduplicated_in_order(self):
        ports = parse_exposed_ports("FROM a\nEXPOSE 1000-21000\nEXPOSE 1000 80\n")
        self.assertEqual(len(ports), 20002)
        self.assertEqual(ports[0], 1000)
        self.assertEqual(ports[-1], 80)

    def test_variable_from_arg_and_env(self):
        content = textwrap.dedent("""\
            FROM alpine
            ARG PORT=3000
            ENV ADMIN_PORT 3001
            EXPOSE $PORT ${ADMIN_PORT} ${OTHER:-3002}
        """)
        self.assertEqual(parse_exposed_ports(content), [3000, 3001, 3002])

    def test_undefined_variable(self):
        with self.assertRaises(ManifestError):
            parse_exposed_ports("FROM alpine\nEXPOSE $PORT\n")

    def test_malformed_port(self):
        with self.assertRaises(ManifestError):
            parse_exposed_ports("EXPOSE http\n")

    def test_out_of_range(self):
        with self.assertRaises(ManifestError):
            parse_exposed_ports("EXPOSE 70000\n")

    def test_empty_expose(self):
        with self.assertRaises(ManifestError):
            parse_exposed_ports("EXPOSE\n")

    def test_no_expose(self):
        self.assertEqual(parse_exposed_ports("FROM alpine\nCMD [\"sh\"]\n"), [])


class TestReadExposedPorts(unittest.TestCase):
    def test_missing_dockerfile(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            self.assertEqual(read_exposed_ports(Path(tmpdir) / "Dockerfile"), [])

    def test_reads_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "Dockerfile"
            path.write_text("FROM alpine\nEXPOSE 8080\n")
            self.assertEqual(read_exposed_ports(path), [8080])


if __name__ == "__main__":
    unittest.main()
