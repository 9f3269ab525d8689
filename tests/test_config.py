# SPDX-License-Identifier: BUSL-1.1
"""Tests for settings loading, layering, validation and the config command."""

import argparse
import io
import sys
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest import mock

import yaml

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from vsdocker.config import ConfigStore, Settings, validate_settings
from vsdocker.config.resources import settings_from_dict, settings_to_dict
from vsdocker.cli import main


class TestSettingsMapping(unittest.TestCase):
    def test_camel_case_keys(self):
        s = settings_from_dict({
            "imageName": "svc",
            "imageUser": "acme",
            "imageVersion": "v2",
            "registry": "reg.io",
            "authConfigPath": "~/auth.json",
            "autorun": True,
        })
        self.assertEqual(s.image_name, "svc")
        self.assertEqual(s.image_user, "acme")
        self.assertEqual(s.image_version, "v2")
        self.assertEqual(s.registry, "reg.io")
        self.assertEqual(s.auth_config_path, "~/auth.json")
        self.assertTrue(s.autorun)

    def test_unknown_and_null_keys_ignored(self):
        base = Settings(image_name="svc")
        s = settings_from_dict({"imageName": None, "color": "blue"}, base=base)
        self.assertEqual(s.image_name, "svc")

    def test_autorun_strings(self):
        self.assertTrue(settings_from_dict({"autorun": "yes"}).autorun)
        self.assertFalse(settings_from_dict({"autorun": "off"}).autorun)

    def test_unquoted_number_rejected(self):
        with self.assertRaises(ValueError) as cm:
            settings_from_dict(yaml.safe_load("imageVersion: 1.10\n"))
        self.assertIn("imageVersion", str(cm.exception))

    def test_quoted_number_kept_verbatim(self):
        s = settings_from_dict(yaml.safe_load("imageVersion: \"1.10\"\n"))
        self.assertEqual(s.image_version, "1.10")

    def test_to_dict_uses_camel_case(self):
        d = settings_to_dict(Settings(auth_config_path="/a.json"))
        self.assertEqual(d["authConfigPath"], "/a.json")
        self.assertEqual(d["dockerfile"], "Dockerfile")


class TestConfigStore(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        root = Path(self._tmp.name)
        self.store = ConfigStore(config_dir=root / "config")
        self.workspace = root / "ws"
        self.workspace.mkdir()

    def tearDown(self):
        self._tmp.cleanup()

    def test_defaults_when_no_files(self):
        self.assertEqual(self.store.resolve_settings(self.workspace), Settings())

    def test_workspace_overrides_global(self):
        self.store.save_global({"registry": "global.io", "imageUser": "acme"})
        self.store.save_workspace(self.workspace, {"registry": "local.io"})
        s = self.store.resolve_settings(self.workspace)
        self.assertEqual(s.registry, "local.io")
        self.assertEqual(s.image_user, "acme")

    def test_non_mapping_file_rejected(self):
        self.store.workspace_file(self.workspace).write_text("- a\n- b\n")
        with self.assertRaises(ValueError):
            self.store.resolve_settings(self.workspace)

    def test_malformed_yaml_rejected(self):
        self.store.workspace_file(self.workspace).write_text("imageName: [oops\n")
        with self.assertRaises(ValueError) as cm:
            self.store.resolve_settings(self.workspace)
        self.assertIn("invalid YAML", str(cm.exception))

    def test_malformed_yaml_reported_by_cli(self):
        self.store.workspace_file(self.workspace).write_text("imageName: [oops\n")
        with mock.patch("vsdocker.commands.common.ConfigStore", return_value=self.store):
            with redirect_stdout(io.StringIO()) as out:
                with self.assertRaises(SystemExit) as cm:
                    main(["describe", "-w", str(self.workspace)])
        self.assertEqual(cm.exception.code, 1)
        self.assertIn("Error:", out.getvalue())
        self.assertIn("invalid YAML", out.getvalue())

    def test_config_command_sets_global_and_workspace(self):
        from vsdocker.commands.config_cmd import cmd_config

        args = argparse.Namespace(
            workspace=str(self.workspace), workspace_level=False,
            image_name=None, image_user="acme", image_version=None, registry=None,
            auth_config_path=None, autorun="on", docker_host=None, dockerfile=None,
        )
        with mock.patch("vsdocker.commands.config_cmd.ConfigStore", return_value=self.store):
            with redirect_stdout(io.StringIO()):
                cmd_config(args)
                args.workspace_level = True
                args.image_user = None
                args.autorun = None
                args.image_name = "svc"
                cmd_config(args)

        self.assertEqual(self.store.load_global(), {"imageUser": "acme", "autorun": True})
        self.assertEqual(self.store.load_workspace(self.workspace), {"imageName": "svc"})
        s = self.store.resolve_settings(self.workspace)
        self.assertTrue(s.autorun)
        self.assertEqual(s.image_name, "svc")


class TestDescribeAndValidateCommands(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        root = Path(self._tmp.name)
        self.store = ConfigStore(config_dir=root / "config")
        self.workspace = root / "my-app"
        self.workspace.mkdir()
        (self.workspace / "Dockerfile").write_text("FROM alpine\nEXPOSE 8080\n")

    def tearDown(self):
        self._tmp.cleanup()

    def test_describe_shows_reference_and_ports(self):
        from vsdocker.commands.describe import cmd_describe

        self.store.save_workspace(self.workspace, {"imageUser": "acme", "registry": "reg.io"})
        with mock.patch("vsdocker.commands.common.ConfigStore", return_value=self.store):
            with redirect_stdout(io.StringIO()) as out:
                cmd_describe(argparse.Namespace(workspace=str(self.workspace)))
        self.assertIn("reg.io/acme/my-app:latest", out.getvalue())
        self.assertIn("8080/tcp", out.getvalue())

    def test_validate_exits_on_errors(self):
        from vsdocker.commands.validate_cmd import cmd_validate

        self.store.save_workspace(self.workspace, {"registry": "https://reg.io"})
        with mock.patch("vsdocker.commands.validate_cmd.ConfigStore", return_value=self.store):
            with redirect_stdout(io.StringIO()) as out:
                with self.assertRaises(SystemExit):
                    cmd_validate(argparse.Namespace(workspace=str(self.workspace)))
        self.assertIn("must be a host[:port]", out.getvalue())

    def test_commands_refuse_invalid_settings(self):
        from vsdocker.commands.common import load_workspace
        from vsdocker.config import ValidationError

        self.store.save_workspace(self.workspace, {"imageName": "Bad Name"})
        with redirect_stdout(io.StringIO()):
            with self.assertRaises(ValidationError):
                load_workspace(argparse.Namespace(workspace=str(self.workspace)), self.store)


class TestValidateSettings(unittest.TestCase):
    def test_defaults_are_valid(self):
        self.assertTrue(validate_settings(Settings()).valid)

    def test_uppercase_name_rejected(self):
        result = validate_settings(Settings(image_name="MyApp"))
        self.assertFalse(result.valid)

    def test_bad_tag_rejected(self):
        result = validate_settings(Settings(image_version="-bad"))
        self.assertFalse(result.valid)

    def test_registry_with_scheme_rejected(self):
        result = validate_settings(Settings(registry="https://reg.io"))
        self.assertFalse(result.valid)

    def test_registry_with_port_accepted(self):
        self.assertTrue(validate_settings(Settings(registry="reg.io:5000")).valid)

    def test_bad_docker_host_rejected(self):
        result = validate_settings(Settings(docker_host="/var/run/docker.sock"))
        self.assertFalse(result.valid)

    def test_missing_auth_config_warns(self):
        result = validate_settings(Settings(auth_config_path="/nonexistent/auth.json"))
        self.assertTrue(result.valid)
        self.assertTrue(result.warnings)

    def test_workspace_checks(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            ws = Path(tmpdir) / "My_App"
            ws.mkdir()
            result = validate_settings(Settings(), workspace=ws)
        self.assertTrue(result.valid)
        self.assertEqual(len(result.warnings), 2)


if __name__ == "__main__":
    unittest.main()
