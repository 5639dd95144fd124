#!/usr/bin/env python3
"""Tests for the pianoquest-firebase command line tool."""

import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest.mock import patch

from pianoquest import cli
from pianoquest.firebase_config import FIREBASE_CONFIG
from tests.helpers import REAL_CONFIG, clean_environ


@patch("pianoquest.firebase_config.load_dotenv")
class TestCli(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.env = patch.dict(os.environ, clean_environ(), clear=True)
        self.env.start()

    def tearDown(self):
        self.env.stop()
        self._tmp.cleanup()

    def run_cli(self, *argv):
        out = io.StringIO()
        with redirect_stdout(out):
            code = cli.main(list(argv))
        return code, out.getvalue()

    def write_config(self, config):
        path = self.tmp / "firebase_config.json"
        path.write_text(json.dumps(config), encoding="utf-8")
        return path

    def test_init_writes_placeholder_template(self, mock_dotenv):
        output = self.tmp / "firebase_config.json"
        code, out = self.run_cli("init", "--output", str(output))
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(output.read_text(encoding="utf-8")), FIREBASE_CONFIG)
        self.assertIn("Template saved", out)

    def test_init_refuses_overwrite(self, mock_dotenv):
        path = self.write_config(REAL_CONFIG)
        code, out = self.run_cli("init", "--output", str(path))
        self.assertEqual(code, 1)
        self.assertEqual(json.loads(path.read_text(encoding="utf-8")), REAL_CONFIG)

        code, out = self.run_cli("init", "--output", str(path), "--force")
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(path.read_text(encoding="utf-8")), FIREBASE_CONFIG)

    def test_check_passes_for_real_config(self, mock_dotenv):
        path = self.write_config(REAL_CONFIG)
        code, out = self.run_cli("check", "--config", str(path))
        self.assertEqual(code, 0)
        self.assertIn("pianoquest-test", out)

    def test_check_fails_on_placeholders(self, mock_dotenv):
        path = self.write_config(FIREBASE_CONFIG)
        code, out = self.run_cli("check", "--config", str(path))
        self.assertEqual(code, 1)
        self.assertIn("apiKey", out)

    def test_check_fails_on_missing_keys(self, mock_dotenv):
        # defaults fill keys absent from the file, so blank the value instead
        path = self.write_config(dict(REAL_CONFIG, storageBucket=""))
        code, out = self.run_cli("check", "--config", str(path))
        self.assertEqual(code, 1)
        self.assertIn("storageBucket", out)

    def test_check_env_override(self, mock_dotenv):
        path = self.write_config(dict(REAL_CONFIG, apiKey="your-api-key-here"))
        os.environ["FIREBASE_API_KEY"] = "AIzaSyFromEnvironment"
        self.assertEqual(self.run_cli("check", "--config", str(path))[0], 0)
        self.assertEqual(self.run_cli("check", "--config", str(path), "--no-env")[0], 1)

    def test_show_masks_api_key(self, mock_dotenv):
        path = self.write_config(REAL_CONFIG)
        code, out = self.run_cli("show", "--config", str(path))
        self.assertEqual(code, 0)
        self.assertNotIn(REAL_CONFIG["apiKey"], out)
        self.assertIn("AIza...", out)
        self.assertIn(REAL_CONFIG["authDomain"], out)

    def test_show_reports_env_overrides(self, mock_dotenv):
        path = self.write_config(REAL_CONFIG)
        code, out = self.run_cli("show", "--config", str(path))
        self.assertIn("Environment overrides: none", out)

        os.environ["FIREBASE_PROJECT_ID"] = "pianoquest-prod"
        code, out = self.run_cli("show", "--config", str(path))
        self.assertEqual(code, 0)
        self.assertIn("Environment overrides: projectId", out)
        self.assertIn("pianoquest-prod", out)

        code, out = self.run_cli("show", "--config", str(path), "--no-env")
        self.assertIn("Environment overrides: disabled", out)
        self.assertNotIn("pianoquest-prod", out)

    def test_non_utf8_config_file(self, mock_dotenv):
        path = self.tmp / "firebase_config.json"
        path.write_bytes(b'{"apiKey": "\xff\xfe"}')
        for command in ("check", "show"):
            code, out = self.run_cli(command, "--config", str(path), "--no-env")
            self.assertEqual(code, 1)
            self.assertIn("❌", out)

    def test_show_missing_file(self, mock_dotenv):
        code, out = self.run_cli("show", "--config", str(self.tmp / "missing.json"))
        self.assertEqual(code, 1)

    def test_no_command_prints_help(self, mock_dotenv):
        code, out = self.run_cli()
        self.assertEqual(code, 0)
        self.assertIn("usage", out)


if __name__ == '__main__':
    unittest.main()
