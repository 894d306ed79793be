#!/usr/bin/env python3
"""
Unit tests for configuration loading.
"""

import os
import shutil
import tempfile
import unittest

from gitlab_group_cloner.config import Config, load_config
from gitlab_group_cloner.exceptions import ConfigError


VALID_CONFIG = """\
gitlab_url: https://gitlab.example.com/
group_id: 42
token: abc123
clone_dir: /srv/repos
per_page: 50
"""


class TestLoadConfig(unittest.TestCase):
    """Test cases for load_config."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.config_file = os.path.join(self.temp_dir, "config.yaml")

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _write(self, content):
        with open(self.config_file, 'w', encoding='utf-8') as f:
            f.write(content)

    def test_load_valid_config(self):
        """All keys are read and normalized."""
        self._write(VALID_CONFIG)

        config = load_config(self.config_file)

        self.assertEqual(config, Config(
            gitlab_url="https://gitlab.example.com",
            group_id="42",
            token="abc123",
            clone_dir="/srv/repos",
            per_page=50,
        ))

    def test_group_path_accepted(self):
        """A full group path is kept as-is."""
        self._write(VALID_CONFIG.replace("group_id: 42", "group_id: my-group/platform"))

        self.assertEqual(load_config(self.config_file).group_id, "my-group/platform")

    def test_missing_file(self):
        """A missing file is a configuration error."""
        with self.assertRaises(ConfigError) as ctx:
            load_config(os.path.join(self.temp_dir, "nope.yaml"))
        self.assertIn("does not exist", str(ctx.exception))

    def test_directory_instead_of_file(self):
        with self.assertRaises(ConfigError):
            load_config(self.temp_dir)

    def test_empty_path(self):
        with self.assertRaises(ConfigError):
            load_config("")

    def test_missing_required_key(self):
        """Every required key must be present."""
        self._write(VALID_CONFIG.replace("token: abc123\n", ""))

        with self.assertRaises(ConfigError) as ctx:
            load_config(self.config_file)
        self.assertIn("token", str(ctx.exception))

    def test_empty_required_value(self):
        self._write(VALID_CONFIG.replace("clone_dir: /srv/repos", "clone_dir:"))

        with self.assertRaises(ConfigError) as ctx:
            load_config(self.config_file)
        self.assertIn("clone_dir", str(ctx.exception))

    def test_malformed_yaml(self):
        self._write("gitlab_url: [unterminated\n")

        with self.assertRaises(ConfigError):
            load_config(self.config_file)

    def test_non_mapping_document(self):
        self._write("- just\n- a list\n")

        with self.assertRaises(ConfigError):
            load_config(self.config_file)

    def test_empty_document(self):
        self._write("")

        with self.assertRaises(ConfigError):
            load_config(self.config_file)

    def test_per_page_not_integer(self):
        self._write(VALID_CONFIG.replace("per_page: 50", "per_page: many"))

        with self.assertRaises(ConfigError):
            load_config(self.config_file)

    def test_per_page_fractional(self):
        """int() would truncate 1.9 to 1."""
        self._write(VALID_CONFIG.replace("per_page: 50", "per_page: 1.9"))

        with self.assertRaises(ConfigError):
            load_config(self.config_file)

    def test_per_page_integral_float(self):
        self._write(VALID_CONFIG.replace("per_page: 50", "per_page: 20.0"))

        self.assertEqual(load_config(self.config_file).per_page, 20)

    def test_per_page_boolean(self):
        self._write(VALID_CONFIG.replace("per_page: 50", "per_page: true"))

        with self.assertRaises(ConfigError):
            load_config(self.config_file)

    def test_per_page_below_one(self):
        self._write(VALID_CONFIG.replace("per_page: 50", "per_page: 0"))

        with self.assertRaises(ConfigError) as ctx:
            load_config(self.config_file)
        self.assertIn("at least 1", str(ctx.exception))


if __name__ == '__main__':
    unittest.main(verbosity=2)
