"""
Tests for config discovery, YAML loading and schema validation.
"""
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from syncjobs import config as cfg
from syncjobs.config import ConfigError
from syncjobs.models import Verbosity

SAMPLE = """\
verbose: 1
servers:
  box:
    user: bob
    host: box.example.com
    private_key: ~/.ssh/id_box
    port: "2222"
compress_and_copy:
  - server: box
    filename: www
    log: Website
    source: remote:/var/www
    dest: /backups
    verbose: 2
    dry_run: true
    exclude:
      - "*.log"
sync:
  - server: box
    source: /srv/data
    dest: remote:/mirror
    delete_extraneous_from_dest: true
    exclude: [".cache", "*.iso"]
"""


class ConfigTestCase(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.root = Path(self.tmpdir.name)

    def tearDown(self):
        self.tmpdir.cleanup()

    def _write(self, content, name="config.yml"):
        p = self.root / name
        p.write_text(content, encoding="utf-8")
        return p


class TestLoadConfig(ConfigTestCase):

    def test_load_sample(self):
        """A full config loads into typed, immutable descriptors."""
        c = cfg.load_config(self._write(SAMPLE))
        self.assertEqual(c.verbosity, Verbosity.ECHO_COMMANDS)
        self.assertTrue(c.progress)
        box = c.servers["box"]
        self.assertEqual(box.port, 2222)
        self.assertEqual(box.connect_string, "bob@box.example.com")
        self.assertEqual(box.private_key, "~/.ssh/id_box")

        a = c.archive_jobs[0]
        self.assertEqual(a.filename, "www")
        self.assertEqual(a.log, "Website")
        self.assertEqual(a.verbosity, Verbosity.ECHO_COMMANDS_AND_STREAM)
        self.assertTrue(a.dry_run)
        self.assertEqual(a.exclude, ("*.log",))

        m = c.mirror_jobs[0]
        self.assertTrue(m.delete_extraneous)
        self.assertFalse(m.dry_run)
        self.assertEqual(m.verbosity, Verbosity.SILENT)
        self.assertEqual(m.exclude, (".cache", "*.iso"))

    def test_empty_file(self):
        """An empty config means no servers and no jobs."""
        c = cfg.load_config(self._write(""))
        self.assertEqual(c.archive_jobs, [])
        self.assertEqual(c.mirror_jobs, [])

    def test_bool_verbose(self):
        """verbose: true is accepted as echo-commands."""
        c = cfg.load_config(self._write("verbose: true\n"))
        self.assertEqual(c.verbosity, Verbosity.ECHO_COMMANDS)

    def test_default_port(self):
        """Port defaults to 22 and the key to None."""
        c = cfg.load_config(self._write("servers:\n  s:\n    user: u\n    host: h\n"))
        self.assertEqual(c.servers["s"].port, 22)
        self.assertIsNone(c.servers["s"].private_key)

    def test_unquoted_false_flags(self):
        """YAML false and an empty value both leave the flags off."""
        c = cfg.load_config(self._write(
            "progress: false\n"
            "servers:\n  s: {user: u, host: h}\n"
            "sync:\n  - server: s\n    source: /a\n    dest: /b\n"
            "    dry_run: false\n    delete_extraneous_from_dest:\n"
        ))
        self.assertFalse(c.progress)
        self.assertFalse(c.mirror_jobs[0].dry_run)
        self.assertFalse(c.mirror_jobs[0].delete_extraneous)


class TestConfigErrors(ConfigTestCase):

    def _assert_invalid(self, content, fragment):
        with self.assertRaises(ConfigError) as ctx:
            cfg.load_config(self._write(content))
        self.assertIn(fragment, str(ctx.exception))

    def test_bad_yaml(self):
        """YAML syntax errors are reported as ConfigError."""
        self._assert_invalid("servers: [unclosed\n", "invalid YAML")

    def test_top_level_not_mapping(self):
        self._assert_invalid("- a\n- b\n", "mapping")

    def test_verbosity_out_of_range(self):
        """Verbosity must be 0, 1 or 2."""
        self._assert_invalid("verbose: 7\n", "verbose must be")

    def test_unknown_server(self):
        """A job pointing at an undefined server fails at load time."""
        self._assert_invalid(
            "servers: {}\nsync:\n  - server: ghost\n    source: /a\n    dest: remote:/b\n",
            "unknown server 'ghost'",
        )

    def test_missing_filename(self):
        """Archive jobs require a filename."""
        self._assert_invalid(
            "servers:\n  s: {user: u, host: h}\n"
            "compress_and_copy:\n  - server: s\n    source: /a\n    dest: remote:/b\n",
            "'filename' is required",
        )

    def test_exclude_must_be_list(self):
        self._assert_invalid(
            "servers:\n  s: {user: u, host: h}\n"
            "sync:\n  - server: s\n    source: /a\n    dest: /b\n    exclude: '*.log'\n",
            "'exclude' must be a list",
        )

    def test_quoted_dry_run_rejected(self):
        """dry_run: "false" is a string, not a boolean."""
        self._assert_invalid(
            "servers:\n  s: {user: u, host: h}\n"
            "sync:\n  - server: s\n    source: /a\n    dest: /b\n    dry_run: \"false\"\n",
            "'dry_run' must be true or false",
        )

    def test_non_bool_delete_rejected(self):
        self._assert_invalid(
            "servers:\n  s: {user: u, host: h}\n"
            "sync:\n  - server: s\n    source: /a\n    dest: /b\n"
            "    delete_extraneous_from_dest: \"no\"\n",
            "'delete_extraneous_from_dest' must be true or false",
        )

    def test_non_bool_progress_rejected(self):
        self._assert_invalid("progress: 0\n", "'progress' must be true or false")

    def test_port_out_of_range(self):
        """Ports outside 1..65535 fail at load time."""
        for port in ("0", "70000", "-1"):
            with self.subTest(port=port):
                self._assert_invalid(
                    f"servers:\n  s:\n    user: u\n    host: h\n    port: {port}\n",
                    "port must be between 1 and 65535",
                )

    def test_non_numeric_port(self):
        self._assert_invalid(
            "servers:\n  s:\n    user: u\n    host: h\n    port: ssh\n",
            "port must be a number",
        )


class TestFindConfig(ConfigTestCase):

    def test_explicit_path(self):
        """An explicit existing path is returned as-is."""
        p = self._write("verbose: 0\n")
        self.assertEqual(cfg.find_config(str(p)), p)

    def test_explicit_missing(self):
        """An explicit path that does not exist is fatal."""
        with self.assertRaises(ConfigError):
            cfg.find_config(str(self.root / "nope.yml"))

    def test_directory_rejected(self):
        """A directory is not a config file."""
        with self.assertRaises(ConfigError) as ctx:
            cfg.find_config(str(self.root))
        self.assertIn("is a directory, not a normal file", str(ctx.exception))

    def test_default_then_global(self):
        """Without a flag, ./config.yml wins over the global config dir."""
        xdg = self.root / "xdg"
        (xdg / "syncjobs").mkdir(parents=True)
        global_cfg = xdg / "syncjobs" / "config.yml"
        global_cfg.write_text("verbose: 0\n", encoding="utf-8")
        workdir = self.root / "work"
        workdir.mkdir()
        old_cwd = os.getcwd()
        os.chdir(workdir)
        try:
            with mock.patch.dict(os.environ, {"XDG_CONFIG_HOME": str(xdg)}):
                self.assertEqual(cfg.find_config(None), global_cfg)
                (workdir / "config.yml").write_text("verbose: 1\n", encoding="utf-8")
                self.assertEqual(cfg.find_config(None), Path("./config.yml"))
        finally:
            os.chdir(old_cwd)


if __name__ == "__main__":
    unittest.main()
