import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from hubsolver.core.settings_manager import MOBILE_USER_AGENT, SettingsManager


class TestSettingsManager(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.data_dir = Path(self._tmp.name) / "hubsolver"

    def tearDown(self):
        self._tmp.cleanup()

    def test_defaults_without_file(self):
        settings = SettingsManager(self.data_dir)
        self.assertEqual(settings.get("request_timeout_seconds"), 15.0)
        self.assertEqual(settings.get("final_link_timeout_seconds"), 20.0)
        self.assertEqual(settings.get("hubcdn_headers"), {"User-Agent": MOBILE_USER_AGENT})
        self.assertFalse(self.data_dir.exists())

    def test_file_overrides_merge_headers(self):
        self.data_dir.mkdir(parents=True)
        (self.data_dir / "settings.json").write_text(json.dumps({
            "request_timeout_seconds": 8.0,
            "movie_page_headers": {"Referer": "https://mirror.example/"},
        }))
        settings = SettingsManager(self.data_dir)
        self.assertEqual(settings.get("request_timeout_seconds"), 8.0)
        headers = settings.get("movie_page_headers")
        self.assertEqual(headers["Referer"], "https://mirror.example/")
        self.assertEqual(headers["User-Agent"], MOBILE_USER_AGENT)

    def test_corrupt_file_falls_back_to_defaults(self):
        self.data_dir.mkdir(parents=True)
        (self.data_dir / "settings.json").write_text("{not json")
        with self.assertLogs("hubsolver.core.settings_manager", level="WARNING"):
            settings = SettingsManager(self.data_dir)
        self.assertEqual(settings.get("log_level"), "INFO")

    def test_set_persists_across_reload(self):
        settings = SettingsManager(self.data_dir)
        settings.set("request_timeout_seconds", 5.0)
        settings.update({"log_level": "DEBUG"})
        reloaded = SettingsManager(self.data_dir)
        self.assertEqual(reloaded.get("request_timeout_seconds"), 5.0)
        self.assertEqual(reloaded.get("log_level"), "DEBUG")

    def test_returned_headers_are_copies(self):
        settings = SettingsManager(self.data_dir)
        settings.get("hblinks_headers")["User-Agent"] = "mutated"
        self.assertNotEqual(settings.get("hblinks_headers")["User-Agent"], "mutated")

    def test_reset(self):
        settings = SettingsManager(self.data_dir)
        settings.set("request_timeout_seconds", 1.0)
        settings.reset()
        self.assertEqual(settings.get("request_timeout_seconds"), 15.0)
        self.assertEqual(SettingsManager(self.data_dir).get("request_timeout_seconds"), 15.0)

    def test_data_dir_from_environment(self):
        with patch.dict(os.environ, {"HUBSOLVER_DATA_DIR": str(self.data_dir)}):
            settings = SettingsManager()
        self.assertEqual(settings.settings_file, self.data_dir / "settings.json")


if __name__ == "__main__":
    unittest.main()
