import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from client import settings_store


class SettingsStoreTestCase(unittest.TestCase):
    def test_defaults_without_file(self):
        with tempfile.TemporaryDirectory() as td:
            with patch.object(settings_store, "SETTINGS_PATH", Path(td) / "settings.ini"):
                self.assertEqual(settings_store.DEFAULT_SETTINGS, settings_store.load_settings())

    def test_save_and_load(self):
        with tempfile.TemporaryDirectory() as td:
            with patch.object(settings_store, "SETTINGS_PATH", Path(td) / "settings.ini"):
                settings_store.save_settings({"level_id": 2, "save_slot": 3, "log_level": "debug"})
                loaded = settings_store.load_settings()
        self.assertEqual({"level_id": "2", "save_slot": "3", "log_level": "DEBUG"}, loaded)

    def test_sanitize(self):
        data = settings_store._sanitize({"level_id": "-4", "save_slot": "12", "log_level": "loud", "extra": "1"})
        self.assertEqual({"level_id": "1", "save_slot": "3", "log_level": "WARNING"}, data)
        data = settings_store._sanitize({"level_id": "abc", "save_slot": "0"})
        self.assertEqual("1", data["level_id"])
        self.assertEqual("1", data["save_slot"])

    def test_missing_section(self):
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "settings.ini"
            path.write_text("[other]\nkey = value\n", encoding="utf-8")
            with patch.object(settings_store, "SETTINGS_PATH", path):
                self.assertEqual(settings_store.DEFAULT_SETTINGS, settings_store.load_settings())


if __name__ == "__main__":
    unittest.main()
