from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import settings_service


class SettingsServiceTests(unittest.TestCase):
    def test_save_and_load_settings(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            settings_path = Path(temp_dir) / "settings.json"
            payload = {
                "target_language": "ja",
                "max_workers": 8,
                "request_timeout_seconds": 12.5,
            }
            with patch.object(settings_service, "get_settings_path", return_value=settings_path):
                self.assertTrue(settings_service.save_app_settings(payload))
                loaded = settings_service.load_app_settings()
            self.assertEqual("ja", loaded["target_language"])
            self.assertEqual(8, loaded["max_workers"])
            self.assertEqual(12.5, loaded["request_timeout_seconds"])
            self.assertEqual("auto", loaded["source_language"])

    def test_api_key_is_never_written(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            settings_path = Path(temp_dir) / "settings.json"
            with patch.object(settings_service, "get_settings_path", return_value=settings_path):
                settings_service.save_app_settings({"api_key": "sk-secret", "target_language": "en"})
            self.assertNotIn("sk-secret", settings_path.read_text(encoding="utf-8"))

    def test_values_of_wrong_type_are_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            settings_path = Path(temp_dir) / "settings.json"
            settings_path.write_text(
                json.dumps(
                    {
                        "version": 1,
                        "settings": {
                            "max_workers": "lots",
                            "request_timeout_seconds": 20,
                            "compression": ["deflated"],
                        },
                    }
                ),
                encoding="utf-8",
            )
            with patch.object(settings_service, "get_settings_path", return_value=settings_path):
                loaded = settings_service.load_app_settings()
            self.assertEqual(4, loaded["max_workers"])
            self.assertEqual(20.0, loaded["request_timeout_seconds"])
            self.assertEqual("stored", loaded["compression"])

    def test_corrupt_file_returns_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            settings_path = Path(temp_dir) / "settings.json"
            settings_path.write_text("{not json", encoding="utf-8")
            with patch.object(settings_service, "get_settings_path", return_value=settings_path):
                loaded = settings_service.load_app_settings(defaults={"target_language": "en"})
            self.assertEqual({"target_language": "en"}, loaded)

    def test_config_dir_override(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            with patch.dict("os.environ", {settings_service.CONFIG_DIR_ENV_VAR: temp_dir}):
                self.assertEqual(
                    Path(temp_dir) / settings_service.SETTINGS_FILE_NAME,
                    settings_service.get_settings_path(),
                )


if __name__ == "__main__":
    unittest.main()
