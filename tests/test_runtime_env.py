from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import runtime_env
from config import API_KEY_ENV_VAR, DEFAULT_ENDPOINT, ENDPOINT_ENV_VAR


class RuntimeEnvTests(unittest.TestCase):
    def test_mask_secret(self) -> None:
        self.assertEqual("sk-a...", runtime_env.mask_secret("sk-abcdef"))
        self.assertEqual("***", runtime_env.mask_secret("abc"))
        self.assertEqual("", runtime_env.mask_secret(None))

    def test_env_file_is_loaded_without_overriding_process_env(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            env_file = Path(temp_dir) / ".env"
            env_file.write_text(
                f"{API_KEY_ENV_VAR}=sk-from-file\n{ENDPOINT_ENV_VAR}=https://example.invalid/api\n",
                encoding="utf-8",
            )
            with patch.dict(os.environ, {ENDPOINT_ENV_VAR: "https://process.invalid/api"}, clear=False):
                os.environ.pop(API_KEY_ENV_VAR, None)
                with patch.object(runtime_env, "_env_file_candidates", return_value=[env_file]):
                    report = runtime_env.configure_runtime_env()

                self.assertEqual(env_file, report.env_file)
                self.assertTrue(report.api_key_present)
                self.assertEqual("sk-f...", report.masked_api_key)
                self.assertEqual("sk-from-file", runtime_env.get_api_key())
                self.assertEqual("https://process.invalid/api", runtime_env.get_endpoint())

    def test_missing_env_file_and_key(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            with patch.dict(os.environ, {}, clear=False):
                os.environ.pop(API_KEY_ENV_VAR, None)
                os.environ.pop(ENDPOINT_ENV_VAR, None)
                with patch.object(
                    runtime_env, "_env_file_candidates", return_value=[Path(temp_dir) / ".env"]
                ):
                    report = runtime_env.configure_runtime_env()

                self.assertIsNone(report.env_file)
                self.assertFalse(report.api_key_present)
                self.assertIsNone(runtime_env.get_api_key())
                self.assertEqual(DEFAULT_ENDPOINT, runtime_env.get_endpoint())


if __name__ == "__main__":
    unittest.main()
