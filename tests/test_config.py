"""
Configuration Tests
Tests defaults, environment overrides and validation
"""

import os
import unittest
from unittest.mock import patch

from invoice_diagnostics.utils.config import Config, ConfigurationError

MISSING_ENV_FILE = "/nonexistent/invoice-diagnostics.env"


class TestConfigDefaults(unittest.TestCase):

    @patch.dict(os.environ, {}, clear=True)
    def test_defaults(self):
        config = Config(MISSING_ENV_FILE)

        self.assertIsNone(config.gemini.api_key)
        self.assertEqual(config.gemini.model, "gemini-2.0-flash")
        self.assertEqual(config.gemini.temperature, 0.05)
        self.assertEqual(config.gemini.max_output_tokens, 10)
        self.assertEqual(config.gemini.api_versions, ("v1", "v1beta"))
        self.assertEqual(config.gemini.base_url, "https://generativelanguage.googleapis.com")

        self.assertIsNone(config.openai.api_key)
        self.assertEqual(config.openai.model, "gpt-3.5-turbo")
        self.assertEqual(config.openai.temperature, 0.1)
        self.assertEqual(config.openai.max_tokens, 100)

        self.assertEqual(config.system.log_level, "INFO")
        self.assertEqual(config.system.log_dir, "logs")
        self.assertEqual(config.system.request_timeout, 30)
        self.assertTrue(config.validate())

    @patch.dict(os.environ, {"GEMINI_API_KEY": "", "OPENAI_API_KEY": ""}, clear=True)
    def test_empty_keys_are_missing(self):
        config = Config(MISSING_ENV_FILE)

        with self.assertRaises(ConfigurationError) as ctx:
            config.require_gemini_key()
        self.assertIn("GEMINI_API_KEY", str(ctx.exception))

        with self.assertRaises(ConfigurationError):
            config.require_openai_key()


class TestConfigOverrides(unittest.TestCase):

    @patch.dict(os.environ, {
        "GEMINI_API_KEY": "gem-key",
        "OPENAI_API_KEY": "oai-key",
        "GEMINI_MODEL": "gemini-1.5-pro",
        "GEMINI_API_VERSIONS": " v1beta ,\nv1 ,",
        "GEMINI_BASE_URL": "http://localhost:8080/",
        "OPENAI_MAX_TOKENS": "5",
        "REQUEST_TIMEOUT": "3",
        "LOG_DIR": "/tmp/run-logs",
    }, clear=True)
    def test_environment_values(self):
        config = Config(MISSING_ENV_FILE)

        self.assertEqual(config.require_gemini_key(), "gem-key")
        self.assertEqual(config.require_openai_key(), "oai-key")
        self.assertEqual(config.gemini.model, "gemini-1.5-pro")
        self.assertEqual(config.gemini.api_versions, ("v1beta", "v1"))
        self.assertEqual(config.gemini.base_url, "http://localhost:8080")
        self.assertEqual(config.openai.max_tokens, 5)
        self.assertEqual(config.system.request_timeout, 3)
        self.assertEqual(config.system.log_dir, "/tmp/run-logs")

    @patch.dict(os.environ, {"GEMINI_API_VERSIONS": " , "}, clear=True)
    def test_blank_version_list_falls_back(self):
        self.assertEqual(Config(MISSING_ENV_FILE).gemini.api_versions, ("v1", "v1beta"))

    def test_env_file_is_loaded(self):
        import tempfile
        with tempfile.TemporaryDirectory() as tmp:
            env_file = os.path.join(tmp, ".env")
            with open(env_file, "w") as f:
                f.write("GEMINI_API_KEY=from-file\nOPENAI_MODEL=gpt-4o-mini\n")

            with patch.dict(os.environ, {}, clear=True):
                config = Config(env_file)

        self.assertEqual(config.gemini.api_key, "from-file")
        self.assertEqual(config.openai.model, "gpt-4o-mini")


class TestConfigValidation(unittest.TestCase):

    @patch.dict(os.environ, {"REQUEST_TIMEOUT": "soon"}, clear=True)
    def test_non_numeric_value(self):
        with self.assertRaises(ConfigurationError) as ctx:
            Config(MISSING_ENV_FILE)
        self.assertIn("REQUEST_TIMEOUT", str(ctx.exception))

    @patch.dict(os.environ, {"GEMINI_TEMPERATURE": "3.5"}, clear=True)
    def test_temperature_range(self):
        with self.assertRaises(ConfigurationError):
            Config(MISSING_ENV_FILE).validate()

    @patch.dict(os.environ, {"OPENAI_MAX_TOKENS": "0"}, clear=True)
    def test_token_limit(self):
        with self.assertRaises(ConfigurationError):
            Config(MISSING_ENV_FILE).validate()

    def test_configuration_error_is_value_error(self):
        self.assertTrue(issubclass(ConfigurationError, ValueError))


if __name__ == '__main__':
    unittest.main()
