import os
import unittest
from unittest import mock

from keyring.errors import KeyringError

from jina_tools_mcp import config
from jina_tools_mcp.config import PackConfig, ServerSettings, resolve_api_key


class TestPackConfig(unittest.TestCase):

    def test_allowed_hosts(self):
        cfg = PackConfig()
        for url in ("https://api.jina.ai/v1/rerank", "https://r.jina.ai/", "https://segment.jina.ai/", "https://jina.ai"):
            with self.subTest(url=url):
                self.assertTrue(cfg.is_allowed_url(url))

    def test_rejected_hosts(self):
        cfg = PackConfig()
        for url in ("https://evil.com/jina.ai", "https://notjina.ai/", "https://jina.ai.evil.com/"):
            with self.subTest(url=url):
                self.assertFalse(cfg.is_allowed_url(url))

    def test_authorization(self):
        self.assertEqual(PackConfig().authorization("abc"), "Bearer abc")

    def test_config_is_immutable(self):
        with self.assertRaises(AttributeError):
            config.DEFAULT_CONFIG.auth_scheme = "Basic"


class TestResolveApiKey(unittest.TestCase):

    def test_environment_wins(self):
        with mock.patch.dict(os.environ, {"JINA_API_KEY": "env-key"}), \
                mock.patch.object(config.keyring, "get_password") as get_password:
            self.assertEqual(resolve_api_key(), "env-key")
        get_password.assert_not_called()

    def test_keyring_fallback(self):
        with mock.patch.dict(os.environ, {}, clear=True), \
                mock.patch.object(config.keyring, "get_password", return_value="stored-key") as get_password:
            self.assertEqual(resolve_api_key(), "stored-key")
        get_password.assert_called_once_with("jina-tools-mcp", "jina-api-key")

    def test_keyring_failure(self):
        with mock.patch.dict(os.environ, {}, clear=True), \
                mock.patch.object(config.keyring, "get_password", side_effect=KeyringError("no backend")):
            self.assertIsNone(resolve_api_key())


class TestServerSettings(unittest.TestCase):

    def test_defaults(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            settings = ServerSettings.from_env()
        self.assertEqual((settings.host, settings.port), ("0.0.0.0", 8080))

    def test_from_env(self):
        with mock.patch.dict(os.environ, {"HOST": "127.0.0.1", "PORT": "9000"}):
            settings = ServerSettings.from_env()
        self.assertEqual((settings.host, settings.port), ("127.0.0.1", 9000))


if __name__ == '__main__':
    unittest.main()
