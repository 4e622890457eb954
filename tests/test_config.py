"""Unit tests for configuration handling."""

import pytest

from pyrelup.config import Config


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "GITHUB_TOKEN",
        "GH_TOKEN",
        "GITHUB_API_URL",
        "GITHUB_UPLOAD_URL",
        "GITHUB_REPOSITORY",
        "GITHUB_EVENT_PATH",
        "GITHUB_OUTPUT",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def cfg(tmp_path):
    """Config whose file lives in a temporary directory."""
    config = Config()
    config.config_dir = tmp_path / "pyrelup"
    config.config_file = config.config_dir / "config"
    return config


class TestConfig:
    """Tests for Config."""

    def test_token_from_env(self, clean_env, cfg):
        clean_env.setenv("GITHUB_TOKEN", "env_token")
        assert cfg.token == "env_token"
        assert cfg.is_configured()

    def test_gh_token_fallback(self, clean_env, cfg):
        clean_env.setenv("GH_TOKEN", "gh_token")
        assert cfg.token == "gh_token"

    def test_no_token(self, clean_env, cfg):
        assert cfg.token is None
        assert not cfg.is_configured()

    def test_save_and_load_token(self, clean_env, cfg):
        cfg.save_token("saved_token")

        fresh = Config()
        fresh.config_dir = cfg.config_dir
        fresh.config_file = cfg.config_file
        assert fresh.token == "saved_token"
        assert cfg.get_config_path().read_text() == "token=saved_token\n"

    def test_env_wins_over_file(self, clean_env, cfg):
        cfg.save_token("saved_token")
        clean_env.setenv("GITHUB_TOKEN", "env_token")
        assert cfg.token == "env_token"

    def test_default_urls(self, clean_env, cfg):
        assert cfg.api_url == "https://api.github.com"
        assert cfg.upload_url == "https://uploads.github.com"

    def test_enterprise_urls(self, clean_env, cfg):
        clean_env.setenv("GITHUB_API_URL", "https://ghe.local/api/v3")
        assert cfg.upload_url == "https://ghe.local/api/uploads"

    def test_actions_context(self, clean_env, cfg, tmp_path):
        clean_env.setenv("GITHUB_REPOSITORY", "octo/hello")
        clean_env.setenv("GITHUB_EVENT_PATH", str(tmp_path / "event.json"))
        clean_env.setenv("GITHUB_OUTPUT", str(tmp_path / "out"))

        assert cfg.repository == "octo/hello"
        assert cfg.event_path == tmp_path / "event.json"
        assert cfg.github_output == tmp_path / "out"

    def test_actions_context_absent(self, clean_env, cfg):
        assert cfg.repository is None
        assert cfg.event_path is None
        assert cfg.github_output is None
