"""Tests for configuration management."""

from statcounter.config import DEFAULT_BASE_URL, Credentials, StatCounterConfig


class TestStatCounterConfig:
    def test_not_configured_by_default(self):
        config = StatCounterConfig()
        assert not config.configured

    def test_configured_with_both_values(self):
        config = StatCounterConfig(username="jane", password="s3cret")  # allow-secret
        assert config.configured

    def test_not_configured_without_password(self):
        config = StatCounterConfig(username="jane", password="")  # allow-secret
        assert not config.configured

    def test_defaults(self):
        config = StatCounterConfig()
        assert config.base_url == "https://api.statcounter.com"
        assert config.version == "3"
        assert config.timeout == 30

    def test_credentials(self):
        config = StatCounterConfig(username="jane", password="s3cret")  # allow-secret
        assert config.credentials == Credentials("jane", "s3cret")  # allow-secret

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("STATCOUNTER_USERNAME", "jane")
        monkeypatch.setenv("STATCOUNTER_PASSWORD", "s3cret")  # allow-secret
        monkeypatch.delenv("STATCOUNTER_BASE_URL", raising=False)
        config = StatCounterConfig.from_env()
        assert config.username == "jane"
        assert config.password == "s3cret"  # allow-secret
        assert config.base_url == DEFAULT_BASE_URL
        assert config.configured

    def test_from_env_base_url_override(self, monkeypatch):
        monkeypatch.setenv("STATCOUNTER_BASE_URL", "http://localhost:8080")
        config = StatCounterConfig.from_env()
        assert config.base_url == "http://localhost:8080"

    def test_from_env_missing(self, monkeypatch):
        monkeypatch.delenv("STATCOUNTER_USERNAME", raising=False)
        monkeypatch.delenv("STATCOUNTER_PASSWORD", raising=False)
        config = StatCounterConfig.from_env()
        assert not config.configured


class TestFromYaml:
    def test_load_from_yaml(self, tmp_path):
        path = tmp_path / "statcounter.yaml"
        path.write_text(
            "username: jane\n"
            "password: s3cret\n"  # allow-secret
            "version: 3\n"
            "timeout: 10\n"
        )
        config = StatCounterConfig.from_yaml(path)
        assert config.username == "jane"
        assert config.password == "s3cret"  # allow-secret
        assert config.version == "3"
        assert config.timeout == 10.0
        assert config.configured

    def test_missing_file_returns_unconfigured(self, tmp_path):
        config = StatCounterConfig.from_yaml(tmp_path / "nonexistent.yaml")
        assert not config.configured

    def test_empty_file_returns_unconfigured(self, tmp_path):
        (tmp_path / "empty.yaml").write_text("")
        config = StatCounterConfig.from_yaml(tmp_path / "empty.yaml")
        assert not config.configured
        assert config.base_url == DEFAULT_BASE_URL


class TestCredentials:
    def test_repr_hides_password(self):
        creds = Credentials("jane", "s3cret")  # allow-secret
        assert "s3cret" not in repr(creds)
        assert "jane" in repr(creds)

    def test_config_repr_hides_password(self):
        config = StatCounterConfig(username="jane", password="s3cret")  # allow-secret
        assert "s3cret" not in repr(config)
        assert "jane" in repr(config)
