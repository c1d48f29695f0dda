"""Tests for config schema, YAML loading and environment overlay."""

import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from weatherproxy.config.loader import get_config_value, load_config, load_dotenv_file
from weatherproxy.config.schema import ProxyConfig, UpstreamConfig


class TestProxyConfig:
    def test_defaults(self):
        config = ProxyConfig()
        assert config.upstream.base_url == "https://opendata.cwa.gov.tw/api"
        assert config.upstream.dataset_id == "F-C0032-001"
        assert config.upstream.api_key == ""
        assert config.geo.default_city == "臺北市"
        assert config.server.port == 3000

    def test_extra_fields_rejected(self):
        with pytest.raises(ValidationError, match="Extra inputs are not permitted"):
            ProxyConfig(unknown_field="bad")

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            UpstreamConfig(timeout_seconds=0)

    def test_empty_default_city_rejected(self):
        with pytest.raises(ValidationError):
            ProxyConfig(geo={"default_city": ""})


class TestLoadConfig:
    def test_load_from_yaml(self, config_yaml_path: Path):
        config = load_config(config_yaml_path, env={})
        assert config.upstream.timeout_seconds == 3
        assert config.upstream.api_key == "file-key"
        assert config.geo.default_city == "高雄市"

    def test_fixtures_config(self, fixtures_dir: Path):
        config = load_config(fixtures_dir / "config_default.yaml", env={})
        assert config.upstream.timeout_seconds == 5
        assert config.server.port == 3000

    def test_missing_file_uses_defaults(self, tmp_path: Path):
        config = load_config(tmp_path / "nope.yaml", env={})
        assert config == ProxyConfig()

    def test_empty_yaml_uses_defaults(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        config = load_config(path, env={})
        assert config.upstream.dataset_id == "F-C0032-001"

    def test_env_overrides_file(self, config_yaml_path: Path):
        config = load_config(
            config_yaml_path,
            env={"CWA_API_KEY": "env-key", "PORT": "8080", "GEOIP_DATABASE": "/tmp/x.mmdb"},
        )
        assert config.upstream.api_key == "env-key"
        assert config.server.port == 8080
        assert config.geo.database_path == "/tmp/x.mmdb"
        # Untouched file values survive the overlay
        assert config.upstream.timeout_seconds == 3

    def test_env_fills_empty_yaml_section(self, tmp_path: Path):
        path = tmp_path / "sections.yaml"
        path.write_text("upstream:\nserver:\n")
        config = load_config(path, env={"CWA_API_KEY": "k", "PORT": "8080"})
        assert config.upstream.api_key == "k"
        assert config.server.port == 8080

    def test_empty_env_value_ignored(self, config_yaml_path: Path):
        config = load_config(config_yaml_path, env={"CWA_API_KEY": ""})
        assert config.upstream.api_key == "file-key"

    def test_invalid_port_from_env(self):
        with pytest.raises(ValidationError):
            load_config(None, env={"PORT": "not-a-port"})


class TestDotenv:
    def test_loads_dotenv_without_overriding(self, tmp_path: Path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("CWA_API_KEY=from-dotenv\nWEATHERPROXY_TEST_ONLY=1\n")
        monkeypatch.setenv("CWA_API_KEY", "from-env")
        # Registered with monkeypatch so teardown removes what dotenv sets
        monkeypatch.setenv("WEATHERPROXY_TEST_ONLY", "placeholder")
        monkeypatch.delenv("WEATHERPROXY_TEST_ONLY")

        assert load_dotenv_file(env_file) is True
        assert os.environ["CWA_API_KEY"] == "from-env"
        assert os.environ["WEATHERPROXY_TEST_ONLY"] == "1"

    def test_missing_dotenv(self, tmp_path: Path):
        assert load_dotenv_file(tmp_path / ".env") is False


class TestGetConfigValue:
    def test_dotted_key(self):
        config = ProxyConfig()
        assert get_config_value(config, "upstream.timeout_seconds") == 10.0

    def test_list_index(self):
        config = ProxyConfig()
        assert get_config_value(config, "server.cors_origins.0") == "*"

    def test_top_level(self):
        config = ProxyConfig()
        assert get_config_value(config, "geo").default_city == "臺北市"

    def test_invalid_key(self):
        with pytest.raises(KeyError):
            get_config_value(ProxyConfig(), "nonexistent.key")
