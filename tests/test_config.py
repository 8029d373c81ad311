"""Tests for configuration loading and models."""

import pytest
from pydantic import ValidationError

from hindsight_memory.config import (
    ConfigError,
    PluginConfig,
    load_config,
    parse_plugin_config,
)


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    monkeypatch.setenv("HINDSIGHT_HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    for var in ("HINDSIGHT_API_KEY", "HINDSIGHT_BASE_URL", "HINDSIGHT_BANK_ID"):
        monkeypatch.delenv(var, raising=False)


class TestPluginConfig:
    def test_defaults(self):
        config = PluginConfig()
        assert config.base_url == "http://localhost:8001"
        assert config.bank_id == "aletheia"
        assert config.api_key is None
        assert config.auto_retain is True
        assert config.auto_recall is False

    def test_camel_case_aliases(self):
        config = PluginConfig.model_validate(
            {"baseUrl": "https://mem.example/", "bankId": "b", "autoRecall": True}
        )
        assert config.base_url == "https://mem.example"
        assert config.bank_id == "b"
        assert config.auto_recall is True

    def test_snake_case_names(self):
        config = PluginConfig(bank_id="notes", api_key="secret")
        assert config.bank_id == "notes"
        assert config.resolve_api_key() == "secret"

    def test_blank_api_key_resolves_to_none(self):
        assert PluginConfig(apiKey="").resolve_api_key() is None

    def test_frozen(self):
        config = PluginConfig()
        with pytest.raises(ValidationError):
            config.bank_id = "other"

    def test_api_key_hidden_in_repr(self):
        assert "secret" not in repr(PluginConfig(apiKey="secret"))

    def test_empty_bank_rejected(self):
        with pytest.raises(ValidationError):
            PluginConfig(bankId="  ")


class TestParsePluginConfig:
    def test_none_yields_defaults(self):
        assert parse_plugin_config(None) == PluginConfig()

    def test_invalid_raises_config_error(self):
        with pytest.raises(ConfigError):
            parse_plugin_config({"autoRecall": "maybe"})


class TestLoadConfig:
    def test_no_file_yields_defaults(self):
        assert load_config() == PluginConfig()

    def test_explicit_missing_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.toml")

    def test_reads_section(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text('[hindsight]\nbankId = "work"\nautoRecall = true\n')

        config = load_config(path)

        assert config.bank_id == "work"
        assert config.auto_recall is True

    def test_reads_top_level_from_cwd(self, tmp_path):
        (tmp_path / "hindsight.toml").write_text('base_url = "http://other:9000"\n')

        assert load_config().base_url == "http://other:9000"

    def test_reads_home_config(self, tmp_path):
        home = tmp_path / "home"
        home.mkdir()
        (home / "config.toml").write_text('bank_id = "from-home"\n')

        assert load_config().bank_id == "from-home"

    def test_env_fills_missing_values(self, monkeypatch):
        monkeypatch.setenv("HINDSIGHT_API_KEY", "env-key")
        monkeypatch.setenv("HINDSIGHT_BANK_ID", "env-bank")

        config = load_config()

        assert config.resolve_api_key() == "env-key"
        assert config.bank_id == "env-bank"

    def test_file_wins_over_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HINDSIGHT_BANK_ID", "env-bank")
        path = tmp_path / "c.toml"
        path.write_text('bankId = "file-bank"\n')

        assert load_config(path).bank_id == "file-bank"

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("bankId = \n")

        with pytest.raises(ConfigError):
            load_config(path)

    def test_section_must_be_table(self, tmp_path):
        path = tmp_path / "c.toml"
        path.write_text('hindsight = "nope"\n')

        with pytest.raises(ConfigError):
            load_config(path)
