"""Tests for config manager."""

import pytest

from chain_cli.client.errors import ConfigurationError
from chain_cli.config.manager import ConfigManager
from chain_cli.config.models import BackendProfile


class TestConfigManager:
    def test_load_empty(self, config_manager: ConfigManager):
        assert config_manager.config.profiles == {}
        assert config_manager.config.default_profile is None

    def test_add_profile(self, config_manager: ConfigManager, sample_profile: BackendProfile):
        config_manager.add_profile(sample_profile)
        assert "test-node" in config_manager.config.profiles
        assert config_manager.config.default_profile == "test-node"

    def test_add_sets_first_as_default(self, config_manager: ConfigManager):
        config_manager.add_profile(BackendProfile(name="first", url="http://first:6688"))
        config_manager.add_profile(BackendProfile(name="second", url="http://second:6688"))
        assert config_manager.config.default_profile == "first"

    def test_remove_profile(self, config_manager: ConfigManager, sample_profile: BackendProfile):
        config_manager.add_profile(sample_profile)
        config_manager.remove_profile("test-node")
        assert "test-node" not in config_manager.config.profiles

    def test_remove_nonexistent(self, config_manager: ConfigManager):
        with pytest.raises(ConfigurationError, match="Profile 'nope' not found"):
            config_manager.remove_profile("nope")

    def test_remove_default_reassigns(self, config_manager: ConfigManager):
        config_manager.add_profile(BackendProfile(name="a", url="http://a:6688"))
        config_manager.add_profile(BackendProfile(name="b", url="http://b:6688"))
        config_manager.set_default("a")
        config_manager.remove_profile("a")
        assert config_manager.config.default_profile == "b"

    def test_set_default_nonexistent(self, config_manager: ConfigManager):
        with pytest.raises(ConfigurationError, match="Profile 'nope' not found"):
            config_manager.set_default("nope")

    def test_save_and_reload(self, config_manager: ConfigManager):
        config_manager.add_profile(
            BackendProfile(name="evm", url="http://node:6688", token="tok", chain_type="evm", timeout=5),
        )
        mgr2 = ConfigManager(config_path=config_manager.config_path)
        p = mgr2.get_profile("evm")
        assert p is not None
        assert p.url == "http://node:6688"
        assert p.token == "tok"
        assert p.chain_type == "evm"
        assert p.timeout == 5

    def test_defaults_not_written(self, config_manager: ConfigManager, sample_profile: BackendProfile):
        config_manager.add_profile(sample_profile)
        text = config_manager.config_path.read_text()
        assert "chain_type" not in text
        assert "timeout" not in text
        assert "verify_ssl" not in text

    def test_corrupt_file(self, tmp_config):
        tmp_config.write_text("not = [valid")
        with pytest.raises(ConfigurationError, match="Cannot read config file"):
            ConfigManager(config_path=tmp_config).config

    def test_resolve_from_profile(self, config_manager: ConfigManager, sample_profile: BackendProfile):
        config_manager.add_profile(sample_profile)
        resolved = config_manager.resolve_profile()
        assert resolved.url == "http://node:6688"
        assert resolved.token == "testtoken"
        assert resolved.chain_type == "solana"

    def test_resolve_cli_overrides(self, config_manager: ConfigManager, sample_profile: BackendProfile):
        config_manager.add_profile(sample_profile)
        resolved = config_manager.resolve_profile(url="http://other:6688", token="new")
        assert resolved.url == "http://other:6688"
        assert resolved.token == "new"

    def test_resolve_env_vars(self, config_manager: ConfigManager, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("CHAIN_CLI_URL", "http://env-node:6688")
        monkeypatch.setenv("CHAIN_CLI_TOKEN", "env-token")
        resolved = config_manager.resolve_profile()
        assert resolved.url == "http://env-node:6688"
        assert resolved.token == "env-token"

    def test_resolve_unknown_profile(self, config_manager: ConfigManager):
        with pytest.raises(ConfigurationError, match="Profile 'ghost' not found"):
            config_manager.resolve_profile(profile_name="ghost", url="http://node:6688")

    def test_resolve_no_url_raises(self, config_manager: ConfigManager):
        with pytest.raises(ConfigurationError, match="No backend URL configured"):
            config_manager.resolve_profile()

    def test_non_default_values_are_written(self, config_manager: ConfigManager):
        config_manager.add_profile(
            BackendProfile(name="lab", url="http://lab:6688", verify_ssl=False, chain_type="evm"),
        )
        text = config_manager.config_path.read_text()
        assert "verify_ssl = false" in text
        assert 'chain_type = "evm"' in text
        assert "timeout" not in text

    def test_resolve_keeps_profile_settings_under_flag_url(self, config_manager: ConfigManager):
        config_manager.add_profile(
            BackendProfile(name="evm", url="http://node:6688", chain_type="evm", timeout=5),
        )
        resolved = config_manager.resolve_profile(url="http://other:6688/")
        assert resolved.name == "evm"
        assert resolved.url == "http://other:6688"
        assert resolved.chain_type == "evm"
        assert resolved.timeout == 5

    def test_resolve_named_profile_from_env(self, config_manager: ConfigManager, monkeypatch: pytest.MonkeyPatch):
        config_manager.add_profile(BackendProfile(name="a", url="http://a:6688"))
        config_manager.add_profile(BackendProfile(name="b", url="http://b:6688"))
        monkeypatch.setenv("CHAIN_CLI_PROFILE", "b")
        assert config_manager.resolve_profile().url == "http://b:6688"
