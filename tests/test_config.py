"""Tests for configuration loading and validation."""

import logging

import pytest
import yaml

from sedcluster.config import (
    ConfigManager,
    SedConfig,
    create_default_config_file,
    load_config,
)


class TestSedConfig:
    """Test SedConfig dataclass."""

    def test_defaults(self):
        config = SedConfig()

        assert config.encoding == "utf-8"
        assert config.workers == 1
        assert config.use_processes is False
        assert config.reuse_existing is True
        assert config.log_level == "INFO"

    def test_round_trip_dict(self):
        config = SedConfig(workers=4, reuse_existing=False)
        assert SedConfig.from_dict(config.to_dict()) == config

    def test_from_dict_ignores_unknown_keys(self, caplog):
        with caplog.at_level(logging.WARNING, logger="sedcluster.config"):
            config = SedConfig.from_dict({"workers": 2, "alpha": 1.2})

        assert config.workers == 2
        assert "alpha" in caplog.text

    def test_from_dict_none(self):
        assert SedConfig.from_dict(None) == SedConfig()

    def test_validation_valid(self):
        assert SedConfig().validate() is True

    @pytest.mark.parametrize("kwargs,fragment", [
        ({"workers": -1}, "workers"),
        ({"log_level": "LOUD"}, "log_level"),
        ({"encoding": "no-such-codec"}, "encoding"),
    ])
    def test_validation_invalid(self, kwargs, fragment):
        config = SedConfig(**kwargs)
        assert config.validate() is False
        assert any(fragment in e for e in config.errors())


class TestConfigManager:
    """Test ConfigManager functionality."""

    @pytest.fixture
    def config_file(self, tmp_path):
        path = tmp_path / ".sedcluster.yml"
        path.write_text(yaml.safe_dump({"workers": 3, "use_processes": True}))
        return path

    def test_load_existing(self, config_file):
        config = ConfigManager(config_file).load()
        assert config.workers == 3
        assert config.use_processes is True
        assert config.reuse_existing is True

    def test_load_missing_uses_defaults(self, tmp_path):
        assert ConfigManager(tmp_path / "none.yml").load() == SedConfig()

    def test_load_empty_file(self, tmp_path):
        path = tmp_path / "empty.yml"
        path.write_text("")
        assert ConfigManager(path).load() == SedConfig()

    def test_save(self, tmp_path):
        path = tmp_path / "out.yml"
        ConfigManager(path).save(SedConfig(workers=8))
        assert yaml.safe_load(path.read_text())["workers"] == 8

    def test_update(self, config_file):
        manager = ConfigManager(config_file)
        config = manager.update(workers=5)
        assert config.workers == 5

    def test_update_unknown_parameter(self, config_file):
        with pytest.raises(KeyError):
            ConfigManager(config_file).update(unknown_param=1)

    def test_reset(self, config_file):
        manager = ConfigManager(config_file)
        manager.update(workers=5)
        assert manager.reset() == SedConfig()

    def test_display(self, config_file, capsys):
        ConfigManager(config_file).display()
        assert "workers" in capsys.readouterr().out


def test_create_default_config_file(tmp_path):
    path = create_default_config_file(tmp_path / "default.yml")
    assert load_config(path) == SedConfig()
