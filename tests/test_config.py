"""Tests for completion config loading and saving."""

import json

from fileshell.config import CompletionConfig, ConfigManager


def test_defaults(tmp_path):
    """Test a missing file gives default settings."""
    manager = ConfigManager(tmp_path / "config.json")
    assert manager.config.use_vim_help is False
    assert manager.config.options == {}


def test_save_and_load(tmp_path):
    """Test settings survive a save and reload."""
    path = tmp_path / "config.json"
    manager = ConfigManager(path)
    manager.update(use_vim_help=True, options={"wrap": "bool"})

    reloaded = ConfigManager(path)
    assert reloaded.config.use_vim_help is True
    assert reloaded.config.options == {"wrap": "bool"}


def test_unknown_keys_ignored(tmp_path):
    """Test unknown keys do not break loading."""
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"colors_dir": "/tmp/colors", "bogus": 1}))

    manager = ConfigManager(path)
    assert manager.config.colors_dir == "/tmp/colors"


def test_corrupt_file_falls_back(tmp_path):
    """Test a malformed file falls back to defaults."""
    path = tmp_path / "config.json"
    path.write_text("{not json")

    manager = ConfigManager(path)
    assert manager.config == CompletionConfig(home_dir=manager.config.home_dir)


def test_round_trip_dict():
    """Test dictionary conversion keeps every field."""
    config = CompletionConfig(home_dir="/home/x", variables=["v:count"])
    assert CompletionConfig.from_dict(config.to_dict()) == config
