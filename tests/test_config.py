"""Tests for configuration loading, saving, and merging."""

import json
import tempfile
from pathlib import Path

import pytest

from sesh_switcher.config import (
    CONFIG_DIR,
    CONFIG_PATH,
    get_config_dir,
    get_config_path,
    load_config,
    merge_configs,
    save_config,
)
from sesh_switcher.exceptions import ConfigLoadError, ConfigValidationError
from sesh_switcher.models import SwitcherConfig


class TestMergeConfigs:
    """Test configuration merging logic."""

    def test_scalar_override(self):
        result = merge_configs({"key": "file"}, {"key": "flag"})
        assert result["key"] == "flag"

    def test_none_does_not_override(self):
        result = merge_configs({"standalone": True}, {"standalone": None})
        assert result["standalone"] is True

    def test_nested_dicts_merge(self):
        result = merge_configs({"a": {"x": 1, "y": 2}}, {"a": {"y": 3}})
        assert result == {"a": {"x": 1, "y": 3}}

    def test_base_is_not_mutated(self):
        base = {"a": {"x": 1}}
        merge_configs(base, {"a": {"x": 2}})
        assert base == {"a": {"x": 1}}


class TestLoadConfig:
    def test_missing_file_gives_defaults(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config = load_config(Path(tmpdir) / "missing.json")
            assert config == SwitcherConfig()

    def test_values_from_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "config.json"
            path.write_text(json.dumps({"standalone": True, "tmux_binary": "/opt/tmux"}))
            config = load_config(path)
            assert config.standalone is True
            assert config.tmux_binary == "/opt/tmux"
            assert config.poll_interval_ms == 1000

    def test_overrides_win(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "config.json"
            path.write_text(json.dumps({"standalone": False}))
            config = load_config(path, overrides={"standalone": True})
            assert config.standalone is True

    def test_invalid_json(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "config.json"
            path.write_text("{not json")
            with pytest.raises(ConfigLoadError) as exc_info:
                load_config(path)
            assert exc_info.value.context["file_path"] == str(path)

    def test_not_an_object(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "config.json"
            path.write_text("[1, 2]")
            with pytest.raises(ConfigValidationError):
                load_config(path)

    def test_unknown_key(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "config.json"
            path.write_text(json.dumps({"colour": "blue"}))
            with pytest.raises(ConfigValidationError):
                load_config(path)

    def test_wrong_type(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "config.json"
            path.write_text(json.dumps({"poll_interval_ms": "fast"}))
            with pytest.raises(ConfigValidationError):
                load_config(path)


class TestSaveConfig:
    def test_round_trip(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "nested" / "config.json"
            save_config(SwitcherConfig(default_layout="compact"), path)
            assert path.exists()
            assert load_config(path).default_layout == "compact"


class TestPaths:
    def test_paths(self):
        assert get_config_dir() == CONFIG_DIR
        assert get_config_path() == CONFIG_PATH
        assert CONFIG_PATH.parent == CONFIG_DIR
