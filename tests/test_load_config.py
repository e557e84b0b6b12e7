"""Tests for configuration loading and merging."""

from pathlib import Path

import pytest
import yaml

from docbuilder.deep_merge import deep_merge
from docbuilder.errors import ConfigError
from docbuilder.load_config import DEFAULT_CONFIG, load_config


def test_deep_merge_scalars() -> None:
    """Verify scalar replacement in deep merge."""
    base = {"a": 1, "b": 2}
    update = {"b": 3, "c": 4}
    merged = deep_merge(base, update)
    assert merged == {"a": 1, "b": 3, "c": 4}


def test_deep_merge_nested() -> None:
    """Verify recursive merging of dictionaries."""
    base = {"remote": {"enabled": True, "timeout": 10.0}}
    update = {"remote": {"timeout": 2.5, "connect_timeout": 1.0}}
    merged = deep_merge(base, update)
    assert merged == {"remote": {"enabled": True, "timeout": 2.5, "connect_timeout": 1.0}}


def test_deep_merge_arrays_replace() -> None:
    """Verify that arrays are replaced, not concatenated."""
    merged = deep_merge({"arr": [1, 2]}, {"arr": [3]})
    assert merged == {"arr": [3]}


def test_deep_merge_null_keeps_base() -> None:
    """An empty YAML section leaves the defaults untouched."""
    merged = deep_merge({"site": {"title_suffix": ""}}, {"site": None, "extra": None})
    assert merged == {"site": {"title_suffix": ""}, "extra": None}


def test_load_config_defaults() -> None:
    """Verify that default config is loaded when no path is provided."""
    config = load_config(None)
    assert config == DEFAULT_CONFIG
    assert config["xref_service"] == "https://xref.docs.microsoft.com/query"
    assert config["page_extension"] == ".md"


def test_load_config_does_not_share_defaults() -> None:
    """Changing a loaded config never leaks into the defaults."""
    config = load_config(None)
    config["remote"]["enabled"] = False
    assert DEFAULT_CONFIG["remote"]["enabled"] is True


def test_load_config_with_file(tmp_path: Path) -> None:
    """Verify that user config correctly overrides defaults."""
    config_file = tmp_path / "config.yml"
    config_data = {
        "remote": {"timeout": 3.0},
        "cache_dir": "xref-cache",
        "site": {"title_suffix": " | API"},
    }
    config_file.write_text(yaml.dump(config_data))

    loaded = load_config(str(config_file))
    assert loaded["remote"] == {"enabled": True, "timeout": 3.0, "connect_timeout": 5.0}
    assert loaded["cache_dir"] == "xref-cache"
    assert loaded["site"]["title_suffix"] == " | API"


def test_load_config_missing_file(tmp_path: Path) -> None:
    """A config path that does not exist falls back to the defaults."""
    assert load_config(str(tmp_path / "absent.yml")) == DEFAULT_CONFIG


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    """A config file must be a YAML mapping."""
    config_file = tmp_path / "config.yml"
    config_file.write_text("- just\n- a list\n")
    with pytest.raises(ConfigError, match="mapping"):
        load_config(str(config_file))
